"""Scaffolding for projects created from the AI Pilot Template."""
