from ai_pilot.cli import app

app()
