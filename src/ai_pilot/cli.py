"""CLI app definition and command registration."""

import os
from typing import Annotated

import typer

from ai_pilot.placeholders import scan_unresolved
from ai_pilot.utils import console
from ai_pilot.version import get_version


def _version_callback(value: bool):
    if value:
        console.print(get_version())
        raise typer.Exit()


app = typer.Typer(
    help="Set up and clean up projects created from the AI Pilot Template.",
    no_args_is_help=True,
)


@app.callback()
def main(
    version: Annotated[
        bool,
        typer.Option("--version", "-v", help="Show version and exit.", callback=_version_callback, is_eager=True),
    ] = False,
) -> None:
    """AI Pilot Template project scaffolding."""

# Register commands from submodules
from ai_pilot import cleanup as _cleanup_mod
from ai_pilot import project_setup as _setup_mod

_setup_mod.register(app)
_cleanup_mod.register(app)


# ============================================
# Commands
# ============================================


@app.command()
def check(
    directory: Annotated[str, typer.Argument(help="Project directory to scan")] = ".",
) -> None:
    """List placeholders left in CLAUDE.md, README.md and planning-docs/. Exits 1 if any remain."""
    root = os.path.abspath(os.path.expanduser(directory))
    if not os.path.isdir(root):
        console.print(f"ERROR: Directory not found: {root}", style="bold red")
        raise typer.Exit(1)

    unresolved = scan_unresolved(root)
    if not unresolved:
        console.print("✓ No unresolved placeholders.", style="green")
        return

    console.print(f"Unresolved placeholders in {len(unresolved)} file(s):", style="bold yellow")
    for rel, tokens in unresolved.items():
        console.print(f"  {rel}: {', '.join(tokens)}")
    raise typer.Exit(1)
