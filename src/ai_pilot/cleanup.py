"""Cleanup command: remove template-only files once a project has been set up."""

import os
from datetime import datetime
from typing import Annotated

import typer

from ai_pilot.config import (
    BACKUP_DIR_PREFIX,
    KEPT_ITEMS,
    MARKER_FILE,
    TEMPLATE_ITEMS,
    TEMPLATE_README_MARKER,
)
from ai_pilot.templates import render_cleanup_readme
from ai_pilot.utils import banner, confirm, copy_path, error, log, read_text, remove_path, write_text

_STEP = "cleanup"


def register(app: typer.Typer) -> None:
    """Register cleanup commands on the shared app."""
    app.command()(cleanup)


# ============================================
# Pure helpers
# ============================================


def find_template_items(root: str, items: list[str] | None = None) -> list[str]:
    """Return the template-only items that exist under root, in list order."""
    if items is None:
        items = TEMPLATE_ITEMS
    return [item for item in items if os.path.lexists(os.path.join(root, item))]


def backup_dir_name(now: datetime) -> str:
    """Name of the backup directory for a cleanup started at *now*."""
    return f"{BACKUP_DIR_PREFIX}{now.strftime('%Y%m%d-%H%M%S')}"


def readme_is_template(content: str) -> bool:
    """True when README content still describes the template rather than the project."""
    return TEMPLATE_README_MARKER in content


def project_name_from_claude_md(content: str, fallback: str) -> str:
    """Derive the project name from the first '# ' heading of CLAUDE.md.

    Pure function: the literal text 'CLAUDE.md' is stripped from the heading
    (template headings read '# CLAUDE.md' or '# CLAUDE.md - My Project').
    Returns *fallback* when no usable heading exists.
    """
    for line in content.splitlines():
        if line.startswith("# "):
            name = line[2:].replace("CLAUDE.md", "").strip().strip("-:").strip()
            return name or fallback
    return fallback


# ============================================
# Filesystem steps
# ============================================


def backup_items(root: str, items: list[str], now: datetime | None = None) -> str:
    """Copy each item into a fresh timestamped backup directory under root.

    A second backup within the same second gets a -1, -2, ... suffix so it
    never lands in an existing directory. Returns the backup directory path.
    Raises OSError on failure.
    """
    base = os.path.join(root, backup_dir_name(now or datetime.now()))
    backup_dir = base
    counter = 1
    while os.path.lexists(backup_dir):
        backup_dir = f"{base}-{counter}"
        counter += 1
    os.makedirs(backup_dir)
    for item in items:
        path = os.path.join(root, item)
        if os.path.lexists(path):
            copy_path(path, backup_dir)
    return backup_dir


def remove_items(root: str, items: list[str], step: str = _STEP) -> list[str]:
    """Delete each item under root, logging as it goes.

    Returns the items actually removed. Raises OSError on the first failure.
    """
    removed = []
    for item in items:
        path = os.path.join(root, item)
        if not os.path.lexists(path):
            continue
        label = f"{item}/" if os.path.isdir(path) else item
        remove_path(path)
        log(step, f"  ✓ Removed {label}", style="green")
        removed.append(item)
    return removed


def _print_found_items(root: str, found: list[str]) -> None:
    for item in found:
        if os.path.isdir(os.path.join(root, item)):
            log(_STEP, f"  📁 {item}/ (directory)", style="yellow")
        else:
            log(_STEP, f"  📄 {item}", style="yellow")


def _print_kept_items() -> None:
    log(_STEP, "The following will be KEPT:", style="green")
    for item, note in KEPT_ITEMS:
        log(_STEP, f"  ✓ {item} ({note})" if note else f"  ✓ {item}")


def _maybe_rewrite_readme(root: str, readme: bool | None, assume_yes: bool) -> bool:
    """Offer to replace a template README. Returns True if it was rewritten."""
    readme_path = os.path.join(root, "README.md")
    if not readme_is_template(read_text(readme_path)):
        return False
    log(_STEP, "")
    log(_STEP, "⚠️  Your README.md still contains template information.", style="yellow")
    if readme is None:
        readme = confirm("Would you like to create a project-specific README?", assume_yes=assume_yes)
    if not readme:
        return False
    fallback = os.path.basename(os.path.abspath(root))
    name = project_name_from_claude_md(read_text(os.path.join(root, MARKER_FILE)), fallback)
    write_text(readme_path, render_cleanup_readme(name))
    log(_STEP, "✓ Created project-specific README.md", style="green")
    return True


# ============================================
# Command
# ============================================


def run_cleanup(
    directory: str = ".",
    assume_yes: bool = False,
    backup: bool | None = None,
    readme: bool | None = None,
) -> None:
    """Detect and remove template-only files under *directory*.

    backup and readme answer their prompts up front when not None.
    Raises typer.Exit(1) on failure and typer.Exit(0) on cancellation.
    """
    root = os.path.abspath(os.path.expanduser(directory))

    banner(_STEP, "AI Pilot Template Cleanup Utility")
    log(_STEP, "")

    if not os.path.isfile(os.path.join(root, MARKER_FILE)):
        error(_STEP, f"{MARKER_FILE} not found. Are you in the right directory?")
        raise typer.Exit(1)

    log(_STEP, "Scanning for template files...", style="yellow")
    found = find_template_items(root)
    _print_found_items(root, found)

    if not found:
        log(_STEP, "✅ No template files found. Your project is already clean!", style="green")
        return

    log(_STEP, "")
    log(_STEP, f"Found {len(found)} template file(s) to remove.", style="blue")
    log(_STEP, "")
    _print_kept_items()
    log(_STEP, "")

    if not confirm("Remove all template files?", assume_yes=assume_yes):
        log(_STEP, "Cleanup cancelled.", style="yellow")
        raise typer.Exit(0)

    if backup is None:
        backup = confirm("Create backup of template files before removing? (recommended)", assume_yes=assume_yes)

    backup_dir = ""
    try:
        if backup:
            backup_dir = backup_items(root, found)
            log(_STEP, f"✓ Backup created in {os.path.basename(backup_dir)}", style="green")
            log(_STEP, "")

        log(_STEP, "Removing template files...", style="yellow")
        remove_items(root, found)
        _maybe_rewrite_readme(root, readme, assume_yes)
    except OSError as exc:
        error(_STEP, f"Cleanup failed: {exc}")
        raise typer.Exit(1)

    log(_STEP, "")
    banner(_STEP, "Cleanup Complete!")
    log(_STEP, "")
    log(_STEP, f"✅ Removed {len(found)} template file(s)", style="green")
    log(_STEP, "✅ Your project now contains only essential files", style="green")

    if backup_dir:
        name = os.path.basename(backup_dir)
        log(_STEP, "")
        log(_STEP, f"💡 Tip: Template backup saved in {name}", style="yellow")
        log(_STEP, f"   You can remove it with: rm -rf {name}", style="yellow")

    log(_STEP, "")
    log(_STEP, "Your project is ready for development with Claude Code!", style="blue")
    log(_STEP, "")
    log(_STEP, "Next steps:", style="green")
    log(_STEP, "1. Review and update CLAUDE.md if needed")
    log(_STEP, "2. Start coding with: claude code .")
    log(_STEP, "3. Let the agents handle documentation and testing!")


def cleanup(
    directory: Annotated[str, typer.Option(help="Project directory to clean (defaults to the current directory)")] = ".",
    yes: Annotated[bool, typer.Option("--yes", "-y", help="Answer yes to every question")] = False,
    backup: Annotated[
        bool | None,
        typer.Option("--backup/--no-backup", help="Back up template files before removing them"),
    ] = None,
    readme: Annotated[
        bool | None,
        typer.Option("--readme/--no-readme", help="Replace a template README.md with a project README"),
    ] = None,
) -> None:
    """Remove template-only files (setup scripts, templates/, agents/, template docs)."""
    run_cleanup(directory, assume_yes=yes, backup=backup, readme=readme)
