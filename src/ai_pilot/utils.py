"""Core utility functions: logging, prompting, command execution, file removal."""

import contextlib
import os
import shutil
import subprocess
from collections.abc import Generator

import typer
from rich.console import Console

from ai_pilot.config import default_logs_dir

console = Console()


@contextlib.contextmanager
def pushd(path: str) -> Generator[None, None, None]:
    """Context manager that changes to a directory and restores on exit."""
    prev = os.getcwd()
    os.chdir(path)
    try:
        yield
    finally:
        os.chdir(prev)


def resolve_logs_dir() -> str:
    """Find the logs directory, creating it if needed."""
    logs_dir = default_logs_dir()
    os.makedirs(logs_dir, exist_ok=True)
    return logs_dir


def log(step: str, message: str, style: str = "") -> None:
    """Write a message to both the console (with optional style) and the step's log file."""
    if style:
        console.print(message, style=style)
    else:
        console.print(message)

    try:
        logs_dir = resolve_logs_dir()
        log_file = os.path.join(logs_dir, f"{step}.log")
        with open(log_file, "a", encoding="utf-8") as f:
            f.write(message + "\n")
    except Exception:
        pass  # Never break the workflow over logging


def error(step: str, message: str) -> None:
    """Log a bold red ERROR line."""
    log(step, f"ERROR: {message}", style="bold red")


def banner(step: str, title: str, style: str = "bold blue") -> None:
    """Log a title framed by separator lines."""
    log(step, "======================================", style=style)
    log(step, f"  {title}", style=style)
    log(step, "======================================", style=style)


def prompt_with_default(label: str, default: str, assume_default: bool = False) -> str:
    """Prompt for a value, falling back to *default* on empty input.

    With assume_default the prompt is skipped and the default returned.
    """
    if assume_default:
        return default
    value = typer.prompt(label, default=default, show_default=True)
    return value.strip() or default


def confirm(label: str, default: bool = False, assume_yes: bool = False) -> bool:
    """Ask a yes/no question. assume_yes answers it with yes without prompting."""
    if assume_yes:
        return True
    return typer.confirm(label, default=default)


def check_command(name: str) -> bool:
    """Check if a command is available on PATH."""
    return shutil.which(name) is not None


def run_cmd(args: list[str], capture: bool = False) -> subprocess.CompletedProcess:
    """Run a shell command, optionally capturing output."""
    kwargs = {}
    if capture:
        kwargs["stdout"] = subprocess.PIPE
        kwargs["stderr"] = subprocess.PIPE
        kwargs["text"] = True
    return subprocess.run(args, **kwargs)


def remove_path(path: str) -> None:
    """Remove a file, symlink or directory tree. Raises OSError on failure."""
    if os.path.isdir(path) and not os.path.islink(path):
        shutil.rmtree(path)
    else:
        os.remove(path)


def copy_path(src: str, dest_dir: str) -> str:
    """Copy a file or directory tree into dest_dir, keeping its basename.

    Returns the destination path. Raises OSError on failure.
    """
    dest = os.path.join(dest_dir, os.path.basename(os.path.normpath(src)))
    if os.path.isdir(src) and not os.path.islink(src):
        shutil.copytree(src, dest, symlinks=True)
    else:
        shutil.copy2(src, dest, follow_symlinks=False)
    return dest


def read_text(path: str) -> str:
    """Read a UTF-8 text file. Returns '' if it does not exist."""
    if not os.path.isfile(path):
        return ""
    with open(path, "r", encoding="utf-8") as f:
        return f.read()


def write_text(path: str, content: str) -> None:
    """Write a UTF-8 text file, creating parent directories."""
    parent = os.path.dirname(path)
    if parent:
        os.makedirs(parent, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        f.write(content)
