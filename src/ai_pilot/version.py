"""Version information with git commit tracking.

The package version comes from the installed distribution metadata. Build
details (commit count, date, hash, dirty flag) are only reported when the
package is running from its own git checkout, as with an editable install.
A regular install inside some other repository (a project's .venv, say)
reports them as unknown rather than describing that repository.
"""

import os
import subprocess
from importlib.metadata import PackageNotFoundError, version

DISTRIBUTION_NAME = "ai-pilot"

# Root of the source checkout for an editable install: src/ai_pilot/version.py -> repo root.
_REPO_DIR = os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))


def _package_version() -> str:
    try:
        return version(DISTRIBUTION_NAME)
    except PackageNotFoundError:
        return "0.0.0"


PACKAGE_VERSION = _package_version()


def _run_git(*args: str) -> str | None:
    """Run a git command in the source repo directory. Return stdout or None on failure."""
    try:
        result = subprocess.run(
            ["git", "-C", _REPO_DIR, *args],
            capture_output=True,
            text=True,
            timeout=5,
        )
        if result.returncode == 0:
            return result.stdout.strip()
    except (FileNotFoundError, subprocess.TimeoutExpired):
        pass
    return None


def _same_path(a: str, b: str) -> bool:
    return os.path.normcase(os.path.realpath(a)) == os.path.normcase(os.path.realpath(b))


def is_source_checkout() -> bool:
    """True when _REPO_DIR is the top level of a git work tree.

    git -C walks up to the nearest enclosing repository, so a site-packages
    directory inside a user's project would otherwise be mistaken for ours.
    """
    toplevel = _run_git("rev-parse", "--show-toplevel")
    return bool(toplevel) and _same_path(toplevel, _REPO_DIR)


def format_version(build: str, date: str, commit: str, dirty: bool) -> str:
    """Pure formatter: '1.0.0 build 12 (2026-10-17 g3a7f2c1+dirty)'."""
    suffix = "+dirty" if dirty else ""
    return f"{PACKAGE_VERSION} build {build} ({date} g{commit}{suffix})"


def get_version() -> str:
    """Return the version string, with build details from the tool's own checkout only."""
    if not is_source_checkout():
        return format_version("0", "unknown", "unknown", False)
    commit = _run_git("rev-parse", "--short", "HEAD") or "unknown"
    date = _run_git("log", "-1", "--format=%cs") or "unknown"
    build = _run_git("rev-list", "--count", "HEAD") or "0"
    dirty = (_run_git("status", "--porcelain") or "") != ""
    return format_version(build, date, commit, dirty)
