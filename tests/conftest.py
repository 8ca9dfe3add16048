"""Shared fixtures: an on-disk copy of the template and isolated tool directories."""

import os

import pytest

TEMPLATE_FILES = {
    "CLAUDE.md": (
        "# CLAUDE.md - [PROJECT_NAME]\n"
        "\n"
        "[PROJECT_DESCRIPTION]\n"
        "\n"
        "- Language: [PRIMARY_LANGUAGE]\n"
        "- Build: `[BUILD_COMMAND]`\n"
        "- Test: `[TEST_COMMAND]`\n"
        "- Test all: `[TEST_ALL_COMMAND]`\n"
        "- Lint: `[LINT_COMMAND]`\n"
        "- Run: `[RUN_COMMAND]`\n"
        "- Dev: `[DEV_COMMAND]`\n"
        "\n"
        "- [ ] Fill in components\n"
    ),
    "README.md": "# AI Pilot Template\n\nStart here to build [PROJECT_NAME].\n",
    "planning-docs/PROJECT_OVERVIEW.md": "# [PROJECT_NAME] Overview\n\n[PROJECT_DESCRIPTION]\n",
    "planning-docs/ROADMAP.md": "# Roadmap for [PROJECT_NAME]\n\nRun `[TEST_COMMAND]` before each release.\n",
    "planning-docs/planning-maintainer/notes.md": "maintainer notes\n",
    "docs/ARCHITECTURE.md": "# Architecture\n",
    "templates/web-app.md": "# CLAUDE.md - [PROJECT_NAME] web app\n\nDev server: `[DEV_COMMAND]`\n",
    "agents/project-manager.md": "project manager prompt\n",
    "agents/test-analyst.md": "test analyst prompt\n",
    "agents/README.txt": "not an agent\n",
    "setup.sh": "#!/bin/bash\n",
    "cleanup.sh": "#!/bin/bash\n",
    ".templateignore": "*.bak\n",
    "QUICK_START.md": "# Quick start\n",
    "SHARING.md": "# Sharing\n",
    "CLAUDE-TEMPLATE.md": "# Template guide\n",
}


def write_tree(root, files: dict[str, str]) -> None:
    """Write each relative path -> content pair under root."""
    for rel, content in files.items():
        path = os.path.join(str(root), rel)
        os.makedirs(os.path.dirname(path), exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            f.write(content)


def read(root, rel: str) -> str:
    with open(os.path.join(str(root), rel), "r", encoding="utf-8") as f:
        return f.read()


@pytest.fixture(autouse=True)
def isolated_dirs(tmp_path, monkeypatch):
    """Keep logs and installed agents out of the real home directory."""
    logs = tmp_path / "logs"
    agents = tmp_path / "installed-agents"
    monkeypatch.setenv("AI_PILOT_LOG_DIR", str(logs))
    monkeypatch.setenv("AI_PILOT_AGENTS_DIR", str(agents))
    return {"logs": logs, "agents": agents}


@pytest.fixture
def template_dir(tmp_path):
    """A project directory populated with the template's files."""
    root = tmp_path / "my-app"
    root.mkdir()
    write_tree(root, TEMPLATE_FILES)
    return root


@pytest.fixture
def git_identity(monkeypatch, tmp_path):
    """Commit identity and an empty git config, independent of the machine's settings."""
    monkeypatch.setenv("HOME", str(tmp_path))
    monkeypatch.setenv("GIT_CONFIG_NOSYSTEM", "1")
    monkeypatch.setenv("GIT_CONFIG_GLOBAL", os.devnull)
    for var in ("GIT_AUTHOR_NAME", "GIT_COMMITTER_NAME"):
        monkeypatch.setenv(var, "Test User")
    for var in ("GIT_AUTHOR_EMAIL", "GIT_COMMITTER_EMAIL"):
        monkeypatch.setenv(var, "test@example.com")
