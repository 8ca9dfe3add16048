"""Configuration constants for the AI Pilot Template scaffolding tool.

Language command defaults, project types, the placeholder map, and the
lists of files that belong to the template rather than to the project.
"""

import os
from dataclasses import dataclass

# ---------------------------------------------------------------------------
# Languages and project types
# ---------------------------------------------------------------------------

LANGUAGE_CONFIGS = {
    "javascript": {
        "label": "JavaScript",
        "commands": {
            "build": "npm run build",
            "test": "npm test",
            "lint": "npm run lint",
            "run": "npm start",
            "dev": "npm run dev",
        },
    },
    "typescript": {
        "label": "TypeScript",
        "commands": {
            "build": "npm run build",
            "test": "npm test",
            "lint": "npm run lint",
            "run": "npm start",
            "dev": "npm run dev",
        },
    },
    "python": {
        "label": "Python",
        "commands": {
            "build": "python setup.py build",
            "test": "pytest",
            "lint": "flake8 .",
            "run": "python main.py",
            "dev": "python -m flask run --debug",
        },
    },
    "go": {
        "label": "Go",
        "commands": {
            "build": "go build",
            "test": "go test ./...",
            "lint": "golangci-lint run",
            "run": "./main",
            "dev": "go run main.go",
        },
    },
    "other": {
        "label": "Other",
        "commands": {
            "build": "make build",
            "test": "make test",
            "lint": "make lint",
            "run": "./run.sh",
            "dev": "make dev",
        },
    },
}

VALID_LANGUAGES = list(LANGUAGE_CONFIGS.keys())

PROJECT_TYPES = ["web-app", "api-service", "cli-tool", "library", "generic"]

COMMAND_KINDS = ("build", "test", "lint", "run", "dev")


def default_commands(language: str) -> dict[str, str]:
    """Return the default build/test/lint/run/dev commands for a language.

    Unknown languages get the make-based defaults of 'other'.
    """
    config = LANGUAGE_CONFIGS.get(language.strip().lower(), LANGUAGE_CONFIGS["other"])
    return dict(config["commands"])


def language_label(language: str) -> str:
    """Display name for a language; unknown languages show as 'Other'."""
    return LANGUAGE_CONFIGS.get(language.strip().lower(), LANGUAGE_CONFIGS["other"])["label"]


# ---------------------------------------------------------------------------
# Project settings and placeholder values
# ---------------------------------------------------------------------------

@dataclass
class ProjectSettings:
    """Answers gathered by the setup wizard."""

    name: str = "my-project"
    description: str = "A new software project"
    project_type: str = "generic"
    language: str = "javascript"
    build_command: str = ""
    test_command: str = ""
    lint_command: str = ""
    run_command: str = ""
    dev_command: str = ""

    def __post_init__(self) -> None:
        defaults = default_commands(self.language)
        for kind in COMMAND_KINDS:
            attr = f"{kind}_command"
            if not getattr(self, attr):
                setattr(self, attr, defaults[kind])


def build_placeholder_values(settings: ProjectSettings) -> dict[str, str]:
    """Map each [TOKEN] to the value it is replaced with.

    [TEST_ALL_COMMAND] shares the test command.
    """
    return {
        "[PROJECT_NAME]": settings.name,
        "[PROJECT_DESCRIPTION]": settings.description,
        "[PRIMARY_LANGUAGE]": settings.language,
        "[BUILD_COMMAND]": settings.build_command,
        "[TEST_COMMAND]": settings.test_command,
        "[TEST_ALL_COMMAND]": settings.test_command,
        "[LINT_COMMAND]": settings.lint_command,
        "[RUN_COMMAND]": settings.run_command,
        "[DEV_COMMAND]": settings.dev_command,
    }


# ---------------------------------------------------------------------------
# Template layout
# ---------------------------------------------------------------------------

TEMPLATE_DIR_NAME = "ai-pilot-template"

# Present in every project created from the template; setup and cleanup refuse to run without it.
MARKER_FILE = "CLAUDE.md"

# README.md files that still contain this text have not been customized yet.
TEMPLATE_README_MARKER = "AI Pilot Template"

PLANNING_DIR = "planning-docs"
LEGACY_PLANNING_AGENT_DIR = os.path.join(PLANNING_DIR, "planning-maintainer")
PLANNING_AGENT_DIR = os.path.join(PLANNING_DIR, "project-manager")

# Files substituted by setup, besides every planning-docs/*.md.
SUBSTITUTED_FILES = ["CLAUDE.md", os.path.join(PLANNING_DIR, "PROJECT_OVERVIEW.md"), "README.md"]

TEMPLATE_ITEMS = [
    "setup.sh",
    "cleanup.sh",
    ".templateignore",
    "QUICK_START.md",
    "SHARING.md",
    "CLAUDE-TEMPLATE.md",
    "templates",
    "agents",
]

KEPT_ITEMS = [
    ("CLAUDE.md", "your project configuration"),
    ("planning-docs/", "project planning documents"),
    ("docs/", "project documentation"),
    ("tests/", "test structure"),
    (".git/", "git repository"),
    ("Any project source code", ""),
]

TEST_DIRS = ["unit", "integration", "e2e", "performance", "security", "fixtures"]

INITIAL_COMMIT_MESSAGE = "Initial commit from AI Pilot Template"

BACKUP_DIR_PREFIX = ".template-backup-"


# ---------------------------------------------------------------------------
# Environment-driven locations
# ---------------------------------------------------------------------------

def agents_install_dir() -> str:
    """Directory the agent prompt files are installed into.

    AI_PILOT_AGENTS_DIR overrides the default of ~/.claude/agents.
    """
    override = os.environ.get("AI_PILOT_AGENTS_DIR", "")
    if override:
        return os.path.expanduser(override)
    return os.path.join(os.path.expanduser("~"), ".claude", "agents")


def default_logs_dir() -> str:
    """Directory command logs are written to (AI_PILOT_LOG_DIR or ~/.ai-pilot/logs)."""
    override = os.environ.get("AI_PILOT_LOG_DIR", "")
    if override:
        return os.path.expanduser(override)
    return os.path.join(os.path.expanduser("~"), ".ai-pilot", "logs")
