"""Text templates for generated project files."""

from ai_pilot.templates.readme import (
    CLEANUP_README_TEMPLATE,
    PROJECT_README_TEMPLATE,
    TESTS_README,
    render_cleanup_readme,
    render_project_readme,
)

__all__ = [
    "CLEANUP_README_TEMPLATE",
    "PROJECT_README_TEMPLATE",
    "TESTS_README",
    "render_cleanup_readme",
    "render_project_readme",
]
