"""Placeholder detection and substitution for template markdown files.

A placeholder is a bracketed upper-case token of two or more characters
such as [PROJECT_NAME]. Checkboxes ([ ], [x], [X]) and bracketed prose
([Your license here]) are not placeholders and are never touched.
"""

import glob
import os
import re

from ai_pilot.config import PLANNING_DIR, SUBSTITUTED_FILES
from ai_pilot.utils import read_text, write_text

PLACEHOLDER_RE = re.compile(r"\[[A-Z][A-Z0-9_]+\]")


def find_placeholders(text: str) -> list[str]:
    """Return the sorted, de-duplicated placeholder tokens in text."""
    return sorted(set(PLACEHOLDER_RE.findall(text)))


def replace_placeholders(text: str, values: dict[str, str]) -> str:
    """Replace every token in *values* with its value.

    Pure function. Replacement is literal, so values containing '/', '&',
    '|' or backslashes are inserted verbatim. Tokens missing from *values*
    are left in place. Values are inserted in a single pass and never
    re-scanned, so a value that looks like a token stays as written.
    """
    if not values:
        return text
    pattern = re.compile("|".join(re.escape(token) for token in sorted(values, key=len, reverse=True)))
    return pattern.sub(lambda match: values[match.group(0)], text)


def substitute_file(path: str, values: dict[str, str]) -> bool:
    """Rewrite a file in place with its placeholders replaced.

    Returns False without touching anything when the file does not exist.
    """
    if not os.path.isfile(path):
        return False
    original = read_text(path)
    updated = replace_placeholders(original, values)
    if updated != original:
        write_text(path, updated)
    return True


def substitution_targets(root: str) -> list[str]:
    """List the files setup substitutes, relative to root, without duplicates.

    CLAUDE.md, planning-docs/PROJECT_OVERVIEW.md and README.md come first,
    followed by every other planning-docs/*.md in name order.
    """
    targets = list(SUBSTITUTED_FILES)
    pattern = os.path.join(root, PLANNING_DIR, "*.md")
    for path in sorted(glob.glob(pattern)):
        rel = os.path.relpath(path, root)
        if rel not in targets:
            targets.append(rel)
    return targets


def substitute_project(root: str, values: dict[str, str]) -> list[str]:
    """Substitute placeholders in every target file under root.

    Returns the relative paths of the files that existed and were processed.
    """
    processed = []
    for rel in substitution_targets(root):
        if substitute_file(os.path.join(root, rel), values):
            processed.append(rel)
    return processed


def scan_unresolved(root: str, files: list[str] | None = None) -> dict[str, list[str]]:
    """Map each file (relative to root) to the placeholders still in it.

    Files without placeholders, and files that do not exist, are omitted.
    Defaults to the files setup substitutes.
    """
    if files is None:
        files = substitution_targets(root)
    unresolved = {}
    for rel in files:
        tokens = find_placeholders(read_text(os.path.join(root, rel)))
        if tokens:
            unresolved[rel] = tokens
    return unresolved
