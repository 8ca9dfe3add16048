"""Tests for placeholder detection, literal substitution, and project scanning."""

import os

from ai_pilot.config import ProjectSettings, build_placeholder_values
from ai_pilot.placeholders import (
    find_placeholders,
    replace_placeholders,
    scan_unresolved,
    substitute_file,
    substitute_project,
    substitution_targets,
)

from conftest import read, write_tree


# --- find_placeholders ---

def test_finds_sorted_unique_tokens():
    text = "[RUN_COMMAND] then [BUILD_COMMAND] and [RUN_COMMAND] again"
    assert find_placeholders(text) == ["[BUILD_COMMAND]", "[RUN_COMMAND]"]


def test_checkboxes_and_prose_brackets_are_not_placeholders():
    text = "- [ ] todo\n- [x] done\n- [X] shipped\n[Your license here]\n[Add your contribution guidelines]\n"
    assert find_placeholders(text) == []


def test_token_with_digits_is_a_placeholder():
    assert find_placeholders("Port [PORT_8080]") == ["[PORT_8080]"]


def test_token_must_start_with_a_letter():
    assert find_placeholders("[1ST_ITEM] [_PRIVATE]") == []


# --- replace_placeholders ---

def test_replaces_every_occurrence():
    values = {"[PROJECT_NAME]": "acme"}
    assert replace_placeholders("[PROJECT_NAME]/[PROJECT_NAME]", values) == "acme/acme"


def test_unknown_tokens_are_left_in_place():
    values = {"[PROJECT_NAME]": "acme"}
    assert replace_placeholders("[PROJECT_NAME] [OWNER]", values) == "acme [OWNER]"


def test_values_with_sed_metacharacters_are_inserted_verbatim():
    values = {"[BUILD_COMMAND]": r"make && cp a|b /tmp/out \1 &"}
    result = replace_placeholders("Build: [BUILD_COMMAND]", values)
    assert result == r"Build: make && cp a|b /tmp/out \1 &"


def test_value_that_looks_like_a_token_is_not_substituted_again():
    values = {"[PROJECT_NAME]": "[TEST_COMMAND]", "[TEST_COMMAND]": "pytest"}
    assert replace_placeholders("[PROJECT_NAME] [TEST_COMMAND]", values) == "[TEST_COMMAND] pytest"


def test_empty_values_returns_text_unchanged():
    assert replace_placeholders("[PROJECT_NAME]", {}) == "[PROJECT_NAME]"


def test_test_all_command_shares_test_command():
    values = build_placeholder_values(ProjectSettings(language="go"))
    assert replace_placeholders("[TEST_ALL_COMMAND]", values) == "go test ./..."


# --- substitute_file ---

def test_substitute_file_rewrites_in_place_without_bak_file(tmp_path):
    write_tree(tmp_path, {"CLAUDE.md": "# [PROJECT_NAME]\n"})
    assert substitute_file(str(tmp_path / "CLAUDE.md"), {"[PROJECT_NAME]": "acme"}) is True
    assert read(tmp_path, "CLAUDE.md") == "# acme\n"
    assert sorted(os.listdir(tmp_path)) == ["CLAUDE.md"]


def test_substitute_file_missing_file_returns_false(tmp_path):
    assert substitute_file(str(tmp_path / "nope.md"), {"[PROJECT_NAME]": "acme"}) is False
    assert not (tmp_path / "nope.md").exists()


# --- substitution_targets / substitute_project ---

def test_targets_list_fixed_files_then_planning_docs(template_dir):
    targets = substitution_targets(str(template_dir))
    overview = os.path.join("planning-docs", "PROJECT_OVERVIEW.md")
    assert targets[:3] == ["CLAUDE.md", overview, "README.md"]
    assert os.path.join("planning-docs", "ROADMAP.md") in targets
    assert targets.count(overview) == 1


def test_substitute_project_resolves_every_mapped_token(template_dir):
    values = build_placeholder_values(ProjectSettings(name="acme", language="python"))
    processed = substitute_project(str(template_dir), values)
    assert "CLAUDE.md" in processed
    assert scan_unresolved(str(template_dir)) == {}
    claude = read(template_dir, "CLAUDE.md")
    assert "# CLAUDE.md - acme" in claude
    assert "- Test all: `pytest`" in claude
    assert "- [ ] Fill in components" in claude


def test_substitute_project_skips_missing_files(tmp_path):
    write_tree(tmp_path, {"CLAUDE.md": "[PROJECT_NAME]\n"})
    processed = substitute_project(str(tmp_path), {"[PROJECT_NAME]": "acme"})
    assert processed == ["CLAUDE.md"]


# --- scan_unresolved ---

def test_scan_reports_tokens_per_file(template_dir):
    unresolved = scan_unresolved(str(template_dir))
    assert unresolved["README.md"] == ["[PROJECT_NAME]"]
    assert "[DEV_COMMAND]" in unresolved["CLAUDE.md"]


def test_scan_ignores_missing_and_clean_files(tmp_path):
    write_tree(tmp_path, {"CLAUDE.md": "all done\n"})
    assert scan_unresolved(str(tmp_path), ["CLAUDE.md", "README.md"]) == {}
