"""Setup command: turn a checkout of the template into a configured project."""

import os
import shutil
from typing import Annotated

import typer

from ai_pilot.cleanup import readme_is_template, remove_items
from ai_pilot.config import (
    INITIAL_COMMIT_MESSAGE,
    LANGUAGE_CONFIGS,
    LEGACY_PLANNING_AGENT_DIR,
    MARKER_FILE,
    PLANNING_AGENT_DIR,
    PROJECT_TYPES,
    TEMPLATE_DIR_NAME,
    TEMPLATE_ITEMS,
    TEST_DIRS,
    VALID_LANGUAGES,
    ProjectSettings,
    agents_install_dir,
    build_placeholder_values,
    default_commands,
    language_label,
)
from ai_pilot.placeholders import scan_unresolved, substitute_project
from ai_pilot.templates import TESTS_README, render_project_readme
from ai_pilot.utils import (
    banner,
    check_command,
    confirm,
    error,
    log,
    prompt_with_default,
    pushd,
    read_text,
    run_cmd,
    write_text,
)

_STEP = "setup"


def register(app: typer.Typer) -> None:
    """Register setup commands on the shared app."""
    app.command(name="setup")(setup)


# ============================================
# Gathering settings
# ============================================


def gather_settings(
    name: str | None = None,
    description: str | None = None,
    project_type: str | None = None,
    language: str | None = None,
    commands: dict[str, str | None] | None = None,
    customize: bool | None = None,
    assume_defaults: bool = False,
) -> ProjectSettings:
    """Build ProjectSettings, prompting for every value not given up front.

    commands maps build/test/lint/run/dev to explicit overrides; an explicit
    override wins over both the language default and the customize prompt.
    """
    defaults = ProjectSettings()
    name = name or prompt_with_default("Project name", defaults.name, assume_defaults)
    description = description or prompt_with_default(
        "Project description", defaults.description, assume_defaults
    )
    project_type = project_type or prompt_with_default(
        f"Project type ({'/'.join(PROJECT_TYPES)})", defaults.project_type, assume_defaults
    )
    language = language or prompt_with_default(
        f"Primary language ({'/'.join(VALID_LANGUAGES)})", defaults.language, assume_defaults
    )
    if project_type not in PROJECT_TYPES:
        log(_STEP, f"Unknown project type '{project_type}'; CLAUDE.md is used as-is.", style="yellow")
    if language.strip().lower() not in LANGUAGE_CONFIGS:
        log(_STEP, f"Unknown language '{language}'; using make-based commands.", style="yellow")

    resolved = default_commands(language)
    log(_STEP, "")
    log(_STEP, f"Default commands for {language_label(language)}:", style="yellow")
    log(_STEP, f"Build: {resolved['build']}")
    log(_STEP, f"Test: {resolved['test']}")
    log(_STEP, f"Lint: {resolved['lint']}")
    log(_STEP, "")

    overrides = {kind: value for kind, value in (commands or {}).items() if value}
    resolved.update(overrides)

    if customize is None:
        customize = False if assume_defaults else confirm("Customize commands?", default=False)
    if customize:
        for kind in resolved:
            if kind not in overrides:
                resolved[kind] = prompt_with_default(f"{kind.capitalize()} command", resolved[kind])

    return ProjectSettings(
        name=name,
        description=description,
        project_type=project_type,
        language=language,
        build_command=resolved["build"],
        test_command=resolved["test"],
        lint_command=resolved["lint"],
        run_command=resolved["run"],
        dev_command=resolved["dev"],
    )


def is_valid_project_name(name: str) -> bool:
    """A project name must be usable as a single directory name."""
    return bool(name) and name not in (".", "..") and os.sep not in name and "/" not in name


# ============================================
# Filesystem steps
# ============================================


def relocate_template(root: str, name: str) -> str:
    """Copy a pristine template checkout to a sibling directory named after the project.

    Returns the directory setup should continue in: the copy when root is
    the template directory itself, otherwise root unchanged. The template's
    .git directory is not copied. Raises FileExistsError if the target
    already exists.
    """
    if os.path.basename(os.path.normpath(root)) != TEMPLATE_DIR_NAME:
        return root
    target = os.path.join(os.path.dirname(os.path.normpath(root)), name)
    if os.path.lexists(target):
        raise FileExistsError(f"{target} already exists")
    shutil.copytree(root, target, symlinks=True, ignore=shutil.ignore_patterns(".git"))
    return target


def next_backup_path(path: str) -> str:
    """Return path + '.bak', or '.bak.N' with the first free N if that is taken."""
    candidate = f"{path}.bak"
    counter = 1
    while os.path.lexists(candidate):
        candidate = f"{path}.bak.{counter}"
        counter += 1
    return candidate


def apply_project_template(root: str, project_type: str) -> str | None:
    """Replace CLAUDE.md with templates/<project_type>.md when one exists.

    The current CLAUDE.md is copied to a backup first so a customized file
    survives a second run. Returns the backup path, or None when no
    template was applied.
    """
    if project_type == "generic":
        return None
    template_path = os.path.join(root, "templates", f"{project_type}.md")
    if not os.path.isfile(template_path):
        return None
    claude_md = os.path.join(root, MARKER_FILE)
    backup_path = ""
    if os.path.isfile(claude_md):
        backup_path = next_backup_path(claude_md)
        shutil.copy2(claude_md, backup_path)
    shutil.copyfile(template_path, claude_md)
    return backup_path


def create_test_layout(root: str) -> bool:
    """Create the tests/ directory tree. Returns True if tests/README.md was written.

    An existing tests/README.md is left untouched.
    """
    tests_dir = os.path.join(root, "tests")
    for sub in TEST_DIRS:
        os.makedirs(os.path.join(tests_dir, sub), exist_ok=True)
    readme_path = os.path.join(tests_dir, "README.md")
    if os.path.exists(readme_path):
        return False
    write_text(readme_path, TESTS_README)
    return True


def install_agents(root: str, dest_dir: str) -> list[str]:
    """Copy agents/*.md into dest_dir. Returns the installed file names.

    A project without an agents/ directory installs nothing.
    """
    agents_dir = os.path.join(root, "agents")
    if not os.path.isdir(agents_dir):
        return []
    os.makedirs(dest_dir, exist_ok=True)
    installed = []
    for filename in sorted(os.listdir(agents_dir)):
        src = os.path.join(agents_dir, filename)
        if filename.endswith(".md") and os.path.isfile(src):
            shutil.copy2(src, os.path.join(dest_dir, filename))
            installed.append(filename)
    return installed


def rename_planning_agent_dir(root: str) -> bool:
    """Rename planning-docs/planning-maintainer to planning-docs/project-manager.

    Does nothing if the old folder is missing or the new one already exists.
    """
    old = os.path.join(root, LEGACY_PLANNING_AGENT_DIR)
    new = os.path.join(root, PLANNING_AGENT_DIR)
    if not os.path.isdir(old) or os.path.lexists(new):
        return False
    os.rename(old, new)
    return True


def remove_template_files(root: str, settings: ProjectSettings) -> list[str]:
    """Remove template-only items (except setup.sh) and replace a template README.

    Returns the removed items.
    """
    items = [item for item in TEMPLATE_ITEMS if item != "setup.sh"]
    removed = remove_items(root, items, step=_STEP)
    readme_path = os.path.join(root, "README.md")
    if readme_is_template(read_text(readme_path)):
        log(_STEP, "Creating project-specific README...", style="yellow")
        write_text(readme_path, render_project_readme(settings))
        log(_STEP, "  ✓ Created project-specific README.md", style="green")
    return removed


def init_git_repo(root: str) -> bool:
    """Run git init, git add ., and the initial commit in root.

    Returns False as soon as any git step fails.
    """
    steps = [
        ["git", "init"],
        ["git", "add", "."],
        ["git", "commit", "-m", INITIAL_COMMIT_MESSAGE],
    ]
    with pushd(root):
        for args in steps:
            result = run_cmd(args, capture=True)
            if result.returncode != 0:
                detail = (result.stderr or result.stdout or "").strip()
                error(_STEP, f"'{' '.join(args)}' failed" + (f": {detail}" if detail else ""))
                return False
    return True


# ============================================
# Command
# ============================================


def _print_summary(settings: ProjectSettings, git_done: bool, agents_installed: bool) -> None:
    log(_STEP, "")
    banner(_STEP, "Setup Complete!")
    log(_STEP, "")
    log(_STEP, f"✓ Project: {settings.name}", style="green")
    log(_STEP, f"✓ Type: {settings.project_type}", style="green")
    log(_STEP, f"✓ Language: {settings.language}", style="green")
    if git_done:
        log(_STEP, "✓ Git repository initialized", style="green")
    if agents_installed:
        log(_STEP, "✓ Claude Code agents installed", style="green")
    log(_STEP, "")
    log(_STEP, "Next steps:", style="yellow")
    log(_STEP, "1. Review and customize CLAUDE.md with your specific components")
    log(_STEP, "2. Fill in the planning-docs/ with your project details")
    log(_STEP, "3. Start coding with Claude Code!")
    log(_STEP, "")
    log(_STEP, "To get started with Claude Code:", style="blue")
    log(_STEP, "  claude code .")


def _report_unresolved(root: str) -> None:
    unresolved = scan_unresolved(root)
    if not unresolved:
        return
    log(_STEP, "")
    log(_STEP, "Some placeholders are still unresolved:", style="yellow")
    for rel, tokens in unresolved.items():
        log(_STEP, f"  {rel}: {', '.join(tokens)}", style="yellow")


def _remove_templates_step(root: str, settings: ProjectSettings, remove_templates: bool | None, assume_yes: bool) -> None:
    log(_STEP, "")
    log(_STEP, "Cleanup options:", style="yellow")
    if remove_templates is None:
        remove_templates = confirm(
            "Remove ALL template-specific files? (recommended)", default=True, assume_yes=assume_yes
        )
    if not remove_templates:
        log(_STEP, "Template files retained. Run 'ai-pilot cleanup' later to remove them.", style="yellow")
        return
    log(_STEP, "Removing template files...", style="green")
    remove_template_files(root, settings)
    if os.path.exists(os.path.join(root, "setup.sh")):
        log(_STEP, "  Note: Run 'rm setup.sh' to remove the setup script", style="yellow")
    log(_STEP, "")
    log(_STEP, "✓ Template cleanup complete!", style="green")


def _git_step(root: str, init_git: bool | None, assume_yes: bool) -> bool:
    if init_git is None:
        init_git = confirm("Initialize a git repository?", default=True, assume_yes=assume_yes)
    if not init_git:
        return False
    if not check_command("git"):
        log(_STEP, "git is not installed; skipping repository initialization.", style="yellow")
        return False
    log(_STEP, "")
    log(_STEP, "Initializing git repository...", style="green")
    if not init_git_repo(root):
        raise typer.Exit(1)
    return True


def run_setup(
    directory: str = ".",
    settings: ProjectSettings | None = None,
    remove_templates: bool | None = None,
    init_git: bool | None = None,
    assume_yes: bool = False,
    answers: dict | None = None,
) -> str:
    """Run the full setup sequence in *directory*. Returns the project directory.

    When settings is None it is gathered interactively, with *answers*
    (keyword arguments of gather_settings) skipping the matching prompts.
    remove_templates and init_git answer their prompts up front when not
    None. The first failing step raises typer.Exit(1).
    """
    root = os.path.abspath(os.path.expanduser(directory))

    banner(_STEP, "AI Pilot Template Setup Wizard")
    log(_STEP, "")

    if not os.path.isfile(os.path.join(root, MARKER_FILE)):
        error(_STEP, f"{MARKER_FILE} not found. Please run this command from the template directory.")
        raise typer.Exit(1)

    if settings is None:
        log(_STEP, "Let's set up your project!", style="green")
        log(_STEP, "")
        settings = gather_settings(**(answers or {}), assume_defaults=assume_yes)

    if not is_valid_project_name(settings.name):
        error(_STEP, f"Invalid project name '{settings.name}'. Use a plain directory name.")
        raise typer.Exit(1)

    agents_installed = False
    try:
        project_root = relocate_template(root, settings.name)
        if project_root != root:
            log(_STEP, "")
            log(_STEP, f"Created new project directory: {project_root}", style="yellow")

        backup_path = apply_project_template(project_root, settings.project_type)
        if backup_path is not None:
            log(_STEP, f"Applied {settings.project_type} template...", style="green")
            if backup_path:
                log(_STEP, f"  Previous CLAUDE.md saved as {os.path.basename(backup_path)}", style="yellow")

        log(_STEP, "")
        log(_STEP, "Customizing files for your project...", style="green")
        values = build_placeholder_values(settings)
        for rel in substitute_project(project_root, values):
            log(_STEP, f"  ✓ {rel}")

        log(_STEP, "Creating test directory structure...", style="green")
        if not create_test_layout(project_root):
            log(_STEP, "  tests/README.md already exists; left unchanged", style="yellow")

        log(_STEP, "")
        log(_STEP, "Installing Claude Code agents...", style="green")
        dest_dir = agents_install_dir()
        installed = install_agents(project_root, dest_dir)
        if installed:
            agents_installed = True
            log(_STEP, f"✓ {len(installed)} agent(s) installed to {dest_dir}", style="green")

        if rename_planning_agent_dir(project_root):
            log(_STEP, "Updating folder structure...", style="green")
            log(_STEP, "✓ Renamed planning-maintainer to project-manager", style="green")

        _remove_templates_step(project_root, settings, remove_templates, assume_yes)
    except OSError as exc:
        error(_STEP, f"Setup failed: {exc}")
        raise typer.Exit(1)

    git_done = _git_step(project_root, init_git, assume_yes)

    _report_unresolved(project_root)
    _print_summary(settings, git_done, agents_installed)
    return project_root


def setup(
    directory: Annotated[str, typer.Option(help="Template checkout to set up (defaults to the current directory)")] = ".",
    name: Annotated[str, typer.Option(help="Project name")] = None,
    description: Annotated[str, typer.Option(help="One-line project description")] = None,
    project_type: Annotated[str, typer.Option(help="web-app, api-service, cli-tool, library or generic")] = None,
    language: Annotated[str, typer.Option(help="javascript, typescript, python, go or other")] = None,
    build_command: Annotated[str, typer.Option(help="Override the build command")] = None,
    test_command: Annotated[str, typer.Option(help="Override the test command")] = None,
    lint_command: Annotated[str, typer.Option(help="Override the lint command")] = None,
    run_command: Annotated[str, typer.Option(help="Override the run command")] = None,
    dev_command: Annotated[str, typer.Option(help="Override the dev command")] = None,
    customize: Annotated[
        bool | None,
        typer.Option("--customize/--no-customize", help="Prompt for each build/test/lint/run/dev command"),
    ] = None,
    remove_templates: Annotated[
        bool | None,
        typer.Option("--remove-templates/--keep-templates", help="Remove template-only files when done"),
    ] = None,
    git: Annotated[
        bool | None,
        typer.Option("--git/--no-git", help="Initialize a git repository with an initial commit"),
    ] = None,
    yes: Annotated[bool, typer.Option("--yes", "-y", help="Accept defaults for every unanswered question")] = False,
) -> None:
    """Customize the template for a new project: placeholders, tests/, agents, git."""
    answers = {
        "name": name,
        "description": description,
        "project_type": project_type,
        "language": language,
        "commands": {
            "build": build_command,
            "test": test_command,
            "lint": lint_command,
            "run": run_command,
            "dev": dev_command,
        },
        "customize": customize,
    }
    run_setup(directory, remove_templates=remove_templates, init_git=git, assume_yes=yes, answers=answers)
