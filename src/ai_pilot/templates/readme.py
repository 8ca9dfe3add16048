"""README and tests/README templates written into scaffolded projects."""

from ai_pilot.config import ProjectSettings

TESTS_README = """\
# Test Suite

This directory contains all tests for the project.

## Structure

- `unit/` - Unit tests for individual functions/methods
- `integration/` - Integration tests for component interactions
- `e2e/` - End-to-end tests for complete workflows
- `performance/` - Performance and load tests
- `security/` - Security and vulnerability tests
- `fixtures/` - Test data and mock objects

## Running Tests

See CLAUDE.md for test commands specific to this project.
"""

PROJECT_README_TEMPLATE = """\
# {name}

{description}

## Getting Started

```bash
# Build the project
{build_command}

# Run the project
{run_command}

# Run tests
{test_command}
```

## Development with Claude Code

This project uses automated agents:
- **project-manager**: Handles documentation updates
- **test-analyst**: Manages testing

## Project Structure

- `planning-docs/` - Project planning and tracking
- `docs/` - Comprehensive documentation
- `tests/` - Test suites
- `CLAUDE.md` - Claude Code configuration

## License

[Your license here]
"""

CLEANUP_README_TEMPLATE = """\
# {name}

This project uses AI Pilot Template for automated project management with Claude Code.

## Project Overview

[Add your project description here]

## Getting Started

```bash
# Install dependencies
[Your install command]

# Run the project
[Your run command]

# Run tests
[Your test command]
```

## Development with Claude Code

This project is configured to work with Claude Code's automated agents:
- **project-manager**: Handles all documentation updates
- **test-analyst**: Manages test execution and analysis

### Working with Claude Code

1. Start a session: `claude code .`
2. Claude will automatically read the planning documentation
3. As you work, documentation is updated automatically
4. Tests are run through the test-analyst agent

## Project Structure

- `planning-docs/` - Project planning and tracking
- `docs/` - Comprehensive documentation
- `tests/` - Test suites and fixtures
- `CLAUDE.md` - Claude Code configuration

## Documentation

See the `docs/` directory for detailed documentation on:
- System architecture
- API reference
- Development guidelines
- Deployment procedures

## Contributing

[Add your contribution guidelines]

## License

[Add your license information]
"""


def render_project_readme(settings: ProjectSettings) -> str:
    """README written by setup once the template README is replaced."""
    return PROJECT_README_TEMPLATE.format(
        name=settings.name,
        description=settings.description,
        build_command=settings.build_command,
        run_command=settings.run_command,
        test_command=settings.test_command,
    )


def render_cleanup_readme(name: str) -> str:
    """README written by cleanup; only the project name is known at that point."""
    return CLEANUP_README_TEMPLATE.format(name=name)
