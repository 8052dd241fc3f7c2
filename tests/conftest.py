"""Shared fixtures: small content trees built under tmp_path."""

import json
from pathlib import Path

import pytest


def make_item(**overrides) -> dict:
    item = {
        "title": "Code Reviewer",
        "description": "Reviews pull requests for bugs and style issues.",
        "author": "alice",
        "dateAdded": "2025-01-15",
        "tags": ["review", "code-quality"],
        "content": "You are a meticulous code reviewer.",
    }
    item.update(overrides)
    return item


def write_item(directory: Path, filename: str, data) -> Path:
    directory.mkdir(parents=True, exist_ok=True)
    path = directory / filename
    if isinstance(data, str):
        path.write_text(data, encoding="utf-8")
    else:
        path.write_text(json.dumps(data, indent=2), encoding="utf-8")
    return path


@pytest.fixture
def content_dir(tmp_path):
    """
    content/
      agents/code-reviewer.json, backend-architect.json, broken.json (invalid JSON)
      hooks/validate-input.json
      guides/tutorials/getting-started.json
    """
    root = tmp_path / "content"
    agents = root / "agents"
    write_item(agents, "code-reviewer.json", make_item())
    write_item(agents, "backend-architect.json", make_item(
        title="Backend Architect",
        description="Designs APIs, databases and service boundaries.",
        tags=["backend", "api"],
        dateAdded="2025-03-01",
    ))
    write_item(agents, "broken.json", "{not json")
    write_item(agents, "agent-template.json", make_item(title="Template"))

    write_item(root / "hooks", "validate-input.json", {
        "title": "Validate Input",
        "description": "Validates tool input before execution.",
        "author": "bob",
        "dateAdded": "2025-02-01",
        "tags": ["pre-tool-use", "validation"],
        "hookType": "PreToolUse",
    })

    write_item(root / "guides" / "tutorials", "getting-started.json", make_item(
        title="Getting Started",
        description="First steps with the directory and Claude Code.",
        tags=["intro"],
    ))
    return root


@pytest.fixture
def changelog_path(tmp_path):
    path = tmp_path / "CHANGELOG.md"
    path.write_text(
        "# Changelog\n"
        "\n"
        "## 2025-10-18 - Faster Builds\n"
        "\n"
        "**TL;DR:** Incremental builds skip unchanged categories.\n"
        "\n"
        "### Added\n"
        "- Build cache for content categories\n"
        "- Static API hashing\n"
        "  so unchanged files are not rewritten\n"
        "\n"
        "### Fixed\n"
        "- Sitemap priorities\n"
        "\n"
        "## [1.1.0] - 2025-09-01\n"
        "\n"
        "### Changed\n"
        "- New search ranking\n",
        encoding="utf-8",
    )
    return path
