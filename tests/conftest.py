"""Shared fixtures for kickstart tests."""

from pathlib import Path

import pytest

from kickstart.registry import TemplateDef, TemplateRegistry


@pytest.fixture
def templates_root(tmp_path: Path) -> Path:
    """A templates directory with one small local template named `basic`."""
    root = tmp_path / "templates"
    basic = root / "basic"
    (basic / "src").mkdir(parents=True)
    (basic / "src" / "index.js").write_text("console.log('hi');\n", encoding="utf-8")
    (basic / "README.md.jinja").write_text("# {{ project_name }}\n", encoding="utf-8")
    (basic / "logo.bin").write_bytes(b"\x89PNG\x00\xff\xfe")
    return root


@pytest.fixture
def registry(templates_root: Path) -> TemplateRegistry:
    return TemplateRegistry(
        templates=(
            TemplateDef(key="basic", label="Basic"),
            TemplateDef(key="py", label="Python", ecosystem="Python"),
            TemplateDef(key="remote", label="Remote", url="https://example.com/owner/remote.git"),
        ),
        templates_root=templates_root,
    )


@pytest.fixture
def target(tmp_path: Path) -> Path:
    return tmp_path / "project"
