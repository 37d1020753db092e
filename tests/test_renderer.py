"""Tests for template materialization."""

from pathlib import Path
from unittest.mock import patch

import pytest

from kickstart.renderer import CopyError, copy_template_dir, materialize
from kickstart.resolver import LocalTemplate, RemoteTemplate
from kickstart.vcs import GitError


def test_copies_every_template_file(templates_root: Path, target: Path) -> None:
    result = materialize(LocalTemplate(templates_root / "basic"), target, context={"project_name": "demo"})

    assert (target / "src" / "index.js").read_text(encoding="utf-8") == "console.log('hi');\n"
    assert (target / "logo.bin").read_bytes() == b"\x89PNG\x00\xff\xfe"
    assert (target / "README.md").read_text(encoding="utf-8") == "# demo\n"
    assert not (target / "README.md.jinja").exists()
    assert result.copied_files == 2
    assert result.rendered_files == 1
    assert result.skipped_files == 0


def test_existing_files_are_not_overwritten(templates_root: Path, target: Path) -> None:
    (target / "src").mkdir(parents=True)
    (target / "src" / "index.js").write_text("// mine\n", encoding="utf-8")
    (target / "README.md").write_text("keep me\n", encoding="utf-8")

    result = copy_template_dir(templates_root / "basic", target, context={"project_name": "demo"})

    assert (target / "src" / "index.js").read_text(encoding="utf-8") == "// mine\n"
    assert (target / "README.md").read_text(encoding="utf-8") == "keep me\n"
    assert (target / "logo.bin").exists()
    assert result.skipped_files == 2


def test_second_run_changes_nothing(templates_root: Path, target: Path) -> None:
    copy_template_dir(templates_root / "basic", target, context={"project_name": "demo"})
    result = copy_template_dir(templates_root / "basic", target, context={"project_name": "other"})

    assert result.copied_files == 0
    assert result.rendered_files == 0
    assert (target / "README.md").read_text(encoding="utf-8") == "# demo\n"


def test_missing_template_dir(tmp_path: Path, target: Path) -> None:
    with pytest.raises(CopyError, match="not found"):
        copy_template_dir(tmp_path / "nope", target)
    assert not target.exists()


def test_undefined_variable_fails_rendering(templates_root: Path, target: Path) -> None:
    with pytest.raises(CopyError, match="README.md.jinja"):
        copy_template_dir(templates_root / "basic", target, context={})


def test_io_fault_becomes_copy_error(templates_root: Path, target: Path) -> None:
    with patch("kickstart.renderer.shutil.copy2", side_effect=PermissionError("denied")):
        with pytest.raises(CopyError, match="denied"):
            copy_template_dir(templates_root / "basic", target, context={"project_name": "demo"})


def test_remote_template_is_cloned(target: Path) -> None:
    with patch("kickstart.renderer.clone_repo") as clone:
        result = materialize(RemoteTemplate("https://example.com/a/b.git"), target)

    clone.assert_called_once_with("https://example.com/a/b.git", target)
    assert result.cloned is True


def test_clone_failure_becomes_copy_error(target: Path) -> None:
    with patch("kickstart.renderer.clone_repo", side_effect=GitError("Command failed: git clone")):
        with pytest.raises(CopyError, match="git clone"):
            materialize(RemoteTemplate("https://example.com/a/b.git"), target)


def test_empty_directories_are_created(templates_root: Path, target: Path) -> None:
    (templates_root / "basic" / "public" / "assets").mkdir(parents=True)

    copy_template_dir(templates_root / "basic", target, context={"project_name": "demo"})

    assert (target / "public" / "assets").is_dir()


def test_symlinked_directories_are_followed(tmp_path: Path, templates_root: Path, target: Path) -> None:
    shared = tmp_path / "shared"
    shared.mkdir()
    (shared / "cfg.json").write_text("{}", encoding="utf-8")
    (templates_root / "basic" / "config").symlink_to(shared, target_is_directory=True)

    copy_template_dir(templates_root / "basic", target, context={"project_name": "demo"})

    assert (target / "config").is_dir()
    assert not (target / "config").is_symlink()
    assert (target / "config" / "cfg.json").read_text(encoding="utf-8") == "{}"


def test_unreadable_directory_becomes_copy_error(templates_root: Path, target: Path) -> None:
    def walk(top, followlinks=False, onerror=None):
        onerror(PermissionError(13, "Permission denied", str(top)))
        return iter(())

    with patch("kickstart.renderer.os.walk", side_effect=walk):
        with pytest.raises(CopyError, match="Permission denied"):
            copy_template_dir(templates_root / "basic", target)
