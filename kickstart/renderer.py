"""
renderer.py

Responsibility: Materialize a template into the target directory.

Rules:
- Local templates are walked in sorted order to keep output deterministic.
- Copies never clobber: a file that already exists at the destination is left alone.
- Files named `*.jinja` are rendered with the provided context and written
  without the suffix; everything else is copied byte-for-byte.
- Remote templates are cloned instead of copied.

This module intentionally does NOT know about CLI parsing or the task pipeline.
"""

from __future__ import annotations

import logging
import os
import shutil
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from jinja2 import Environment, StrictUndefined, TemplateError

from kickstart.resolver import LocalTemplate, RemoteTemplate, TemplateReference
from kickstart.vcs import GitError, clone_repo

logger = logging.getLogger(__name__)

JINJA_SUFFIX = ".jinja"


class CopyError(RuntimeError):
    pass


@dataclass(frozen=True)
class MaterializeResult:
    copied_files: int = 0
    rendered_files: int = 0
    skipped_files: int = 0
    cloned: bool = False


def _raise_walk_error(error: OSError) -> None:
    raise error


def _walk_template(template_dir: Path) -> tuple[list[Path], list[Path]]:
    """
    Return (directories, files) under template_dir, each in deterministic
    lexicographic order (relative path ordering).

    Directory symlinks are followed; an unreadable directory raises.
    """
    dirs: list[Path] = []
    files: list[Path] = []
    for root, dirnames, filenames in os.walk(template_dir, followlinks=True, onerror=_raise_walk_error):
        root_path = Path(root)
        for name in dirnames:
            dirs.append(root_path / name)
        for name in filenames:
            files.append(root_path / name)

    def order(p: Path) -> str:
        return str(p.relative_to(template_dir)).replace(os.sep, "/")

    return sorted(dirs, key=order), sorted(files, key=order)


def _destination_for(rel: Path, dst_dir: Path) -> tuple[Path, bool]:
    if rel.name.endswith(JINJA_SUFFIX) and len(rel.name) > len(JINJA_SUFFIX):
        return dst_dir / rel.with_name(rel.name[: -len(JINJA_SUFFIX)]), True
    return dst_dir / rel, False


def copy_template_dir(
    template_dir: str | Path,
    destination_dir: str | Path,
    *,
    context: dict[str, Any] | None = None,
) -> MaterializeResult:
    """
    Copy a local template directory into destination_dir without overwriting.

    - Creates destination directories as needed.
    - Copies file permissions from template files.
    """
    tpl_dir = Path(template_dir).resolve()
    dst_dir = Path(destination_dir).resolve()

    if not tpl_dir.is_dir():
        raise CopyError(f"Template directory not found: {tpl_dir}")

    env = Environment(
        autoescape=False,
        undefined=StrictUndefined,
        keep_trailing_newline=True,
    )
    ctx = context or {}

    copied = rendered = skipped = 0

    try:
        dst_dir.mkdir(parents=True, exist_ok=True)
        template_dirs, template_files = _walk_template(tpl_dir)
        # Empty directories are part of the template too.
        for src_dir in template_dirs:
            (dst_dir / src_dir.relative_to(tpl_dir)).mkdir(parents=True, exist_ok=True)

        for src_path in template_files:
            rel = src_path.relative_to(tpl_dir)
            dst_path, is_jinja = _destination_for(rel, dst_dir)

            if dst_path.exists():
                logger.debug("Keeping existing file %s", dst_path)
                skipped += 1
                continue

            dst_path.parent.mkdir(parents=True, exist_ok=True)
            if is_jinja:
                try:
                    out = env.from_string(src_path.read_text(encoding="utf-8")).render(**ctx)
                except (TemplateError, UnicodeDecodeError) as e:
                    raise CopyError(f"Failed rendering template file: {rel}") from e
                dst_path.write_text(out, encoding="utf-8", newline="\n")
                shutil.copystat(src_path, dst_path)
                rendered += 1
            else:
                shutil.copy2(src_path, dst_path)
                copied += 1
            logger.debug("Wrote %s", dst_path)
    except OSError as e:
        raise CopyError(f"Failed copying template into {dst_dir}: {e}") from e

    return MaterializeResult(copied_files=copied, rendered_files=rendered, skipped_files=skipped)


def materialize(
    source: TemplateReference,
    target_dir: str | Path,
    *,
    context: dict[str, Any] | None = None,
) -> MaterializeResult:
    if isinstance(source, LocalTemplate):
        return copy_template_dir(source.path, target_dir, context=context)
    if isinstance(source, RemoteTemplate):
        try:
            clone_repo(source.url, target_dir)
        except GitError as e:
            raise CopyError(str(e)) from e
        return MaterializeResult(cloned=True)
    raise TypeError(f"Unsupported template reference: {source!r}")
