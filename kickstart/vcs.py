"""
vcs.py

Responsibility: git operations on the target directory.

- `init_repo`: start a fresh repository
- `clone_repo`: materialize a remote template as the initial repository
- `detach_history`: drop a cloned template's `.git` when no repository was asked for
"""

from __future__ import annotations

import logging
import shutil
from pathlib import Path

from kickstart.process import run

logger = logging.getLogger(__name__)


class GitError(RuntimeError):
    pass


def is_repo(path: str | Path) -> bool:
    return (Path(path) / ".git").exists()


def init_repo(target_dir: str | Path) -> None:
    workdir = Path(target_dir)
    run(["git", "init"], cwd=workdir, error=GitError)
    logger.info("Initialized git repository in %s", workdir)


def clone_repo(url: str, target_dir: str | Path) -> None:
    """
    Clone `url` into `target_dir`. git refuses non-empty destinations.
    """
    dest = Path(target_dir).resolve()
    dest.parent.mkdir(parents=True, exist_ok=True)
    run(["git", "clone", url, str(dest)], cwd=dest.parent, error=GitError)
    logger.info("Cloned %s into %s", url, dest)


def detach_history(target_dir: str | Path) -> None:
    if not is_repo(target_dir):
        return
    git_dir = Path(target_dir) / ".git"
    try:
        shutil.rmtree(git_dir)
    except OSError as e:
        raise GitError(f"Failed removing cloned history: {git_dir}") from e
    logger.info("Removed cloned history from %s", target_dir)
