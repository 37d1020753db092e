"""
installer.py

Responsibility: Install a scaffolded project's dependencies by delegating to its
package manager. Nothing here resolves dependencies itself.
"""

from __future__ import annotations

import logging
import shutil
from pathlib import Path

from kickstart.process import run

logger = logging.getLogger(__name__)

# Checked in order; the first lockfile found decides the package manager.
LOCKFILES: tuple[tuple[str, str], ...] = (
    ("yarn.lock", "yarn"),
    ("pnpm-lock.yaml", "pnpm"),
    ("package-lock.json", "npm"),
)
DEFAULT_MANAGER = "npm"


class InstallError(RuntimeError):
    pass


def detect_package_manager(target_dir: str | Path) -> str:
    workdir = Path(target_dir)
    for lockfile, manager in LOCKFILES:
        if (workdir / lockfile).exists():
            return manager
    return DEFAULT_MANAGER


def install_dependencies(target_dir: str | Path) -> str:
    """
    Run `<manager> install` in target_dir and return the manager used.
    """
    workdir = Path(target_dir)
    manager = detect_package_manager(workdir)
    executable = shutil.which(manager)
    if executable is None:
        raise InstallError(f"{manager} was not found on PATH")

    logger.info("Installing dependencies with %s", manager)
    run([executable, "install"], cwd=workdir, error=InstallError)
    return manager
