"""
process.py

Responsibility: Run external commands (git, package managers) and turn failures
into the caller's error type.
"""

from __future__ import annotations

import logging
import subprocess
from pathlib import Path

logger = logging.getLogger(__name__)


def run(
    cmd: list[str],
    *,
    cwd: Path,
    error: type[Exception] = RuntimeError,
    env: dict[str, str] | None = None,
) -> str:
    """
    Run a subprocess command and return its combined output.

    Raises `error` when the command exits non-zero or cannot be started.
    """
    logger.debug("Running %s in %s", " ".join(cmd), cwd)
    try:
        result = subprocess.run(
            cmd,
            cwd=str(cwd),
            env=env,
            check=True,
            stdout=subprocess.PIPE,
            stderr=subprocess.STDOUT,
            text=True,
        )
    except FileNotFoundError as e:
        raise error(f"Command not found: {cmd[0]}") from e
    except subprocess.CalledProcessError as e:
        raise error(f"Command failed: {' '.join(cmd)}\n\n{e.stdout}") from e
    return result.stdout
