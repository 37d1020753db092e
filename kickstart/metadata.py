"""
metadata.py

Responsibility: Generate project metadata files in the target directory.

- `.gitignore`: append the bundled ignore block for the project's ecosystem
- `LICENSE`: MIT text with the copyright year(s) and holder filled in
"""

from __future__ import annotations

import datetime as dt
import logging
from pathlib import Path

logger = logging.getLogger(__name__)

DATA_DIR = Path(__file__).resolve().parent / "data"
GITIGNORE_DIR = DATA_DIR / "gitignore"
LICENSE_PATH = DATA_DIR / "licenses" / "MIT.txt"

YEAR_PLACEHOLDER = "<year>"
HOLDER_PLACEHOLDER = "<copyright holders>"


class FileWriteError(RuntimeError):
    pass


def available_ecosystems() -> list[str]:
    return sorted(p.stem for p in GITIGNORE_DIR.glob("*.gitignore"))


def gitignore_block(ecosystem: str) -> str:
    path = GITIGNORE_DIR / f"{ecosystem}.gitignore"
    if not path.is_file():
        raise FileWriteError(
            f"No ignore patterns bundled for ecosystem {ecosystem!r} "
            f"(available: {', '.join(available_ecosystems())})"
        )
    return path.read_text(encoding="utf-8")


def write_gitignore(target_dir: str | Path, ecosystem: str) -> Path:
    """
    Append the ignore block for `ecosystem` to `<target_dir>/.gitignore`.

    Existing content is kept. The block is not appended again if the file
    already contains it.
    """
    block = gitignore_block(ecosystem)
    path = Path(target_dir) / ".gitignore"
    try:
        existing = path.read_text(encoding="utf-8") if path.exists() else ""
        if block.strip() and block.strip() in existing:
            logger.debug("%s already contains the %s block", path, ecosystem)
            return path
        with path.open("a", encoding="utf-8") as fh:
            if existing and not existing.endswith("\n"):
                fh.write("\n")
            fh.write(block)
    except OSError as e:
        raise FileWriteError(f"Failed writing {path}: {e}") from e
    return path


def copyright_years(creation_year: int | None, current_year: int | None = None) -> str:
    """
    "2024" for a project created this year, "2019 - 2024" otherwise.
    """
    now = current_year if current_year is not None else dt.date.today().year
    first = int(creation_year) if creation_year else now
    prefix = f"{first} - " if now > first else ""
    return f"{prefix}{now}"


def render_license(holder: str, creation_year: int | None, current_year: int | None = None) -> str:
    try:
        text = LICENSE_PATH.read_text(encoding="utf-8")
    except OSError as e:
        raise FileWriteError(f"Failed reading license template: {LICENSE_PATH}") from e
    return text.replace(YEAR_PLACEHOLDER, copyright_years(creation_year, current_year)).replace(
        HOLDER_PLACEHOLDER, holder
    )


def write_license(target_dir: str | Path, holder: str, creation_year: int | None) -> Path:
    """
    Write `<target_dir>/LICENSE`, overwriting any existing file.
    """
    path = Path(target_dir) / "LICENSE"
    content = render_license(holder, creation_year)
    try:
        path.write_text(content, encoding="utf-8")
    except OSError as e:
        raise FileWriteError(f"Failed writing {path}: {e}") from e
    return path
