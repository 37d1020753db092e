"""
options.py

Responsibility: Turn CLI arguments (plus interactive answers) into an `Options`
record.

Precedence for each value: CLI flag, then environment, then prompt (unless
`--yes`), then default.
"""

from __future__ import annotations

import argparse
import datetime as dt
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path

import click

from kickstart import __version__
from kickstart.process import run
from kickstart.registry import TemplateRegistry
from kickstart.resolver import TemplateReference

logger = logging.getLogger(__name__)

HOLDER_ENV_VAR = "KICKSTART_HOLDER"
FALLBACK_HOLDER = "The project authors"


@dataclass(frozen=True)
class Options:
    """Everything one scaffolding run needs. `source` is filled in after resolution."""

    template: str
    target_dir: Path
    git: bool = False
    run_install: bool = False
    skip_prompts: bool = False
    copyright_holder: str = FALLBACK_HOLDER
    creation_year: int = field(default_factory=lambda: dt.date.today().year)
    source: TemplateReference | None = None


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="kickstart", description="kickstart - scaffold a new project from a template")
    p.add_argument("template", nargs="?", default=None, help="Template name (prompted for when omitted)")
    p.add_argument("-y", "--yes", action="store_true", help="Skip prompts and use defaults")
    p.add_argument("-g", "--git", action="store_true", help="Initialize a git repository")
    p.add_argument("-i", "--install", action="store_true", help="Install dependencies after scaffolding")

    p.add_argument("-C", "--target-dir", default=None, help="Directory to scaffold into (default: current directory)")
    p.add_argument("--holder", default=None, help=f"Copyright holder (or set env {HOLDER_ENV_VAR})")
    p.add_argument("--year", type=int, default=None, help="Project creation year (default: current year)")
    p.add_argument("--registry", default=None, help="Template registry YAML (or set env KICKSTART_REGISTRY)")
    p.add_argument("--templates-dir", default=None, help="Directory holding local templates")

    p.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    p.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return p


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    return build_parser().parse_args(argv)


def default_holder(cwd: Path | None = None) -> str:
    """
    $KICKSTART_HOLDER, else `git config user.name`, else a generic holder.
    """
    env_holder = os.environ.get(HOLDER_ENV_VAR, "").strip()
    if env_holder:
        return env_holder
    try:
        name = run(["git", "config", "user.name"], cwd=cwd or Path.cwd()).strip()
    except RuntimeError:
        logger.debug("git user.name unavailable, using fallback holder")
        name = ""
    return name or FALLBACK_HOLDER


def prompt_for_missing(args: argparse.Namespace, registry: TemplateRegistry) -> tuple[str, bool]:
    """
    Ask for whatever the flags left open. Returns (template, git).
    """
    template = args.template
    git = bool(args.git)

    if args.yes:
        return template or registry.default.key, git

    if not template:
        template = click.prompt(
            "Please choose which project template to use",
            type=click.Choice(registry.labels, case_sensitive=False),
            default=registry.default.label,
        )
    if not git:
        git = click.confirm("Initialize a git repository?", default=False)
    return template, git


def resolve_options(args: argparse.Namespace, registry: TemplateRegistry) -> Options:
    template, git = prompt_for_missing(args, registry)
    target_dir = Path(args.target_dir).expanduser().resolve() if args.target_dir else Path.cwd()
    holder = (args.holder or "").strip() or default_holder(target_dir if target_dir.is_dir() else None)

    return Options(
        template=template,
        target_dir=target_dir,
        git=git,
        run_install=bool(args.install),
        skip_prompts=bool(args.yes),
        copyright_holder=holder,
        creation_year=args.year or dt.date.today().year,
    )
