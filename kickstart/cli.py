"""
cli.py

Responsibility: CLI entrypoint for kickstart.

High-level flow:
1) Parse flags and prompt for anything missing -> `Options`
2) Resolve and validate the template (nothing is written before this passes)
3) Run the scaffolding pipeline: copy -> gitignore -> license -> git -> install

This module should orchestrate behavior but keep concerns isolated:
- Options and prompts: `options.py`
- Template lookup and validation: `resolver.py`
- Steps and their ordering: `pipeline.py`
"""

from __future__ import annotations

import argparse
import dataclasses
import logging
from pathlib import Path

from rich.console import Console

from kickstart.options import parse_args, resolve_options
from kickstart.pipeline import PipelineResult, TaskOutcome, TaskStatus, build_tasks, run_tasks
from kickstart.registry import RegistryError, TemplateRegistry, load_registry
from kickstart.resolver import InvalidTemplateError, TemplateResolver

logger = logging.getLogger(__name__)

console = Console()


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )


def _print_outcome(outcome: TaskOutcome) -> None:
    if outcome.status is TaskStatus.RAN:
        console.print(f"  [green]✔[/green] {outcome.title}")
    elif outcome.status is TaskStatus.SKIPPED:
        console.print(f"  [yellow]↓[/yellow] {outcome.title} [dim]\\[skipped: {outcome.reason}][/dim]")
    elif outcome.status is TaskStatus.FAILED:
        console.print(f"  [red]✖[/red] {outcome.title}")


def _load_registry(args: argparse.Namespace) -> TemplateRegistry:
    templates_root = Path(args.templates_dir).expanduser().resolve() if args.templates_dir else None
    return load_registry(args.registry, templates_root=templates_root)


def create_project(args: argparse.Namespace, *, resolver: TemplateResolver | None = None) -> PipelineResult:
    """
    Resolve options and the template, then run the scaffolding pipeline.

    Raises `RegistryError` / `InvalidTemplateError` before anything is written.
    """
    registry = _load_registry(args)
    options = resolve_options(args, registry)
    resolver = resolver or TemplateResolver(registry)

    source = resolver.resolve(options.template)
    options = dataclasses.replace(options, source=source)
    logger.debug("Scaffolding %s into %s", source, options.target_dir)

    tasks = build_tasks(options, ecosystem=registry.ecosystem_for(options.template))
    return run_tasks(tasks, on_outcome=_print_outcome)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    _configure_logging(bool(args.verbose))

    try:
        result = create_project(args)
    except (RegistryError, InvalidTemplateError) as e:
        console.print(f"[bold red]ERROR[/bold red] Invalid template name or url: {e}")
        return 1

    failure = result.failure
    if failure is not None:
        console.print(f"[bold red]ERROR[/bold red] {failure.title}: {failure.error}")
        return 1

    console.print("[bold green]DONE[/bold green] Project ready")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
