"""
pipeline.py

Responsibility: Run the scaffolding steps as an ordered task pipeline.

Each task moves from PENDING to exactly one of RAN, SKIPPED or FAILED:
- `enabled` false: the task is dropped (no outcome at all)
- `skip` returns a reason: SKIPPED with that reason, the action is not called
- the action raises: FAILED, and no later task runs

`run_tasks` does no I/O of its own; all side effects live in task actions, so
tests can drive it with plain callables.
"""

from __future__ import annotations

import enum
import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field

from kickstart.installer import install_dependencies
from kickstart.metadata import write_gitignore, write_license
from kickstart.options import Options
from kickstart.renderer import materialize
from kickstart.resolver import RemoteTemplate
from kickstart.vcs import detach_history, init_repo

logger = logging.getLogger(__name__)

INSTALL_SKIP_REASON = "Pass --install to automatically install dependencies"


class TaskStatus(str, enum.Enum):
    PENDING = "pending"
    RAN = "ran"
    SKIPPED = "skipped"
    FAILED = "failed"


@dataclass(frozen=True)
class Task:
    title: str
    action: Callable[[], object]
    enabled: Callable[[], bool] | None = None
    skip: Callable[[], str | None] | None = None


@dataclass(frozen=True)
class TaskOutcome:
    title: str
    status: TaskStatus = TaskStatus.PENDING
    reason: str | None = None
    error: BaseException | None = None


@dataclass(frozen=True)
class PipelineResult:
    outcomes: list[TaskOutcome] = field(default_factory=list)

    @property
    def failure(self) -> TaskOutcome | None:
        for outcome in self.outcomes:
            if outcome.status is TaskStatus.FAILED:
                return outcome
        return None

    @property
    def ok(self) -> bool:
        return self.failure is None


def run_tasks(
    tasks: Iterable[Task],
    *,
    on_outcome: Callable[[TaskOutcome], None] | None = None,
) -> PipelineResult:
    outcomes: list[TaskOutcome] = []

    def report(outcome: TaskOutcome) -> None:
        outcomes.append(outcome)
        if on_outcome is not None:
            on_outcome(outcome)

    for task in tasks:
        if task.enabled is not None and not task.enabled():
            logger.debug("Task disabled: %s", task.title)
            continue

        reason = task.skip() if task.skip is not None else None
        if reason:
            report(TaskOutcome(task.title, TaskStatus.SKIPPED, reason=reason))
            continue

        logger.debug("Running task: %s", task.title)
        try:
            task.action()
        except Exception as e:  # noqa: BLE001 - surfaced through the result
            logger.debug("Task failed: %s", task.title, exc_info=True)
            report(TaskOutcome(task.title, TaskStatus.FAILED, error=e))
            break
        report(TaskOutcome(task.title, TaskStatus.RAN))

    return PipelineResult(outcomes=outcomes)


def _template_context(options: Options) -> dict[str, object]:
    return {
        "project_name": options.target_dir.name,
        "copyright_holder": options.copyright_holder,
        "year": options.creation_year,
    }


def build_tasks(options: Options, *, ecosystem: str) -> list[Task]:
    """
    The scaffolding steps for one invocation, in order.

    `options.source` must already be resolved and validated.
    """
    if options.source is None:
        raise ValueError("Template source must be resolved before building tasks.")

    source = options.source
    target = options.target_dir
    remote = isinstance(source, RemoteTemplate)

    return [
        Task(
            title="Copy project files",
            action=lambda: materialize(source, target, context=_template_context(options)),
        ),
        Task(
            title="Detach template history",
            action=lambda: detach_history(target),
            enabled=lambda: remote and not options.git,
        ),
        Task(
            title="Create gitignore",
            action=lambda: write_gitignore(target, ecosystem),
        ),
        Task(
            title="Create license",
            action=lambda: write_license(target, options.copyright_holder, options.creation_year),
        ),
        Task(
            title="Initialize git",
            action=lambda: init_repo(target),
            # A clone is already a repository.
            enabled=lambda: options.git and not remote,
        ),
        Task(
            title="Install dependencies",
            action=lambda: install_dependencies(target),
            skip=lambda: None if options.run_install else INSTALL_SKIP_REASON,
        ),
    ]
