"""Next-task selection and epic completion checks.

Every function here is pure: it reads a snapshot of the board and returns a
decision without touching the board or mutating its inputs.
"""

import logging
from typing import Sequence

from board_runner.config.models import BoardConfig
from board_runner.tasks.hierarchy import TaskHierarchy
from board_runner.tasks.models import (
    EpicCompletionResult,
    SelectionResult,
    SelectionSource,
    Task,
)
from board_runner.tasks.ordering import sort_candidates

logger = logging.getLogger(__name__)


def _pick_from(candidates: Sequence[Task], config: BoardConfig) -> SelectionResult:
    """Apply the in-progress-before-not-started rule to a candidate set."""
    statuses = config.notion.statuses
    order = config.queue.order

    in_progress = [t for t in candidates if t.status == statuses.in_progress]
    if in_progress:
        task = sort_candidates(in_progress, order)[0]
        return SelectionResult(task=task, source=SelectionSource.IN_PROGRESS)

    not_started = [t for t in candidates if t.status == statuses.not_started]
    if not_started:
        task = sort_candidates(not_started, order)[0]
        return SelectionResult(task=task, source=SelectionSource.NOT_STARTED)

    return SelectionResult()


def pick_next_task(tasks: Sequence[Task], config: BoardConfig) -> SelectionResult:
    """
    Pick the next task to work on.

    Epics (typed or implied by children) are never candidates. Tasks already
    in progress win over tasks not yet started; within a partition the
    queue order decides (oldest createdTime first for "created").

    Args:
        tasks: Full flat task collection, epics and children included
        config: Board configuration

    Returns:
        SelectionResult, empty when nothing is eligible
    """
    hierarchy = TaskHierarchy(tasks, config)
    result = _pick_from(hierarchy.work_items(), config)

    if result.task:
        logger.debug(f"Selected task {result.task.id} ({result.source.value})")
    else:
        logger.debug(f"No eligible task among {len(hierarchy.tasks)} tasks")

    return result


def all_epic_children_are_done(
    epic_task: Task, all_tasks: Sequence[Task], config: BoardConfig
) -> EpicCompletionResult:
    """
    Check whether every direct child of an epic is done.

    An epic without children is never reported as done; closing a childless
    epic is the caller's decision.

    Args:
        epic_task: The epic to evaluate
        all_tasks: Full task collection
        config: Board configuration

    Returns:
        EpicCompletionResult with the children that were inspected
    """
    children = TaskHierarchy(all_tasks, config).children_of(epic_task.id)
    done = config.notion.statuses.done

    all_done = bool(children) and all(child.status == done for child in children)
    return EpicCompletionResult(all_done=all_done, children=children)


def pick_next_epic(tasks: Sequence[Task], config: BoardConfig) -> SelectionResult:
    """
    Pick the epic to work on, one at a time and in queue order.

    An epic already in progress is resumed. Otherwise the first epic that is
    not done is started if it is not started yet; an epic sitting in any
    other status blocks every later epic.
    """
    statuses = config.notion.statuses
    order = config.queue.order
    epics = TaskHierarchy(tasks, config).epics()

    in_progress = [e for e in epics if e.status == statuses.in_progress]
    if in_progress:
        return SelectionResult(
            task=sort_candidates(in_progress, order)[0],
            source=SelectionSource.IN_PROGRESS,
        )

    for epic in sort_candidates(epics, order):
        if epic.status == statuses.done:
            continue
        if epic.status == statuses.not_started:
            return SelectionResult(task=epic, source=SelectionSource.NOT_STARTED)

        logger.debug(f"Epic {epic.id} has status {epic.status!r}, holding later epics")
        return SelectionResult()

    return SelectionResult()


def pick_next_epic_child(tasks: Sequence[Task], config: BoardConfig, epic_id: str) -> SelectionResult:
    """Pick the next non-epic child of an epic, with the pick_next_task rule."""
    hierarchy = TaskHierarchy(tasks, config)
    children = [c for c in hierarchy.children_of(epic_id) if not hierarchy.is_epic_like(c)]
    return _pick_from(children, config)


def has_incomplete_epic(tasks: Sequence[Task], config: BoardConfig) -> bool:
    """True if any epic on the board is not done."""
    done = config.notion.statuses.done
    return any(epic.status != done for epic in TaskHierarchy(tasks, config).epics())


def find_closable_epics(
    tasks: Sequence[Task], config: BoardConfig
) -> list[tuple[Task, EpicCompletionResult]]:
    """
    Find epics that are not done yet but whose children all are.

    Returns:
        (epic, completion) pairs in collection order
    """
    hierarchy = TaskHierarchy(tasks, config)
    done = config.notion.statuses.done

    closable = []
    for epic in hierarchy.epics():
        if epic.status == done:
            continue

        children = hierarchy.children_of(epic.id)
        if children and all(child.status == done for child in children):
            closable.append((epic, EpicCompletionResult(all_done=True, children=children)))

    return closable
