"""Task models, hierarchy classification and next-task selection."""

from board_runner.tasks.models import EpicCompletionResult, SelectionResult, SelectionSource, Task
from board_runner.tasks.hierarchy import TaskHierarchy, is_epic_like
from board_runner.tasks.ordering import parse_priority, sort_candidates
from board_runner.tasks.selector import (
    all_epic_children_are_done,
    find_closable_epics,
    has_incomplete_epic,
    pick_next_epic,
    pick_next_epic_child,
    pick_next_task,
)

__all__ = [
    "EpicCompletionResult",
    "SelectionResult",
    "SelectionSource",
    "Task",
    "TaskHierarchy",
    "is_epic_like",
    "parse_priority",
    "sort_candidates",
    "all_epic_children_are_done",
    "find_closable_epics",
    "has_incomplete_epic",
    "pick_next_epic",
    "pick_next_epic_child",
    "pick_next_task",
]
