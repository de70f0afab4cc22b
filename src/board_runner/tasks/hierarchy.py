"""Parent/child classification for board tasks."""

from collections import defaultdict
from typing import Iterable, Sequence

from board_runner.config.models import BoardConfig
from board_runner.tasks.models import Task


def is_epic_like(task: Task, all_tasks: Iterable[Task], config: BoardConfig) -> bool:
    """
    Check whether a task is a parent (an epic).

    A task is epic-like if its type equals the configured epic type, or if
    any task in the collection names it as its parent. Cards without a type
    still count as parents when something points at them.

    Args:
        task: Task to classify
        all_tasks: Full task collection
        config: Board configuration

    Returns:
        True if the task is an epic
    """
    if task.type == config.notion.type_values.epic:
        return True

    return any(candidate.parent_id and candidate.parent_id == task.id for candidate in all_tasks)


class TaskHierarchy:
    """One-pass index of parent ids to their direct children."""

    def __init__(self, tasks: Sequence[Task], config: BoardConfig) -> None:
        self.tasks = list(tasks)
        self.epic_type = config.notion.type_values.epic
        self._children: dict[str, list[Task]] = defaultdict(list)

        for task in self.tasks:
            if task.parent_id:
                self._children[task.parent_id].append(task)

    def children_of(self, task_id: str) -> list[Task]:
        """Direct children of a task, in collection order."""
        return list(self._children.get(task_id, []))

    def has_children(self, task_id: str) -> bool:
        return task_id in self._children

    def is_epic_like(self, task: Task) -> bool:
        """Same answer as the module-level is_epic_like, without rescanning."""
        return task.type == self.epic_type or self.has_children(task.id)

    def epics(self) -> list[Task]:
        return [task for task in self.tasks if self.is_epic_like(task)]

    def work_items(self) -> list[Task]:
        return [task for task in self.tasks if not self.is_epic_like(task)]
