"""Ordering policies for candidate tasks."""

import logging
import math
import re
from datetime import datetime, timezone
from typing import Iterable, Optional

from board_runner.config.models import QueueOrder
from board_runner.tasks.models import Task

logger = logging.getLogger(__name__)

_PRIORITY_PATTERN = re.compile(r"p(\d+)", re.IGNORECASE)


def parse_priority(priority: Optional[str]) -> float:
    """
    Parse a "P<n>" priority label.

    Returns:
        The numeric rank, or infinity when the label is missing or unparsable
    """
    if not priority:
        return math.inf

    match = _PRIORITY_PATTERN.search(priority)
    if not match:
        return math.inf

    return int(match.group(1))


def parse_created_time(value: Optional[str]) -> Optional[datetime]:
    """Parse an ISO-8601 timestamp into an aware datetime (UTC when naive)."""
    if not value:
        return None

    text = value.strip()
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"

    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        logger.warning(f"Unparseable createdTime: {value!r}")
        return None

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def _id_key(task: Task) -> str:
    return task.id.strip().lower()


def _created_key(task: Task) -> tuple[int, float]:
    # Missing timestamps sort after every parseable one
    created = parse_created_time(task.created_time)
    if created is None:
        return (1, 0.0)
    return (0, created.timestamp())


def sort_candidates(tasks: Iterable[Task], order: QueueOrder) -> list[Task]:
    """
    Return tasks sorted by the given policy. The input is not modified.

    Sorting is stable, so tasks with equal keys keep their input order.

    Args:
        tasks: Candidate tasks
        order: Ordering policy

    Returns:
        New sorted list
    """
    candidates = list(tasks)

    if order == QueueOrder.CREATED:
        candidates.sort(key=_created_key)
    elif order == QueueOrder.ALPHABETICAL:
        candidates.sort(key=_id_key)
    elif order == QueueOrder.PRIORITY_THEN_ALPHABETICAL:
        candidates.sort(key=lambda t: (parse_priority(t.priority), _id_key(t)))
    else:
        raise ValueError(f"Unknown queue order: {order}")

    return candidates
