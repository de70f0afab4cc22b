"""Board Runner - next-task selection for a board-driven coding agent."""

__version__ = "0.1.0"

from board_runner.config import BoardConfig, load_config
from board_runner.notion import WebhookSummary, map_notion_page_to_task, summarize_notion_webhook_event
from board_runner.tasks import (
    EpicCompletionResult,
    SelectionResult,
    SelectionSource,
    Task,
    all_epic_children_are_done,
    is_epic_like,
    pick_next_task,
)

__all__ = [
    "BoardConfig",
    "load_config",
    "WebhookSummary",
    "map_notion_page_to_task",
    "summarize_notion_webhook_event",
    "EpicCompletionResult",
    "SelectionResult",
    "SelectionSource",
    "Task",
    "all_epic_children_are_done",
    "is_epic_like",
    "pick_next_task",
]
