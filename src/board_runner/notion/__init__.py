"""Notion payload handling: page mapping and webhook summaries."""

from board_runner.notion.mapper import map_notion_page_to_task
from board_runner.notion.webhook_summary import WebhookSummary, summarize_notion_webhook_event

__all__ = ["WebhookSummary", "map_notion_page_to_task", "summarize_notion_webhook_event"]
