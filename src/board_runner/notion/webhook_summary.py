"""Summaries of inbound Notion webhook deliveries.

Webhook payloads come in several shapes: "property updated" deliveries carry
``property_value`` directly, while "page updated" deliveries carry a nested
``properties`` bag. Lookups below are ordered, and the configured status
property always wins over any other status-shaped property.
"""

import logging
from collections.abc import Mapping
from typing import Any, Iterable, Optional

from pydantic import BaseModel

logger = logging.getLogger(__name__)

UNKNOWN_EVENT = "unknown"
NOT_AVAILABLE = "n/a"


class WebhookSummary(BaseModel):
    """Canonical view of a webhook delivery."""

    event_type: str = UNKNOWN_EVENT
    task_id: str = NOT_AVAILABLE
    status: str = NOT_AVAILABLE


def _get(obj: Any, *keys: str) -> Any:
    """Walk nested mappings, returning None as soon as a level is missing."""
    for key in keys:
        if not isinstance(obj, Mapping):
            return None
        obj = obj.get(key)
    return obj


def _first_non_empty(values: Iterable[Any]) -> str:
    for value in values:
        if value is None or isinstance(value, (Mapping, list)):
            continue
        text = str(value).strip()
        if text:
            return text
    return ""


def _read_status_property(prop: Any, allow_select: bool = False) -> str:
    """Read a status name out of a typed Notion property."""
    if not isinstance(prop, Mapping):
        return ""

    prop_type = prop.get("type")
    if prop_type == "status":
        return _first_non_empty([_get(prop, "status", "name")])
    if allow_select and prop_type == "select":
        return _first_non_empty([_get(prop, "select", "name")])
    if prop_type == "formula" and _get(prop, "formula", "type") == "string":
        return _first_non_empty([_get(prop, "formula", "string")])
    return ""


def _property_bags(payload: Mapping[str, Any]) -> list[Mapping[str, Any]]:
    bags = [
        _get(payload, "data", "page", "properties"),
        _get(payload, "data", "properties"),
        _get(payload, "properties"),
    ]
    return [bag for bag in bags if isinstance(bag, Mapping)]


def _read_status(payload: Mapping[str, Any], status_property_name: Optional[str]) -> str:
    # 1. direct property_value shape, configured name before the literal "status"
    direct = []
    if status_property_name:
        direct.append(_get(payload, "property_value", status_property_name, "name"))
    direct.append(_get(payload, "property_value", "status", "name"))
    status = _first_non_empty(direct)
    if status:
        return status

    bags = _property_bags(payload)

    # 2. the configured property in a typed-property bag
    if status_property_name:
        for bag in bags:
            status = _read_status_property(bag.get(status_property_name), allow_select=True)
            if status:
                return status

    # 3. any status-shaped property, whatever it is called
    for bag in bags:
        for name, prop in bag.items():
            status = _read_status_property(prop)
            if status:
                logger.debug(f"Webhook status read from property {name!r} instead of {status_property_name!r}")
                return status

    return ""


def summarize_notion_webhook_event(payload: Any, status_property_name: Optional[str]) -> WebhookSummary:
    """
    Reduce a webhook payload to event type, task id and status.

    Never raises: missing pieces come back as "unknown" (event type) or
    "n/a" (task id, status).

    Args:
        payload: Decoded webhook body, any shape
        status_property_name: Name of the board's status property

    Returns:
        WebhookSummary
    """
    if not isinstance(payload, Mapping):
        if payload is not None:
            logger.warning(f"Ignoring non-mapping webhook payload of type {type(payload).__name__}")
        payload = {}

    event_type = _first_non_empty([
        _get(payload, "type"),
        _get(payload, "event", "type"),
    ])
    task_id = _first_non_empty([
        _get(payload, "entity", "id"),
        _get(payload, "data", "page", "id"),
    ])
    status = _read_status(payload, status_property_name)

    return WebhookSummary(
        event_type=event_type or UNKNOWN_EVENT,
        task_id=task_id or NOT_AVAILABLE,
        status=status or NOT_AVAILABLE,
    )
