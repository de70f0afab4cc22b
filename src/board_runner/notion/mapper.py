"""Conversion of Notion page objects into board tasks."""

from collections.abc import Mapping
from typing import Any, Optional

from board_runner.config.models import BoardConfig
from board_runner.tasks.models import Task

UNTITLED = "(untitled)"


def _text(value: Any) -> str:
    """Coerce a scalar leaf value to text; containers and None become empty."""
    if value is None or isinstance(value, (Mapping, list)):
        return ""
    return str(value)


def _list(value: Any) -> list:
    return value if isinstance(value, list) else []


def _rich_text_to_plain(rich_text: Any) -> str:
    if not isinstance(rich_text, list):
        return ""
    return "".join(_text(item.get("plain_text")) for item in rich_text if isinstance(item, Mapping))


def _named(value: Any) -> str:
    if isinstance(value, Mapping):
        return _text(value.get("name"))
    return ""


def _read_formula_string(prop: Mapping[str, Any]) -> str:
    formula = prop.get("formula")
    if isinstance(formula, Mapping) and formula.get("type") == "string":
        return _text(formula.get("string"))
    return ""


def read_title(prop: Any) -> str:
    if not isinstance(prop, Mapping):
        return ""
    if prop.get("type") == "title":
        return _rich_text_to_plain(prop.get("title"))
    if prop.get("type") == "rich_text":
        return _rich_text_to_plain(prop.get("rich_text"))
    return ""


def read_select(prop: Any) -> str:
    """Read a select, status or string formula property as plain text."""
    if not isinstance(prop, Mapping):
        return ""

    prop_type = prop.get("type")
    if prop_type == "select":
        return _named(prop.get("select"))
    if prop_type == "status":
        return _named(prop.get("status"))
    if prop_type == "formula":
        return _read_formula_string(prop)
    return ""


def read_multi_select(prop: Any) -> list[str]:
    if not isinstance(prop, Mapping):
        return []

    if prop.get("type") == "multi_select":
        return [name for name in (_named(o) for o in _list(prop.get("multi_select"))) if name]

    if prop.get("type") == "people":
        people = [p for p in _list(prop.get("people")) if isinstance(p, Mapping)]
        return [name for name in (_text(p.get("name")) or _text(p.get("id")) for p in people) if name]

    return []


def read_relation_id(prop: Any) -> Optional[str]:
    """First related page id of a relation property."""
    if not isinstance(prop, Mapping) or prop.get("type") != "relation":
        return None

    relation = prop.get("relation")
    if isinstance(relation, list) and relation and isinstance(relation[0], Mapping):
        return _text(relation[0].get("id")) or None
    return None


def _read_parent_id(page: Mapping[str, Any], props: Mapping[str, Any], config: BoardConfig) -> Optional[str]:
    parent_id = read_relation_id(props.get(config.notion.properties.parent_item))
    if parent_id:
        return parent_id

    parent = page.get("parent")
    if isinstance(parent, Mapping) and parent.get("type") == "page_id":
        return _text(parent.get("page_id")) or None

    return None


def map_notion_page_to_task(page: Any, config: BoardConfig) -> Optional[Task]:
    """
    Convert a Notion page object into a Task.

    Args:
        page: Page object as returned by the Notion API
        config: Board configuration (property names)

    Returns:
        Task, or None if the object is not a page
    """
    if not isinstance(page, Mapping) or page.get("object") != "page":
        return None

    props = page.get("properties")
    if not isinstance(props, Mapping):
        props = {}
    names = config.notion.properties

    model = read_select(props.get(names.model))

    return Task(
        id=_text(page.get("id")),
        name=read_title(props.get(names.name)) or UNTITLED,
        status=read_select(props.get(names.status)),
        type=read_select(props.get(names.type)),
        priority=read_select(props.get(names.priority)) or None,
        agents=read_multi_select(props.get(names.agent)),
        model=model or None,
        parent_id=_read_parent_id(page, props, config),
        url=_text(page.get("url")) or None,
        created_time=_text(page.get("created_time")) or None,
        last_edited_time=_text(page.get("last_edited_time")) or None,
    )
