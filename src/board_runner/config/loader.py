"""Configuration loading from YAML and environment."""

import logging
import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Optional

import yaml
from dotenv import load_dotenv

from board_runner.config.models import BoardConfig

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path("config/default.yaml")

# (section path, field, env var names in lookup order)
ENV_OVERRIDES: list[tuple[tuple[str, ...], str, tuple[str, ...]]] = [
    (("notion", "statuses"), "not_started", ("NOTION_STATUS_NOT_STARTED",)),
    (("notion", "statuses"), "in_progress", ("NOTION_STATUS_IN_PROGRESS",)),
    (("notion", "statuses"), "done", ("NOTION_STATUS_DONE",)),
    (("notion", "type_values"), "epic", ("NOTION_TYPE_EPIC",)),
    (("notion", "properties"), "name", ("NOTION_PROP_NAME",)),
    (("notion", "properties"), "status", ("NOTION_PROP_STATUS",)),
    (("notion", "properties"), "agent", ("NOTION_PROP_AGENT",)),
    (("notion", "properties"), "priority", ("NOTION_PROP_PRIORITY",)),
    (("notion", "properties"), "type", ("NOTION_PROP_TYPE",)),
    (("notion", "properties"), "parent_item", ("NOTION_PROP_PARENT_ITEM", "NOTION_PROP_EPIC")),
    (("notion", "properties"), "model", ("NOTION_PROP_MODEL",)),
    (("queue",), "order", ("QUEUE_ORDER",)),
    (("queue",), "max_tasks_per_run", ("MAX_TASKS_PER_RUN",)),
    (("queue",), "poll_interval_seconds", ("QUEUE_POLL_INTERVAL_MS",)),
    (("queue",), "debounce_seconds", ("QUEUE_DEBOUNCE_MS",)),
    (("queue",), "run_on_startup", ("QUEUE_RUN_ON_STARTUP",)),
]

# camelCase spellings accepted in YAML for the keys above
_SECTION_ALIASES = {"type_values": "typeValues"}
_FIELD_ALIASES = {
    "not_started": "notStarted",
    "in_progress": "inProgress",
    "parent_item": "parentItem",
    "max_tasks_per_run": "maxTasksPerRun",
    "poll_interval_seconds": "pollIntervalSeconds",
    "debounce_seconds": "debounceSeconds",
    "run_on_startup": "runOnStartup",
}

TRUE_VALUES = {"1", "true", "yes", "on"}


def _milliseconds(name: str, value: str) -> float:
    try:
        return float(value) / 1000
    except ValueError:
        raise ValueError(f"{name} must be a number of milliseconds, got {value!r}") from None


def _flag(name: str, value: str) -> bool:
    return value.lower() in TRUE_VALUES


# env values that need converting before validation
_CONVERTERS = {
    "poll_interval_seconds": _milliseconds,
    "debounce_seconds": _milliseconds,
    "run_on_startup": _flag,
}


def _read_yaml(config_path: Path) -> dict[str, Any]:
    if not config_path.exists():
        logger.warning(f"Config file not found at {config_path}, using defaults")
        return {}

    with open(config_path) as f:
        data = yaml.safe_load(f)

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"Config file {config_path} must contain a mapping, got {type(data).__name__}")
    return data


def _section(data: dict[str, Any], path: tuple[str, ...]) -> dict[str, Any]:
    """Walk (and create) nested sections, reusing a camelCase key if present."""
    node = data
    for key in path:
        alias = _SECTION_ALIASES.get(key)
        if key not in node and alias and alias in node:
            key = alias
        child = node.get(key)
        if not isinstance(child, dict):
            child = {}
            node[key] = child
        node = child
    return node


def apply_env_overrides(data: dict[str, Any], env: Mapping[str, str]) -> dict[str, Any]:
    """
    Overlay environment variables onto raw config data.

    Blank variables are ignored. Millisecond variables are converted to
    seconds and flags are true for 1/true/yes/on. The input dict is
    modified in place and returned.

    Args:
        data: Raw configuration mapping (as read from YAML)
        env: Environment mapping

    Returns:
        The same mapping with overrides applied

    Raises:
        ValueError: If a millisecond variable is not numeric
    """
    for path, field, names in ENV_OVERRIDES:
        for name in names:
            value = env.get(name)
            if value is None or not value.strip():
                continue
            section = _section(data, path)
            section.pop(_FIELD_ALIASES.get(field, ""), None)
            convert = _CONVERTERS.get(field)
            section[field] = convert(name, value.strip()) if convert else value.strip()
            logger.debug(f"Config override from {name}: {'.'.join(path)}.{field}")
            break
    return data


def load_config(
    config_path: Optional[Path] = None,
    env: Optional[Mapping[str, str]] = None,
) -> BoardConfig:
    """
    Load and validate the board configuration.

    Args:
        config_path: YAML file to read (default: config/default.yaml)
        env: Environment mapping for overrides (default: os.environ after .env)

    Returns:
        Validated BoardConfig

    Raises:
        yaml.YAMLError: If the file is not valid YAML
        ValueError: If the file is not a mapping or an env value is malformed
        pydantic.ValidationError: If the configuration is invalid
    """
    if env is None:
        load_dotenv()
        env = os.environ

    if config_path is None:
        config_path = DEFAULT_CONFIG_PATH

    data = _read_yaml(Path(config_path))
    apply_env_overrides(data, env)

    config = BoardConfig.model_validate(data)
    logger.debug(f"Loaded config: order={config.queue.order.value}")
    return config
