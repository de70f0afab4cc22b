"""Board runner configuration: schema models and loading."""

from board_runner.config.models import (
    BoardConfig,
    NotionConfig,
    PropertyNames,
    QueueConfig,
    QueueOrder,
    StatusValues,
    TypeValues,
)
from board_runner.config.loader import DEFAULT_CONFIG_PATH, apply_env_overrides, load_config

__all__ = [
    "BoardConfig",
    "NotionConfig",
    "PropertyNames",
    "QueueConfig",
    "QueueOrder",
    "StatusValues",
    "TypeValues",
    "DEFAULT_CONFIG_PATH",
    "apply_env_overrides",
    "load_config",
]
