"""Task data models."""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class Task(BaseModel):
    """One card from the board, as handed to the selection engine."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    id: str
    name: str = ""
    status: str = ""
    type: str = ""

    # Hierarchy (one level deep)
    parent_id: Optional[str] = Field(default=None, alias="parentId")

    # Ordering
    created_time: Optional[str] = Field(default=None, alias="createdTime")
    priority: Optional[str] = None  # e.g. "P1"

    # Board metadata
    agents: list[str] = Field(default_factory=list)
    model: Optional[str] = None
    url: Optional[str] = None
    last_edited_time: Optional[str] = Field(default=None, alias="lastEditedTime")


class SelectionSource(str, Enum):
    """Which partition a selected task came from."""

    IN_PROGRESS = "in_progress"
    NOT_STARTED = "not_started"


class SelectionResult(BaseModel):
    """Result of picking the next task."""

    task: Optional[Task] = None
    source: Optional[SelectionSource] = None

    @property
    def found(self) -> bool:
        return self.task is not None


class EpicCompletionResult(BaseModel):
    """Whether every child of an epic is done, with the children inspected."""

    all_done: bool
    children: list[Task] = Field(default_factory=list)
