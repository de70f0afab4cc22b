"""Configuration models for the board runner."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class QueueOrder(str, Enum):
    """Ordering policies applied within a candidate partition."""

    CREATED = "created"
    ALPHABETICAL = "alphabetical"
    PRIORITY_THEN_ALPHABETICAL = "priority_then_alphabetical"


class _ConfigModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="forbid")


def _require_label(value: str) -> str:
    if not value or not value.strip():
        raise ValueError("label must not be blank")
    return value


class StatusValues(_ConfigModel):
    """Status labels used on the board. Compared exactly against task status."""

    not_started: str = Field(default="Not Started", alias="notStarted")
    in_progress: str = Field(default="In Progress", alias="inProgress")
    done: str = "Done"

    @field_validator("not_started", "in_progress", "done")
    @classmethod
    def check_labels(cls, value: str) -> str:
        return _require_label(value)

    @model_validator(mode="after")
    def labels_are_distinct(self) -> "StatusValues":
        labels = [self.not_started, self.in_progress, self.done]
        if len(set(labels)) != len(labels):
            raise ValueError(f"status labels must be distinct, got {labels}")
        return self


class TypeValues(_ConfigModel):
    """Type labels used on the board."""

    epic: str = "Epic"

    @field_validator("epic")
    @classmethod
    def check_labels(cls, value: str) -> str:
        return _require_label(value)


class PropertyNames(_ConfigModel):
    """Names of the board properties that carry each task field."""

    name: str = "Name"
    status: str = "Status"
    agent: str = "Agent"
    priority: str = "Priority"
    type: str = "Type"
    parent_item: str = Field(default="Parent item", alias="parentItem")
    model: str = "Model"


class NotionConfig(_ConfigModel):
    """Board schema: status labels, type labels and property names."""

    statuses: StatusValues = Field(default_factory=StatusValues)
    type_values: TypeValues = Field(default_factory=TypeValues, alias="typeValues")
    properties: PropertyNames = Field(default_factory=PropertyNames)


class QueueConfig(_ConfigModel):
    """Queue policy for the automation loop. A poll interval of 0 disables polling."""

    order: QueueOrder = QueueOrder.CREATED
    max_tasks_per_run: int = Field(default=50, ge=1, alias="maxTasksPerRun")
    poll_interval_seconds: float = Field(default=60.0, ge=0, alias="pollIntervalSeconds")
    debounce_seconds: float = Field(default=1.5, ge=0, alias="debounceSeconds")
    run_on_startup: bool = Field(default=True, alias="runOnStartup")


class BoardConfig(_ConfigModel):
    """Top-level configuration consumed by the selection engine."""

    notion: NotionConfig = Field(default_factory=NotionConfig)
    queue: QueueConfig = Field(default_factory=QueueConfig)
