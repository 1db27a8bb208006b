"""Task domain model."""

from __future__ import annotations

from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from .enums import Stage, WireFormat, resolve_stage

TaskId = int | str


class Task(BaseModel):
    """A task as stored by the remote collection.

    Instances are immutable; the board only replaces them on refresh.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: TaskId  # Assigned by the remote store
    title: str
    description: str = ""
    # Legacy backends send "status" instead of "stage"
    stage: Stage = Field(
        default=Stage.TODO,
        validation_alias=AliasChoices("stage", "status"),
    )

    @field_validator("description", mode="before")
    @classmethod
    def _null_description(cls, v: Any) -> Any:
        return "" if v is None else v

    @field_validator("stage", mode="before")
    @classmethod
    def _resolve_stage(cls, v: Any) -> Any:
        if isinstance(v, str):
            return resolve_stage(v)
        return v

    def to_payload(self, wire_format: WireFormat = WireFormat.STANDARD) -> dict[str, Any]:
        """Convert to the JSON body used for a full update."""
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            wire_format.stage_field: wire_format.encode_stage(self.stage),
        }

    def to_draft(self, **changes: Any) -> TaskDraft:
        """Copy the editable fields into a draft, applying any changes."""
        fields = {
            "title": self.title,
            "description": self.description,
            "stage": self.stage,
        }
        fields.update(changes)
        return TaskDraft(**fields)


class TaskDraft(BaseModel):
    """Editable task fields, used for creation and full-replacement updates."""

    model_config = ConfigDict(frozen=True)

    title: str
    description: str = ""
    stage: Stage = Stage.TODO

    @field_validator("title")
    @classmethod
    def validate_title(cls, v: str) -> str:
        """Reject empty or whitespace-only titles."""
        if not v.strip():
            raise ValueError("Title is required")
        return v

    @field_validator("description", mode="before")
    @classmethod
    def _null_description(cls, v: Any) -> Any:
        return "" if v is None else v

    @field_validator("stage", mode="before")
    @classmethod
    def _resolve_stage(cls, v: Any) -> Any:
        if isinstance(v, str):
            return resolve_stage(v)
        return v

    def to_payload(self, wire_format: WireFormat = WireFormat.STANDARD) -> dict[str, Any]:
        """Convert to the JSON body used for creation."""
        return {
            "title": self.title,
            "description": self.description,
            wire_format.stage_field: wire_format.encode_stage(self.stage),
        }
