"""Configuration models for taskboard.yml."""

from pydantic import BaseModel, Field, field_validator

from .enums import Stage, stage_order


class ColumnConfig(BaseModel):
    """Configuration for a single board column."""

    stage: Stage
    title: str = Field(..., min_length=1)


class BoardConfig(BaseModel):
    """Configuration for board columns and destructive-action prompts."""

    columns: list[ColumnConfig] = Field(..., min_length=3, max_length=3)
    confirm_delete: bool = True

    @field_validator("columns")
    @classmethod
    def validate_columns(cls, v: list[ColumnConfig]) -> list[ColumnConfig]:
        """Validate that columns cover every stage exactly once, in stage order."""
        stages = [col.stage for col in v]

        if len(stages) != len(set(stages)):
            raise ValueError("Column stages must be unique")

        if tuple(stages) != stage_order():
            expected = ", ".join(stage.value for stage in stage_order())
            raise ValueError(f"Columns must be listed in stage order: {expected}")

        return v

    def get_title(self, stage: Stage) -> str:
        """Get display title for a stage."""
        for col in self.columns:
            if col.stage == stage:
                return col.title
        return stage.value.replace("_", " ").title()

    @classmethod
    def default(cls) -> "BoardConfig":
        """Return default 3-column configuration."""
        return cls(
            columns=[
                ColumnConfig(stage=Stage.TODO, title="To Do"),
                ColumnConfig(stage=Stage.IN_PROGRESS, title="In Progress"),
                ColumnConfig(stage=Stage.DONE, title="Done"),
            ]
        )


class TaskboardConfig(BaseModel):
    """Root configuration from taskboard.yml."""

    version: int = 1
    board: BoardConfig = Field(default_factory=BoardConfig.default)

    @classmethod
    def default(cls) -> "TaskboardConfig":
        """Return default configuration."""
        return cls(board=BoardConfig.default())
