"""Enums for task stage, move direction and wire format."""

from __future__ import annotations

from enum import Enum


class Stage(str, Enum):
    """Lifecycle stage of a task.

    Stages are totally ordered by declaration: todo < in_progress < done.
    Comparison uses that position, not the string value.
    """

    TODO = "todo"
    IN_PROGRESS = "in_progress"
    DONE = "done"

    @property
    def rank(self) -> int:
        """Position of the stage in the workflow (0 = first)."""
        return _ORDER.index(self)

    def next(self) -> Stage | None:
        """The following stage, or None at the last stage."""
        return next_stage(self)

    def previous(self) -> Stage | None:
        """The preceding stage, or None at the first stage."""
        return previous_stage(self)

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Stage):
            return NotImplemented
        return self.rank < other.rank

    def __le__(self, other: object) -> bool:
        if not isinstance(other, Stage):
            return NotImplemented
        return self.rank <= other.rank

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, Stage):
            return NotImplemented
        return self.rank > other.rank

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, Stage):
            return NotImplemented
        return self.rank >= other.rank


class Direction(str, Enum):
    """Direction of a one-step stage transition."""

    FORWARD = "forward"
    BACKWARD = "backward"


class WireFormat(str, Enum):
    """Field naming used when writing tasks to the remote collection.

    STANDARD sends ``stage`` with the canonical values. LEGACY sends
    ``status`` and names the middle stage ``progress``, which is what
    older backends validate against.
    """

    STANDARD = "standard"
    LEGACY = "legacy"

    @property
    def stage_field(self) -> str:
        return "status" if self is WireFormat.LEGACY else "stage"

    def encode_stage(self, stage: Stage) -> str:
        """Wire value for a stage in this format."""
        if self is WireFormat.LEGACY:
            return LEGACY_STAGE_NAMES.get(stage, stage.value)
        return stage.value


_ORDER: tuple[Stage, ...] = (Stage.TODO, Stage.IN_PROGRESS, Stage.DONE)

# Legacy wire names accepted when reading tasks
STAGE_ALIASES: dict[str, Stage] = {
    "progress": Stage.IN_PROGRESS,
}
LEGACY_STAGE_NAMES: dict[Stage, str] = {stage: name for name, stage in STAGE_ALIASES.items()}


def stage_order() -> tuple[Stage, ...]:
    """All stages in workflow order."""
    return _ORDER


def next_stage(stage: Stage) -> Stage | None:
    """Get the next stage in the workflow (e.g., todo -> in_progress)."""
    idx = _ORDER.index(stage)
    if idx < len(_ORDER) - 1:
        return _ORDER[idx + 1]
    return None


def previous_stage(stage: Stage) -> Stage | None:
    """Get the previous stage in the workflow (e.g., in_progress -> todo)."""
    idx = _ORDER.index(stage)
    if idx > 0:
        return _ORDER[idx - 1]
    return None


def transition(stage: Stage, direction: Direction) -> Stage | None:
    """Target stage of a one-step move, or None when no move is available."""
    if direction == Direction.FORWARD:
        return next_stage(stage)
    return previous_stage(stage)


def resolve_stage(value: str | Stage) -> Stage:
    """Resolve a wire value (including aliases) to a Stage.

    Raises:
        ValueError: If the value is not a known stage or alias.
    """
    if isinstance(value, Stage):
        return value
    if value in STAGE_ALIASES:
        return STAGE_ALIASES[value]
    return Stage(value)
