"""Application settings."""

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings

from ..models import WireFormat


class Settings(BaseSettings):
    """Application settings."""

    api_url: str = Field(
        default="http://localhost:8080",
        description="Root URL of the server exposing the /tasks collection",
    )

    timeout: float | None = Field(
        default=None,
        description="Request timeout in seconds (unset waits indefinitely)",
    )

    serialize_mutations: bool = Field(
        default=False,
        description="Run one mutation and its refresh at a time",
    )

    wire_format: WireFormat = Field(
        default=WireFormat.STANDARD,
        description="Request body naming: standard (stage) or legacy (status/progress)",
    )

    project_root: Path = Field(
        default=Path(),
        description="Directory containing the optional taskboard.yml",
    )

    verbose: int = Field(
        default=0,
        description="Verbosity level (0=off, 1=INFO, 2+=DEBUG)",
    )

    log_file: Path | None = Field(
        default=None,
        description="Optional path to write logs to file",
    )

    model_config = {
        "env_prefix": "TASKBOARD_",
    }
