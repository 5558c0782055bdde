"""Build outcome models."""

from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field


class BuildStatus(str, Enum):
    """Outcome of the container pipeline for one agent."""

    UNAVAILABLE = "unavailable"  # toolchain probe failed, manual steps emitted
    BUILT_ONLY = "built_only"  # image built, no registry requested
    BUILT_AND_PUSHED = "built_and_pushed"
    FAILED = "failed"


class BuildResult(BaseModel):
    """Tagged result returned by the build orchestrator."""

    status: BuildStatus = Field(description="Pipeline outcome")
    image: str = Field(description="Local image tag for the agent")
    pushed_image: str | None = Field(default=None, description="Registry-qualified tag, when pushed")
    reason: str | None = Field(default=None, description="Failure detail for FAILED")
    manual_steps: list[str] = Field(
        default_factory=list, description="Commands an operator can run to finish by hand"
    )

    model_config = ConfigDict(frozen=True)

    @property
    def ok(self) -> bool:
        """Everything except FAILED counts as a processed event."""
        return self.status != BuildStatus.FAILED


class PipelineResult(BaseModel):
    """Result of one generation + build run."""

    agent_id: str
    output_dir: Path
    build: BuildResult

    model_config = ConfigDict(frozen=True)
