"""Data models for the agent build pipeline."""

from .build import BuildResult, BuildStatus, PipelineResult
from .events import AgentCreationEvent, GeneratorConfig

__all__ = [
    "AgentCreationEvent",
    "BuildResult",
    "BuildStatus",
    "GeneratorConfig",
    "PipelineResult",
]
