"""Container build orchestration."""

from .orchestrator import BuildOrchestrator
from .toolchain import CommandResult, DockerToolchain, run_command

__all__ = ["BuildOrchestrator", "CommandResult", "DockerToolchain", "run_command"]
