"""Agent source tree generation."""

from .generator import AgentGenerator, generate_agent
from .render import EntryPoint, EntryPointTemplate, validate_plugins

__all__ = [
    "AgentGenerator",
    "EntryPoint",
    "EntryPointTemplate",
    "generate_agent",
    "validate_plugins",
]
