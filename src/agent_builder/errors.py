"""Exceptions raised by the agent build pipeline."""


class AgentBuilderError(Exception):
    """Base class for pipeline failures."""


class GenerationError(AgentBuilderError):
    """The agent source tree could not be rendered."""


class TemplateError(GenerationError):
    """The entry-point template is malformed."""


class PluginValidationError(GenerationError):
    """One or more plugin identifiers cannot be rendered as code."""

    def __init__(self, invalid: list[str]):
        self.invalid = invalid
        super().__init__(
            f"Invalid plugin identifier(s): {', '.join(repr(p) for p in invalid)}"
        )


class BuildError(AgentBuilderError):
    """The container toolchain failed after it was engaged."""

    def __init__(self, message: str, manual_steps: list[str] | None = None):
        super().__init__(message)
        self.manual_steps = manual_steps or []
