"""Creation event models.

The wire format is the JSON document published on the creation subject:

    {"plugins": ["thirdWeb"], "character": "characters/trader.json",
     "agentId": "trader-01", "dockerRegistry": "registry.example.com"}

Both the camelCase wire names and the snake_case attribute names are
accepted on input. ``model_dump(by_alias=True)`` produces the wire form.
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator


class AgentCreationEvent(BaseModel):
    """Request to generate and build one agent."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    plugins: list[str] = Field(
        default_factory=list, description="Plugin identifiers, in wiring order"
    )
    character: str = Field(description="Path to the character configuration file")
    agent_id: str = Field(
        alias="agentId", description="Unique agent identifier (directory, package and image tag)"
    )
    docker_registry: str | None = Field(
        default=None, alias="dockerRegistry", description="Registry host; push is skipped when unset"
    )

    @field_validator("docker_registry")
    @classmethod
    def _blank_registry_is_none(cls, value: str | None) -> str | None:
        if value is not None and not value.strip():
            return None
        return value

    @classmethod
    def from_cli(
        cls,
        plugins: str,
        character: str,
        agent_id: str,
        registry: str | None = None,
    ) -> "AgentCreationEvent":
        """Build an event from command-line flag values.

        Args:
            plugins: Comma-separated plugin identifiers
            character: Path to the character file
            agent_id: Agent identifier
            registry: Optional registry host

        Returns:
            AgentCreationEvent

        Example:
            >>> event = AgentCreationEvent.from_cli("alpha, beta", "c.json", "a1")
            >>> event.plugins
            ['alpha', 'beta']
        """
        return cls(
            plugins=[p.strip() for p in plugins.split(",") if p.strip()],
            character=character,
            agent_id=agent_id,
            docker_registry=registry,
        )

    @classmethod
    def from_message(cls, data: bytes | str) -> "AgentCreationEvent":
        """Decode a queue message body.

        Raises:
            pydantic.ValidationError: If the body is not JSON or lacks required fields
        """
        return cls.model_validate_json(data)


class GeneratorConfig(BaseModel):
    """Inputs to the agent generator."""

    plugins: list[str] = Field(default_factory=list)
    character: str
    output_dir: str = Field(description="Directory name under the builds root")

    @classmethod
    def for_event(cls, event: AgentCreationEvent) -> "GeneratorConfig":
        return cls(plugins=event.plugins, character=event.character, output_dir=event.agent_id)
