"""Application settings using Pydantic Settings."""

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Agent builder configuration.

    Every field can be set through an ``AGENT_BUILDER_`` prefixed environment
    variable or a ``.env`` file. ``mode`` falls back to the conventional ``NODE_ENV``
    variable when ``AGENT_BUILDER_MODE`` is unset.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="AGENT_BUILDER_",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Startup mode
    mode: str | None = Field(
        default=None,
        description="'development' runs a single interactive build, anything else runs the queue worker",
    )
    node_env: str | None = Field(
        default=None,
        validation_alias="NODE_ENV",
        description="Fallback for mode when AGENT_BUILDER_MODE is unset",
    )

    # Filesystem
    builds_root: Path = Field(
        default=Path("builds"), description="Root directory for generated agent trees"
    )
    repo_root: Path = Field(
        default=Path(".."), description="Build context for the shared base image"
    )
    template_path: Path | None = Field(
        default=None, description="Override for the entry-point template (defaults to the packaged one)"
    )

    # NATS
    nats_url: str = Field(default="nats://localhost:4222", description="NATS server URL")
    nats_subject: str = Field(default="agent-creation", description="Subject carrying creation events")
    nats_stream: str = Field(default="agent-creation", description="JetStream stream backing the subject")
    nats_queue_group: str = Field(
        default="agent-builder-group", description="Durable queue group shared by workers"
    )
    client_name: str = Field(default="agent-builder", description="Client name reported to the broker")
    nats_ack_wait: float = Field(
        default=60.0,
        gt=0,
        description="Seconds before an unacknowledged message is redelivered (renewed while a build runs)",
    )

    # Container toolchain
    docker_bin: str = Field(default="docker", description="Container toolchain executable")
    base_image: str = Field(default="eliza", description="Tag of the shared base image")
    image_prefix: str = Field(default="custom-agent", description="Prefix for per-agent image tags")
    agent_port: int = Field(default=3000, description="Port exposed by generated agents")

    # Generated package naming
    core_package: str = Field(default="@elizaos/core", description="Agent runtime package")
    plugin_package_prefix: str = Field(
        default="@elizaos/plugin-", description="Package name prefix for plugins"
    )
    agent_package_prefix: str = Field(
        default="@elizaos/agent-", description="Package name prefix for generated agents"
    )

    # Logging
    log_level: str = Field(default="INFO", description="Log level for the stderr sink")

    @property
    def effective_mode(self) -> str:
        """Configured mode, falling back to NODE_ENV, then "production"."""
        mode = self.mode if self.mode is not None else self.node_env
        return mode if mode is not None else "production"

    @property
    def is_development(self) -> bool:
        """True when the process should run a single interactive build."""
        return self.effective_mode.lower() == "development"


settings = Settings()
