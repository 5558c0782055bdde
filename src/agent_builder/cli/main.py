"""CLI entry point for agent-builder."""

import asyncio
from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from agent_builder.lifecycle import Mode, configure_logging, run, select_mode
from agent_builder.settings import settings

app = typer.Typer(name="agent-builder", help="Generate and containerize agents from plugins and a character")
console = Console()


@app.callback()
def main(
    log_level: str = typer.Option(settings.log_level, "--log-level", help="Log level"),
) -> None:
    configure_logging(log_level)


@app.command()
def start(
    plugins: str | None = typer.Option(None, help="Comma-separated list of plugins"),
    character: str | None = typer.Option(None, help="Path to character file"),
    agent_id: str | None = typer.Option(None, "--agentId", "--agent-id", help="Unique ID for the agent"),
    registry: str | None = typer.Option(None, help="Docker registry URL"),
) -> None:
    """Start in the mode selected by the environment.

    AGENT_BUILDER_MODE (or NODE_ENV) set to "development" runs a single
    build from the flags; anything else starts the queue worker.

    Examples:
        AGENT_BUILDER_MODE=development agent-builder start --plugins thirdWeb \\
            --character characters/trader.json --agentId trader-01
        agent-builder start
    """
    mode = select_mode(settings)
    if mode == Mode.QUEUE:
        given = [
            flag
            for flag, value in (
                ("--plugins", plugins),
                ("--character", character),
                ("--agentId", agent_id),
                ("--registry", registry),
            )
            if value is not None
        ]
        if given:
            console.print(
                f"[yellow]Warning: {', '.join(given)} ignored in queue mode "
                f"(set AGENT_BUILDER_MODE=development or use 'build')[/yellow]"
            )
        _run_worker()
        return

    missing = [
        flag
        for flag, value in (("--plugins", plugins), ("--character", character), ("--agentId", agent_id))
        if value is None
    ]
    if missing:
        console.print(f"[red]Error: development mode requires {', '.join(missing)}[/red]")
        raise typer.Exit(1)
    _run_build(plugins, character, agent_id, registry)


@app.command()
def build(
    plugins: str = typer.Option(..., help="Comma-separated list of plugins"),
    character: str = typer.Option(..., help="Path to character file"),
    agent_id: str = typer.Option(..., "--agentId", "--agent-id", help="Unique ID for the agent"),
    registry: str | None = typer.Option(None, help="Docker registry URL"),
) -> None:
    """Generate and build one agent, then exit.

    Example:
        agent-builder build --plugins thirdWeb,solana --character trader.json --agentId trader-01
    """
    _run_build(plugins, character, agent_id, registry)


@app.command()
def worker() -> None:
    """Start worker mode (consume creation events from NATS).

    Example:
        AGENT_BUILDER_NATS_URL=nats://nats:4222 agent-builder worker
    """
    _run_worker()


@app.command()
def generate(
    plugins: str = typer.Option(..., help="Comma-separated list of plugins"),
    character: str = typer.Option(..., help="Path to character file"),
    agent_id: str = typer.Option(..., "--agentId", "--agent-id", help="Unique ID for the agent"),
) -> None:
    """Render the agent tree without invoking the container toolchain."""
    from agent_builder.errors import GenerationError
    from agent_builder.generator import AgentGenerator
    from agent_builder.models.events import AgentCreationEvent, GeneratorConfig

    event = AgentCreationEvent.from_cli(plugins, character, agent_id)
    try:
        output_dir = AgentGenerator(settings).generate(GeneratorConfig.for_event(event))
    except (GenerationError, OSError) as e:
        console.print(f"[red]✗ Generation failed: {e}[/red]")
        raise typer.Exit(1)

    table = Table(show_header=True)
    table.add_column("Artifact", style="cyan")
    table.add_column("Size", justify="right")
    for path in sorted(output_dir.iterdir()):
        if path.is_file():
            table.add_row(path.name, f"{path.stat().st_size} B")

    console.print(f"[green]✓ Generated agent in {output_dir}[/green]")
    console.print(table)


@app.command()
def submit(
    plugins: str = typer.Option(..., help="Comma-separated list of plugins"),
    character: str = typer.Option(..., help="Path to character file"),
    agent_id: str = typer.Option(..., "--agentId", "--agent-id", help="Unique ID for the agent"),
    registry: str | None = typer.Option(None, help="Docker registry URL"),
) -> None:
    """Publish a creation event for the queue workers.

    Example:
        agent-builder submit --plugins thirdWeb --character trader.json --agentId trader-01
    """
    from agent_builder.ingress.queue import publish_event
    from agent_builder.models.events import AgentCreationEvent

    event = AgentCreationEvent.from_cli(plugins, character, agent_id, registry)
    seq = asyncio.run(publish_event(event, settings))
    console.print(f"[green]✓ Published {agent_id} to {settings.nats_subject} (seq {seq})[/green]")


@app.command()
def info() -> None:
    """Show configuration information."""
    typer.echo("Agent Builder Configuration:")
    typer.echo(f"  Mode: {select_mode(settings).value} ({settings.effective_mode})")
    typer.echo(f"  Builds root: {Path(settings.builds_root).resolve()}")
    typer.echo(f"  Base image context: {Path(settings.repo_root).resolve()}")
    typer.echo(f"  Docker: {settings.docker_bin} (base image {settings.base_image})")
    typer.echo(f"  NATS URL: {settings.nats_url}")
    typer.echo(f"  Subject: {settings.nats_subject}")
    typer.echo(f"  Queue group: {settings.nats_queue_group}")


@app.command()
def version() -> None:
    """Show version information."""
    from agent_builder import __version__

    typer.echo(f"agent-builder v{__version__}")


def _run_build(plugins: str, character: str, agent_id: str, registry: str | None) -> None:
    from agent_builder.ingress.interactive import InteractiveIngress

    ingress = InteractiveIngress.from_flags(plugins, character, agent_id, registry)
    raise typer.Exit(run(ingress))


def _run_worker() -> None:
    from agent_builder.ingress.queue import QueueIngress

    raise typer.Exit(run(QueueIngress(settings)))


if __name__ == "__main__":
    app()
