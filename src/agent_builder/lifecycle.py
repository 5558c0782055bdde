"""Process lifecycle: mode selection, signals and exit status."""

import asyncio
import signal
import sys
from enum import Enum

from loguru import logger

from agent_builder.ingress.base import Ingress
from agent_builder.pipeline import AgentPipeline
from agent_builder.settings import Settings


class Mode(str, Enum):
    """Ingress mode chosen at startup."""

    INTERACTIVE = "interactive"
    QUEUE = "queue"


def select_mode(settings: Settings) -> Mode:
    """Interactive in development, queue worker otherwise."""
    return Mode.INTERACTIVE if settings.is_development else Mode.QUEUE


def configure_logging(level: str = "INFO") -> None:
    """Replace the default loguru sink with a stderr sink at the given level."""
    logger.remove()
    logger.add(sys.stderr, level=level.upper())


def _handle_termination(signum: int, frame: object) -> None:
    logger.info(f"Received {signal.Signals(signum).name}, shutting down...")
    sys.exit(0)


def install_signal_handlers() -> None:
    """Exit cleanly on SIGTERM/SIGINT without draining in-flight work."""
    signal.signal(signal.SIGTERM, _handle_termination)
    signal.signal(signal.SIGINT, _handle_termination)


def run(ingress: Ingress, pipeline: AgentPipeline | None = None) -> int:
    """Run an ingress strategy to completion.

    Args:
        ingress: Interactive or queue strategy
        pipeline: Pipeline to dispatch into (defaults to one built from settings)

    Returns:
        Exit status: the ingress's own status, or 1 on any unhandled failure
    """
    install_signal_handlers()
    pipeline = pipeline or AgentPipeline()
    logger.debug(f"Starting in {ingress.name} mode")
    try:
        return asyncio.run(ingress.run(pipeline.process))
    except Exception as e:
        logger.error(f"Failed to run in {ingress.name} mode: {e}")
        return 1
