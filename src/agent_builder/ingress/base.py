"""Ingress strategy interface.

An ingress turns some input source into AgentCreationEvents and hands each
one to the same dispatch coroutine. The strategy never changes what the
pipeline does with an event.
"""

from abc import ABC, abstractmethod
from typing import Awaitable, Callable

from agent_builder.models.build import PipelineResult
from agent_builder.models.events import AgentCreationEvent

Dispatch = Callable[[AgentCreationEvent], Awaitable[PipelineResult]]


class Ingress(ABC):
    """Source of creation events."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Mode name for logging (e.g., "queue")."""
        pass

    @abstractmethod
    async def run(self, dispatch: Dispatch) -> int:
        """Feed events to dispatch until the source is exhausted.

        Args:
            dispatch: Pipeline entry point

        Returns:
            Process exit status

        Raises:
            Exception: Failures the mode does not absorb itself
        """
        pass
