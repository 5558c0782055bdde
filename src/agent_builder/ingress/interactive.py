"""Interactive ingress: one event from command-line flags."""

from loguru import logger

from agent_builder.ingress.base import Dispatch, Ingress
from agent_builder.models.events import AgentCreationEvent


class InteractiveIngress(Ingress):
    """Dispatches a single event and returns.

    Failures propagate to the lifecycle controller, which exits non-zero.
    """

    def __init__(self, event: AgentCreationEvent):
        self.event = event

    @property
    def name(self) -> str:
        return "interactive"

    @classmethod
    def from_flags(
        cls, plugins: str, character: str, agent_id: str, registry: str | None = None
    ) -> "InteractiveIngress":
        return cls(AgentCreationEvent.from_cli(plugins, character, agent_id, registry))

    async def run(self, dispatch: Dispatch) -> int:
        result = await dispatch(self.event)
        logger.info(f"Finished {result.agent_id}: {result.build.status.value}")
        return 0
