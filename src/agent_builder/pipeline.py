"""Generation + build pipeline for one creation event.

Both ingress modes dispatch into ``AgentPipeline.process``. Runs for the same
agent id are serialized inside the process; a lock lives only while a run for
that id holds or awaits it. Runs in separate worker processes are not
coordinated and the last writer wins.
"""

import asyncio
import weakref

from loguru import logger

from agent_builder.build.orchestrator import BuildOrchestrator
from agent_builder.errors import BuildError
from agent_builder.generator.generator import AgentGenerator
from agent_builder.models.build import BuildStatus, PipelineResult
from agent_builder.models.events import AgentCreationEvent, GeneratorConfig
from agent_builder.settings import Settings, settings as default_settings


class AgentPipeline:
    """Generates an agent tree and drives its container build."""

    def __init__(
        self,
        settings: Settings | None = None,
        generator: AgentGenerator | None = None,
        orchestrator: BuildOrchestrator | None = None,
    ):
        self.settings = settings or default_settings
        self.generator = generator or AgentGenerator(self.settings)
        self.orchestrator = orchestrator or BuildOrchestrator(self.settings)
        self._locks: weakref.WeakValueDictionary[str, asyncio.Lock] = weakref.WeakValueDictionary()

    async def process(self, event: AgentCreationEvent) -> PipelineResult:
        """Process one creation event.

        Args:
            event: Creation event from either ingress mode

        Returns:
            PipelineResult (an unavailable toolchain still counts as success)

        Raises:
            GenerationError, OSError: If the tree could not be generated
            BuildError: If the toolchain failed after the probe succeeded
        """
        lock = self._locks.setdefault(event.agent_id, asyncio.Lock())
        async with lock:
            return await self._process(event)

    async def _process(self, event: AgentCreationEvent) -> PipelineResult:
        logger.info(f"Processing agent creation: {event.model_dump(by_alias=True)}")
        try:
            output_dir = self.generator.generate(GeneratorConfig.for_event(event))
            build = await self.orchestrator.build(output_dir, event.agent_id, event.docker_registry)
            if build.status == BuildStatus.FAILED:
                raise BuildError(build.reason or "container build failed", build.manual_steps)
        except Exception as e:
            logger.error(
                f"Error processing agent creation event {event.model_dump(by_alias=True)}: {e}"
            )
            raise

        if build.status == BuildStatus.UNAVAILABLE:
            logger.info(f"Generated {event.agent_id} without a container build")
        else:
            logger.info(f"Successfully processed agent creation for {event.agent_id}")
        return PipelineResult(agent_id=event.agent_id, output_dir=output_dir, build=build)


async def process_agent_creation(
    event: AgentCreationEvent,
    settings: Settings | None = None,
    orchestrator: BuildOrchestrator | None = None,
) -> PipelineResult:
    """Process one event with a fresh pipeline.

    Example:
        >>> event = AgentCreationEvent(plugins=["alpha"], character="c.json", agentId="a1")
        >>> result = await process_agent_creation(event)
        >>> result.build.status
        <BuildStatus.UNAVAILABLE: 'unavailable'>
    """
    return await AgentPipeline(settings, orchestrator=orchestrator).process(event)
