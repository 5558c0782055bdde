"""Container build orchestration.

Drives the toolchain through probe -> base build -> agent build -> tag/push
and returns a tagged BuildResult instead of raising:

- UNAVAILABLE: the probe failed. Expected during local development without
  a daemon; the generated tree is left for a manual build and the steps to
  finish it are logged.
- BUILT_ONLY / BUILT_AND_PUSHED: success, depending on whether a registry
  was requested.
- FAILED: a step failed after the probe succeeded.
"""

from pathlib import Path

from loguru import logger

from agent_builder.build.toolchain import CommandResult, DockerToolchain
from agent_builder.models.build import BuildResult, BuildStatus
from agent_builder.settings import Settings, settings as default_settings


class BuildOrchestrator:
    """Sequential build/tag/push driver for one generated agent."""

    def __init__(self, settings: Settings | None = None, toolchain: DockerToolchain | None = None):
        self.settings = settings or default_settings
        self.toolchain = toolchain or DockerToolchain(self.settings.docker_bin)

    def image_name(self, agent_id: str) -> str:
        """Local image tag for an agent ("a1" -> "custom-agent-a1")."""
        return f"{self.settings.image_prefix}-{agent_id}"

    @staticmethod
    def registry_image(image: str, registry: str) -> str:
        return f"{registry.rstrip('/')}/{image}"

    def manual_steps(self, output_dir: Path, agent_id: str, registry: str | None = None) -> list[str]:
        """Commands an operator runs to finish the build by hand."""
        docker = self.settings.docker_bin
        image = self.image_name(agent_id)
        steps = [
            "Start Docker",
            f"cd {Path(self.settings.repo_root).resolve()}",
            f"{docker} build -t {self.settings.base_image} .",
            f"cd {output_dir}",
            f"{docker} build -t {image} .",
        ]
        if registry:
            full = self.registry_image(image, registry)
            steps.append(f"{docker} tag {image} {full}")
            steps.append(f"{docker} push {full}")
        return steps

    async def build(self, output_dir: Path, agent_id: str, registry: str | None = None) -> BuildResult:
        """Build (and optionally push) the agent image.

        Args:
            output_dir: Generated agent directory (build context)
            agent_id: Agent identifier, used for the image tag
            registry: Registry host; tag and push are skipped when None

        Returns:
            BuildResult tagged with the outcome
        """
        image = self.image_name(agent_id)
        steps = self.manual_steps(output_dir, agent_id, registry)

        probe = await self.toolchain.info()
        if not probe.ok:
            logger.warning("Docker setup failed. Skipping Docker build and push.")
            logger.info(f"Agent files generated in: {output_dir}")
            logger.info("To build manually:")
            for number, step in enumerate(steps, start=1):
                logger.info(f"{number}. {step}")
            return BuildResult(status=BuildStatus.UNAVAILABLE, image=image, manual_steps=steps)

        logger.info(f"Building base image {self.settings.base_image}...")
        result = await self.toolchain.build(self.settings.base_image, Path(self.settings.repo_root))
        if not result.ok:
            return self._failed(image, result, steps)
        logger.info(f"Successfully built base image {self.settings.base_image}")

        result = await self.toolchain.build(image, output_dir)
        if not result.ok:
            return self._failed(image, result, steps)
        logger.info(f"Built Docker image: {image}")

        if not registry:
            logger.info(f"No registry requested, skipping push for {image}")
            return BuildResult(status=BuildStatus.BUILT_ONLY, image=image)

        full_image = self.registry_image(image, registry)
        result = await self.toolchain.tag(image, full_image)
        if not result.ok:
            return self._failed(image, result, steps)
        result = await self.toolchain.push(full_image)
        if not result.ok:
            return self._failed(image, result, steps)

        logger.info(f"Successfully pushed {full_image} to registry")
        return BuildResult(status=BuildStatus.BUILT_AND_PUSHED, image=image, pushed_image=full_image)

    @staticmethod
    def _failed(image: str, result: CommandResult, steps: list[str]) -> BuildResult:
        reason = result.describe_failure()
        logger.error(f"Container build failed for {image}: {reason}")
        return BuildResult(status=BuildStatus.FAILED, image=image, reason=reason, manual_steps=steps)
