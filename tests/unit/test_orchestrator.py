"""Unit tests for the container build orchestrator.

All docker invocations go through a recording runner; nothing is spawned.
"""

from pathlib import Path

import pytest

from agent_builder.build.orchestrator import BuildOrchestrator
from agent_builder.build.toolchain import CommandResult, DockerToolchain, run_command
from agent_builder.models.build import BuildStatus


@pytest.fixture
def output_dir(tmp_path):
    path = tmp_path / "builds" / "a1"
    path.mkdir(parents=True)
    return path


def _orchestrator(settings, runner):
    return BuildOrchestrator(settings, DockerToolchain("docker", runner=runner))


class TestToolchainUnavailable:
    """Probe failure degrades to manual instructions."""

    @pytest.mark.asyncio
    async def test_returns_unavailable_without_building(self, settings, output_dir, runner_factory):
        runner = runner_factory(fail_on={"docker info"})
        result = await _orchestrator(settings, runner).build(output_dir, "a1", "registry.example.com")

        assert result.status == BuildStatus.UNAVAILABLE
        assert result.ok
        assert runner.commands == ["docker info"]

    @pytest.mark.asyncio
    async def test_manual_steps(self, settings, output_dir, runner_factory):
        runner = runner_factory(fail_on={"docker info"})
        result = await _orchestrator(settings, runner).build(output_dir, "a1", "registry.example.com")

        assert result.manual_steps == [
            "Start Docker",
            f"cd {Path(settings.repo_root).resolve()}",
            "docker build -t eliza .",
            f"cd {output_dir}",
            "docker build -t custom-agent-a1 .",
            "docker tag custom-agent-a1 registry.example.com/custom-agent-a1",
            "docker push registry.example.com/custom-agent-a1",
        ]

    @pytest.mark.asyncio
    async def test_manual_steps_without_registry(self, settings, output_dir, runner_factory):
        runner = runner_factory(fail_on={"docker info"})
        result = await _orchestrator(settings, runner).build(output_dir, "a1")

        assert not any("push" in step for step in result.manual_steps)


class TestBuild:
    """Build, tag and push sequencing."""

    @pytest.mark.asyncio
    async def test_build_only_without_registry(self, settings, output_dir, runner_factory):
        runner = runner_factory()
        result = await _orchestrator(settings, runner).build(output_dir, "a1")

        assert result.status == BuildStatus.BUILT_ONLY
        assert result.image == "custom-agent-a1"
        assert result.pushed_image is None
        assert runner.commands == [
            "docker info",
            "docker build -t eliza .",
            "docker build -t custom-agent-a1 .",
        ]

    @pytest.mark.asyncio
    async def test_build_contexts(self, settings, output_dir, runner_factory):
        runner = runner_factory()
        await _orchestrator(settings, runner).build(output_dir, "a1")

        contexts = [cwd for _, cwd in runner.calls]
        assert contexts == [None, Path(settings.repo_root), output_dir]

    @pytest.mark.asyncio
    async def test_push_failure_never_attempted_without_registry(self, settings, output_dir, runner_factory):
        runner = runner_factory(fail_on={"push", "tag"})
        result = await _orchestrator(settings, runner).build(output_dir, "a1")

        assert result.status == BuildStatus.BUILT_ONLY
        assert not any("push" in c or " tag " in c for c in runner.commands)

    @pytest.mark.asyncio
    async def test_build_and_push(self, settings, output_dir, runner_factory):
        runner = runner_factory()
        result = await _orchestrator(settings, runner).build(output_dir, "a1", "registry.example.com/")

        assert result.status == BuildStatus.BUILT_AND_PUSHED
        assert result.pushed_image == "registry.example.com/custom-agent-a1"
        assert runner.commands[-2:] == [
            "docker tag custom-agent-a1 registry.example.com/custom-agent-a1",
            "docker push registry.example.com/custom-agent-a1",
        ]

    @pytest.mark.asyncio
    async def test_push_failure_is_failed(self, settings, output_dir, runner_factory):
        runner = runner_factory(fail_on={"docker push"})
        result = await _orchestrator(settings, runner).build(output_dir, "a1", "registry.example.com")

        assert result.status == BuildStatus.FAILED
        assert not result.ok
        assert "docker push registry.example.com/custom-agent-a1" in result.reason
        assert "simulated failure" in result.reason

    @pytest.mark.asyncio
    async def test_tag_failure_stops_before_push(self, settings, output_dir, runner_factory):
        runner = runner_factory(fail_on={"docker tag"})
        result = await _orchestrator(settings, runner).build(output_dir, "a1", "registry.example.com")

        assert result.status == BuildStatus.FAILED
        assert not any("push" in c for c in runner.commands)

    @pytest.mark.asyncio
    async def test_base_build_failure_stops_pipeline(self, settings, output_dir, runner_factory):
        runner = runner_factory(fail_on={"-t eliza"})
        result = await _orchestrator(settings, runner).build(output_dir, "a1")

        assert result.status == BuildStatus.FAILED
        assert runner.commands == ["docker info", "docker build -t eliza ."]

    def test_image_name_uses_prefix(self, settings):
        settings.image_prefix = "agent"
        assert BuildOrchestrator(settings).image_name("a1") == "agent-a1"


class TestRunCommand:
    """Real child processes for the runner itself."""

    @pytest.mark.asyncio
    async def test_missing_executable_reports_127(self):
        result = await run_command(["definitely-not-a-real-binary-xyz", "info"])
        assert result.returncode == 127
        assert not result.ok

    def test_describe_failure_uses_last_stderr_line(self):
        result = CommandResult(args=["docker", "push", "x"], returncode=1, stderr="a\nb\n")
        assert result.describe_failure() == "`docker push x` exited with status 1: b"
