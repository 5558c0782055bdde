"""Shared fixtures for agent-builder tests."""

import json
from pathlib import Path

import pytest

from agent_builder.build.toolchain import CommandResult
from agent_builder.settings import Settings


class RecordingRunner:
    """Command runner that records calls instead of spawning processes.

    Any command whose text contains one of ``fail_on`` exits with status 1.
    """

    def __init__(self, fail_on: set[str] | None = None):
        self.fail_on = fail_on or set()
        self.calls: list[tuple[list[str], Path | None]] = []

    async def __call__(self, args: list[str], cwd: Path | None = None) -> CommandResult:
        self.calls.append((args, cwd))
        command = " ".join(args)
        if any(pattern in command for pattern in self.fail_on):
            return CommandResult(args=args, returncode=1, stderr="error: simulated failure\n")
        return CommandResult(args=args, returncode=0)

    @property
    def commands(self) -> list[str]:
        return [" ".join(args) for args, _ in self.calls]


@pytest.fixture
def settings(tmp_path):
    """Settings isolated to a temp directory."""
    return Settings(
        _env_file=None,
        mode="production",
        builds_root=tmp_path / "builds",
        repo_root=tmp_path / "repo",
    )


@pytest.fixture
def character_file(tmp_path):
    """Character file on disk."""
    path = tmp_path / "characters" / "trader.json"
    path.parent.mkdir(parents=True)
    path.write_text(json.dumps({"name": "Trader", "modelProvider": "openai"}))
    return path


@pytest.fixture
def runner_factory():
    """RecordingRunner class, for tests that pick which commands fail."""
    return RecordingRunner
