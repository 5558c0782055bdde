"""Container toolchain invocation.

Each call runs one child process to completion and reports its exit status.
Output is captured for logging only; nothing else about the process is
inspected. No timeout is applied.
"""

import asyncio
from pathlib import Path
from typing import Awaitable, Callable

from loguru import logger
from pydantic import BaseModel, Field


class CommandResult(BaseModel):
    """Exit status and captured output of one external command."""

    args: list[str] = Field(description="Command line")
    returncode: int = Field(description="Process exit status (127 if the executable is missing)")
    stdout: str = ""
    stderr: str = ""

    @property
    def ok(self) -> bool:
        return self.returncode == 0

    @property
    def command(self) -> str:
        return " ".join(self.args)

    def describe_failure(self) -> str:
        """One-line failure summary for logs and BuildResult.reason."""
        detail = self.stderr.strip().splitlines()[-1] if self.stderr.strip() else "no output"
        return f"`{self.command}` exited with status {self.returncode}: {detail}"


CommandRunner = Callable[[list[str], Path | None], Awaitable[CommandResult]]


async def run_command(args: list[str], cwd: Path | None = None) -> CommandResult:
    """Run a command and wait for it to exit.

    Args:
        args: Executable and arguments
        cwd: Working directory for the child process

    Returns:
        CommandResult (a missing executable is reported as status 127)
    """
    logger.debug(f"$ {' '.join(args)}" + (f"  (cwd={cwd})" if cwd else ""))
    try:
        proc = await asyncio.create_subprocess_exec(
            *args,
            cwd=str(cwd) if cwd else None,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
        )
    except FileNotFoundError as e:
        return CommandResult(args=args, returncode=127, stderr=str(e))

    stdout, stderr = await proc.communicate()
    return CommandResult(
        args=args,
        returncode=proc.returncode if proc.returncode is not None else -1,
        stdout=stdout.decode("utf-8", errors="replace"),
        stderr=stderr.decode("utf-8", errors="replace"),
    )


class DockerToolchain:
    """Thin async wrapper over the docker CLI."""

    def __init__(self, docker_bin: str = "docker", runner: CommandRunner = run_command):
        """Initialize toolchain.

        Args:
            docker_bin: Executable name or path
            runner: Coroutine used to run commands (swapped out in tests)
        """
        self.docker_bin = docker_bin
        self._run = runner

    async def info(self) -> CommandResult:
        """Lightweight status probe; fails when no daemon is reachable."""
        return await self._run([self.docker_bin, "info"], None)

    async def build(self, tag: str, context: Path) -> CommandResult:
        return await self._run([self.docker_bin, "build", "-t", tag, "."], context)

    async def tag(self, source: str, target: str) -> CommandResult:
        return await self._run([self.docker_bin, "tag", source, target], None)

    async def push(self, image: str) -> CommandResult:
        return await self._run([self.docker_bin, "push", image], None)
