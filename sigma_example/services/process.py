"""Local process execution adapters built on asyncio subprocesses."""

import asyncio
import logging
import shutil
from collections.abc import Callable, Sequence

from sigma_example.models import ExecutionResult
from sigma_example.services.errors import CommandLaunchError, CommandNotFoundError

logger = logging.getLogger(__name__)


def _decode(data: bytes | None) -> str:
    if data is None:
        return ""
    return data.decode("utf-8", errors="replace")


async def _spawn(command: str, args: Sequence[str]) -> asyncio.subprocess.Process:
    """Start command without a shell, mapping launch failures.

    Raises:
        CommandNotFoundError: If the executable does not exist.
        CommandLaunchError: If it exists but cannot be started.
    """
    try:
        return await asyncio.create_subprocess_exec(
            command,
            *args,
            stdin=asyncio.subprocess.DEVNULL,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
        )
    except FileNotFoundError as e:
        raise CommandNotFoundError(command) from e
    except OSError as e:
        raise CommandLaunchError(command, e.strerror or str(e)) from e


class SubprocessHandle:
    """A running child process with periodic activity ticks."""

    def __init__(
        self,
        command: str,
        process: asyncio.subprocess.Process,
        on_tick: Callable[[], None],
        tick_interval: float,
    ) -> None:
        self.command = command
        self._process = process
        self._on_tick = on_tick
        self._tick_interval = tick_interval

    @property
    def pid(self) -> int:
        return self._process.pid

    async def _tick(self) -> None:
        while True:
            await asyncio.sleep(self._tick_interval)
            self._on_tick()

    async def wait(self) -> ExecutionResult:
        """Wait for exit, ticking every tick_interval seconds."""
        ticker = asyncio.create_task(self._tick())
        try:
            stdout, stderr = await self._process.communicate()
        finally:
            ticker.cancel()

        returncode = self._process.returncode
        return ExecutionResult(
            code=returncode if returncode is not None else 0,
            stdout=_decode(stdout),
            stderr=_decode(stderr),
        )

    async def cancel(self) -> None:
        """Send SIGTERM (TerminateProcess on Windows) if still running."""
        if self._process.returncode is not None:
            return
        try:
            self._process.terminate()
        except ProcessLookupError:
            return
        logger.info("Requested termination of %s (pid=%d)", self.command, self.pid)


class SubprocessExecutor:
    """Runs local processes for the fallback runner.

    Implements both ``ProcessExecutor`` and ``ProgressProcessExecutor``.
    """

    def __init__(self, tick_interval: float = 0.5) -> None:
        self.tick_interval = tick_interval

    async def execute(self, command: str, args: Sequence[str]) -> ExecutionResult:
        process = await _spawn(command, args)
        logger.debug("Started %s (pid=%d)", command, process.pid)
        handle = SubprocessHandle(command, process, lambda: None, self.tick_interval)
        return await handle.wait()

    async def start(
        self,
        command: str,
        args: Sequence[str],
        on_tick: Callable[[], None],
    ) -> SubprocessHandle:
        process = await _spawn(command, args)
        logger.debug("Started %s (pid=%d)", command, process.pid)
        return SubprocessHandle(command, process, on_tick, self.tick_interval)


class WhichResolver:
    """Resolves executables with ``shutil.which``."""

    async def resolve(self, name: str) -> str | None:
        return await asyncio.to_thread(shutil.which, name)


class LocalShell(SubprocessExecutor, WhichResolver):
    """Complete ``sigma.shell`` implementation for the local machine."""

    pass
