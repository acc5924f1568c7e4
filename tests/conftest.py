"""Shared fixtures: fake processes and a fake ``sigma.shell``."""

import asyncio
from collections.abc import Callable, Sequence

import pytest

from sigma_example.config import Settings
from sigma_example.host import HeadlessContext, HeadlessSigma, RecordingProgress
from sigma_example.models import ExecutionResult
from sigma_example.services.errors import CommandNotFoundError


class FakeProcess:
    """Stands in for a running child process.

    With ``block=True`` ``wait()`` only returns after ``cancel()`` or
    ``release()``. A ``stubborn`` process ignores ``cancel()``.
    """

    def __init__(
        self,
        result: ExecutionResult | None = None,
        *,
        block: bool = False,
        ticks: int = 0,
        error: Exception | None = None,
        stubborn: bool = False,
    ) -> None:
        self.result = result or ExecutionResult(code=0, stdout="", stderr="")
        self.block = block
        self.ticks = ticks
        self.error = error
        self.stubborn = stubborn
        self.cancel_calls = 0
        self.on_tick: Callable[[], None] = lambda: None
        self._released = asyncio.Event()

    def release(self) -> None:
        self._released.set()

    async def wait(self) -> ExecutionResult:
        for _ in range(self.ticks):
            self.on_tick()
            await asyncio.sleep(0)
        if self.block:
            await self._released.wait()
        if self.error is not None:
            raise self.error
        return self.result

    async def cancel(self) -> None:
        self.cancel_calls += 1
        if not self.stubborn:
            self.release()


Behavior = ExecutionResult | Exception | FakeProcess


class FakeShell:
    """Fake implementation of every shell capability.

    Commands without a configured behavior fail with ``CommandNotFoundError``.
    """

    def __init__(self) -> None:
        self.behaviors: dict[str, Behavior] = {}
        self.paths: dict[str, str] = {}
        self.calls: list[tuple[str, tuple[str, ...]]] = []
        self.on_start: Callable[[str], None] | None = None

    def set(self, command: str, behavior: Behavior) -> None:
        self.behaviors[command] = behavior

    @property
    def commands(self) -> list[str]:
        return [command for command, _ in self.calls]

    def _behavior(self, command: str) -> Behavior:
        return self.behaviors.get(command, CommandNotFoundError(command))

    async def execute(self, command: str, args: Sequence[str]) -> ExecutionResult:
        self.calls.append((command, tuple(args)))
        behavior = self._behavior(command)
        if isinstance(behavior, Exception):
            raise behavior
        if isinstance(behavior, FakeProcess):
            return await behavior.wait()
        return behavior

    async def start(
        self,
        command: str,
        args: Sequence[str],
        on_tick: Callable[[], None],
    ) -> FakeProcess:
        self.calls.append((command, tuple(args)))
        if self.on_start is not None:
            self.on_start(command)
        behavior = self._behavior(command)
        if isinstance(behavior, Exception):
            raise behavior
        process = behavior if isinstance(behavior, FakeProcess) else FakeProcess(behavior)
        process.on_tick = on_tick
        return process

    async def resolve(self, name: str) -> str | None:
        return self.paths.get(name)


@pytest.fixture
def shell() -> FakeShell:
    return FakeShell()


@pytest.fixture
def sink() -> RecordingProgress:
    return RecordingProgress("test")


@pytest.fixture
def settings() -> Settings:
    return Settings(
        shell_fallback="off",
        shell_timeout=1.0,
        tick_interval=0.01,
        current_path="/home/user",
    )


@pytest.fixture
def sigma(shell: FakeShell) -> HeadlessSigma:
    return HeadlessSigma(
        context=HeadlessContext(current_path="/home/user", platform="linux"),
        shell=shell,
    )


@pytest.fixture
def make_process() -> type[FakeProcess]:
    return FakeProcess


def ok(stdout: str = "", code: int = 0, stderr: str = "") -> ExecutionResult:
    return ExecutionResult(code=code, stdout=stdout, stderr=stderr)


@pytest.fixture
def result() -> Callable[..., ExecutionResult]:
    return ok
