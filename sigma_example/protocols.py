"""Protocol interfaces for the Sigma host API.

The extension never touches host globals. Everything it needs is described
here and passed into ``activate()`` as a ``SigmaApi`` object, so the desktop
host, the headless host and test doubles are interchangeable.

Usage Example:

    from sigma_example.protocols import ProcessExecutor

    async def hash_file(executor: ProcessExecutor, path: str) -> str:
        '''Depends on the protocol, not a concrete runner.'''
        result = await executor.execute("sha256sum", [path])
        return result.stdout.split()[0]

    # Real subprocesses
    from sigma_example.services.process import SubprocessExecutor
    await hash_file(SubprocessExecutor(), "/etc/hosts")

    # Or a stub for testing
    class StubExecutor:
        async def execute(self, command, args):
            return ExecutionResult(code=0, stdout="abc  /etc/hosts", stderr="")

    await hash_file(StubExecutor(), "/etc/hosts")
"""

from collections.abc import Awaitable, Callable, Sequence
from typing import Any, Protocol, TypeVar, runtime_checkable

from sigma_example.models import (
    BuiltinCommand,
    CommandSpec,
    DialogOptions,
    DialogResult,
    Entry,
    ExecutionResult,
    FileDialogOptions,
    MenuContext,
    MenuItem,
    Notification,
    ProgressOptions,
    ProgressUpdate,
)
from sigma_example.services.cancellation import CancellationToken, Disposable

T = TypeVar("T")

TickCallback = Callable[[], None]
MenuHandler = Callable[[MenuContext], Awaitable[None]]
CommandHandler = Callable[[dict[str, Any]], Awaitable[None]]
SettingsListener = Callable[[Any, Any], None]


@runtime_checkable
class ProcessExecutor(Protocol):
    """Protocol for running a process to completion.

    Example implementation:
        class LocalExecutor:
            async def execute(self, command: str, args: Sequence[str]) -> ExecutionResult:
                # Spawn, wait, capture output
                return ExecutionResult(...)
    """

    async def execute(self, command: str, args: Sequence[str]) -> ExecutionResult:
        """Run command with args and wait for it to exit.

        Args:
            command: Executable name or absolute path
            args: Arguments passed verbatim (no shell)

        Returns:
            Exit code and captured output. A non-zero exit is not an error.

        Raises:
            Exception: If the executable cannot be launched. A missing
                executable is signalled by a message containing "not found".
        """
        ...


@runtime_checkable
class RunningProcess(Protocol):
    """Handle to a process started by a ``ProgressProcessExecutor``."""

    async def wait(self) -> ExecutionResult:
        """Wait for the process to exit and return its result."""
        ...

    async def cancel(self) -> None:
        """Request termination.

        Returns once termination was requested, not necessarily completed.
        """
        ...


@runtime_checkable
class ProgressProcessExecutor(Protocol):
    """Protocol for running a process that reports activity ticks."""

    async def start(
        self,
        command: str,
        args: Sequence[str],
        on_tick: TickCallback,
    ) -> RunningProcess:
        """Start command and call on_tick periodically while it runs.

        Raises:
            Exception: If the executable cannot be launched.
        """
        ...


@runtime_checkable
class BinaryResolver(Protocol):
    """Protocol for locating an executable."""

    async def resolve(self, name: str) -> str | None:
        """Return an absolute path for name, or None if unknown."""
        ...


@runtime_checkable
class ProgressSink(Protocol):
    """Write-only channel for progress updates."""

    def report(self, update: ProgressUpdate) -> None: ...


@runtime_checkable
class ShellApi(ProcessExecutor, ProgressProcessExecutor, BinaryResolver, Protocol):
    """``sigma.shell``: process execution and binary lookup."""

    ...


@runtime_checkable
class ContextApi(Protocol):
    """``sigma.context``: read-only application state."""

    async def get_app_version(self) -> str: ...

    def get_current_path(self) -> str: ...

    def get_selected_entries(self) -> list[Entry]: ...

    def get_platform(self) -> str:
        """Return "windows", "macos" or "linux"."""
        ...


@runtime_checkable
class SettingsApi(Protocol):
    """``sigma.settings``: extension settings storage."""

    async def get(self, key: str) -> Any: ...

    async def get_all(self) -> dict[str, Any]: ...

    def on_change(self, key: str, listener: SettingsListener) -> Disposable:
        """Call listener(new_value, old_value) whenever key changes."""
        ...


@runtime_checkable
class ContextMenuApi(Protocol):
    """``sigma.contextMenu``."""

    def register_item(self, item: MenuItem, handler: MenuHandler) -> Disposable: ...


@runtime_checkable
class CommandsApi(Protocol):
    """``sigma.commands``."""

    def register_command(self, spec: CommandSpec, handler: CommandHandler) -> Disposable: ...

    async def execute_command(self, command_id: str, *args: Any) -> Any: ...

    def get_builtin_commands(self) -> list[BuiltinCommand]: ...


@runtime_checkable
class UiApi(Protocol):
    """``sigma.ui``: notifications, dialogs and progress."""

    def show_notification(self, notification: Notification) -> None: ...

    async def show_dialog(self, options: DialogOptions) -> DialogResult: ...

    async def with_progress(
        self,
        options: ProgressOptions,
        task: Callable[[ProgressSink, CancellationToken], Awaitable[T]],
    ) -> T:
        """Run task while the host displays a progress indicator.

        The host owns the cancellation token; when ``options.cancellable``
        is set the user may cancel it.
        """
        ...


@runtime_checkable
class DialogApi(Protocol):
    """``sigma.dialog``: native pickers."""

    async def open_file(self, options: FileDialogOptions) -> str | list[str] | None: ...


@runtime_checkable
class ClipboardApi(Protocol):
    async def write_text(self, text: str) -> None: ...


@runtime_checkable
class SigmaApi(Protocol):
    """The full host API handed to ``activate()``."""

    context: ContextApi
    settings: SettingsApi
    context_menu: ContextMenuApi
    commands: CommandsApi
    ui: UiApi
    dialog: DialogApi
    shell: ShellApi
    clipboard: ClipboardApi


__all__ = [
    "BinaryResolver",
    "ClipboardApi",
    "CommandHandler",
    "CommandsApi",
    "ContextApi",
    "ContextMenuApi",
    "DialogApi",
    "MenuHandler",
    "ProcessExecutor",
    "ProgressProcessExecutor",
    "ProgressSink",
    "RunningProcess",
    "SettingsApi",
    "SettingsListener",
    "ShellApi",
    "SigmaApi",
    "TickCallback",
    "UiApi",
]
