"""In-process implementation of the Sigma host API.

Nothing is rendered: notifications, dialogs and progress are recorded on
``HeadlessUi`` and logged, dialogs are answered from a queue, and the shell
runs real local processes. Used by the bridge server and by tests.
"""

import logging
import sys
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from typing import Any, TypeVar

from sigma_example.config import DEFAULT_SETTINGS
from sigma_example.host.registry import CommandRegistry, MenuRegistry
from sigma_example.models import (
    DialogOptions,
    DialogResult,
    Entry,
    FileDialogOptions,
    Notification,
    ProgressOptions,
    ProgressUpdate,
)
from sigma_example.services.cancellation import (
    CancellationToken,
    CancellationTokenSource,
    Disposable,
)
from sigma_example.services.process import LocalShell

logger = logging.getLogger(__name__)

T = TypeVar("T")


def detect_platform() -> str:
    """Map ``sys.platform`` to the host's platform names."""
    if sys.platform.startswith("win"):
        return "windows"
    if sys.platform == "darwin":
        return "macos"
    return "linux"


@dataclass
class HeadlessContext:
    """Implements ``sigma.context``."""

    app_version: str = "1.10.0"
    current_path: str = ""
    selected_entries: list[Entry] = field(default_factory=list)
    platform: str = field(default_factory=detect_platform)

    async def get_app_version(self) -> str:
        return self.app_version

    def get_current_path(self) -> str:
        return self.current_path

    def get_selected_entries(self) -> list[Entry]:
        return list(self.selected_entries)

    def get_platform(self) -> str:
        return self.platform


class HeadlessSettings:
    """Implements ``sigma.settings`` over an in-memory dict."""

    def __init__(self, defaults: dict[str, Any] | None = None) -> None:
        self._values: dict[str, Any] = dict(DEFAULT_SETTINGS if defaults is None else defaults)
        self._listeners: dict[str, list[Callable[[Any, Any], None]]] = {}

    async def get(self, key: str) -> Any:
        return self._values.get(key)

    async def get_all(self) -> dict[str, Any]:
        return dict(self._values)

    def set(self, key: str, value: Any) -> None:
        """Change a setting and notify listeners if the value changed."""
        old_value = self._values.get(key)
        self._values[key] = value
        if old_value == value:
            return
        for listener in list(self._listeners.get(key, [])):
            try:
                listener(value, old_value)
            except Exception:
                logger.exception("Settings listener for %s failed", key)

    def on_change(self, key: str, listener: Callable[[Any, Any], None]) -> Disposable:
        self._listeners.setdefault(key, []).append(listener)

        def remove() -> None:
            listeners = self._listeners.get(key, [])
            if listener in listeners:
                listeners.remove(listener)

        return Disposable(remove)


class RecordingProgress:
    """Progress sink that keeps every update."""

    def __init__(self, title: str) -> None:
        self.title = title
        self.updates: list[ProgressUpdate] = []

    def report(self, update: ProgressUpdate) -> None:
        self.updates.append(update)
        logger.debug("[%s] %s (+%.1f)", self.title, update.description, update.increment)

    @property
    def total(self) -> float:
        return sum(u.increment for u in self.updates)


class HeadlessUi:
    """Implements ``sigma.ui``.

    Dialog answers are taken from ``dialog_answers`` in order. When the
    queue is empty dialogs are confirmed, and prompts return their default.
    """

    def __init__(self) -> None:
        self.notifications: list[Notification] = []
        self.dialogs: list[DialogOptions] = []
        self.dialog_answers: list[DialogResult] = []
        self.progress: list[RecordingProgress] = []
        self._active: list[CancellationTokenSource] = []

    def show_notification(self, notification: Notification) -> None:
        self.notifications.append(notification)
        logger.info("Notification [%s] %s: %s", notification.type, notification.title, notification.message)

    async def show_dialog(self, options: DialogOptions) -> DialogResult:
        self.dialogs.append(options)
        logger.info("Dialog [%s] %s: %s", options.type, options.title, options.message)
        if self.dialog_answers:
            return self.dialog_answers.pop(0)
        if options.type == "prompt":
            return DialogResult(confirmed=True, value=options.default_value)
        return DialogResult(confirmed=True)

    async def with_progress(
        self,
        options: ProgressOptions,
        task: Callable[[RecordingProgress, CancellationToken], Awaitable[T]],
    ) -> T:
        source = CancellationTokenSource()
        sink = RecordingProgress(options.title)
        self.progress.append(sink)
        self._active.append(source)
        try:
            return await task(sink, source.token)
        finally:
            self._active.remove(source)

    def cancel_progress(self) -> int:
        """Cancel every running cancellable progress task.

        Returns:
            Number of tasks cancelled.
        """
        active = list(self._active)
        for source in active:
            source.cancel()
        return len(active)


class HeadlessDialog:
    """Implements ``sigma.dialog``; returns preset selections."""

    def __init__(self) -> None:
        self.selections: list[str | list[str] | None] = []
        self.requests: list[FileDialogOptions] = []

    async def open_file(self, options: FileDialogOptions) -> str | list[str] | None:
        self.requests.append(options)
        if self.selections:
            return self.selections.pop(0)
        return None


class HeadlessClipboard:
    """Implements clipboard access."""

    def __init__(self) -> None:
        self.text: str | None = None

    async def write_text(self, text: str) -> None:
        self.text = text


@dataclass
class HeadlessSigma:
    """Complete ``SigmaApi`` without a desktop application."""

    context: HeadlessContext = field(default_factory=HeadlessContext)
    settings: HeadlessSettings = field(default_factory=HeadlessSettings)
    context_menu: MenuRegistry = field(default_factory=MenuRegistry)
    commands: CommandRegistry = field(default_factory=CommandRegistry)
    ui: HeadlessUi = field(default_factory=HeadlessUi)
    dialog: HeadlessDialog = field(default_factory=HeadlessDialog)
    shell: Any = field(default_factory=LocalShell)
    clipboard: HeadlessClipboard = field(default_factory=HeadlessClipboard)

    def transcript_since(self, notifications: int, dialogs: int) -> list[str]:
        """Notifications and dialogs recorded after the given counts."""
        lines = [
            f"[{n.type}] {n.title}: {n.message}" for n in self.ui.notifications[notifications:]
        ]
        lines.extend(
            f"[dialog:{d.type}] {d.title}\n{d.message}" for d in self.ui.dialogs[dialogs:]
        )
        return lines
