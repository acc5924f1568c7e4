"""Context-menu and command handlers that only use the host API."""

import asyncio
import json
import logging
from typing import TYPE_CHECKING, Any

from sigma_example.config import EXTENSION_VERSION
from sigma_example.models import (
    DialogOptions,
    FileDialogOptions,
    FileFilter,
    MenuContext,
    Notification,
    ProgressOptions,
    ProgressUpdate,
)
from sigma_example.utils.formatting import greeting_for_style

if TYPE_CHECKING:
    from sigma_example.protocols import ProgressSink, SigmaApi
    from sigma_example.services.cancellation import CancellationToken

logger = logging.getLogger(__name__)

DEMO_PROGRESS_ITEMS = 10
DEMO_PROGRESS_DELAY = 0.5


async def say_hello(sigma: "SigmaApi", menu_context: MenuContext) -> None:
    """Greet the first selected entry."""
    if not await sigma.settings.get("showNotifications"):
        logger.info("Notifications disabled, skipping greeting")
        return

    greeting = await sigma.settings.get("greeting")
    duration = await sigma.settings.get("notificationDuration")
    style = await sigma.settings.get("greetingStyle")
    entries = menu_context.selected_entries
    first_name = entries[0].name if entries else "there"

    sigma.ui.show_notification(
        Notification(
            title=greeting or "Hello",
            message=greeting_for_style(style, first_name),
            type="info",
            duration=duration or 3000,
        )
    )


async def count_selected(sigma: "SigmaApi", menu_context: MenuContext) -> None:
    entries = menu_context.selected_entries
    folders = sum(1 for e in entries if e.is_directory)
    files = len(entries) - folders

    sigma.ui.show_notification(
        Notification(
            title="Selection Count",
            message=f"Selected {len(entries)} items: {files} files, {folders} folders",
            type="success",
            duration=4000,
        )
    )


async def file_info(sigma: "SigmaApi", menu_context: MenuContext) -> None:
    if not menu_context.selected_entries:
        return
    entry = menu_context.selected_entries[0]
    size_kb = f"{entry.size / 1024:.2f}" if entry.size else "Unknown"

    await sigma.ui.show_dialog(
        DialogOptions(
            title="File Details",
            message=(
                f"Name: {entry.name}\n"
                f"Path: {entry.path}\n"
                f"Extension: {entry.extension or 'None'}\n"
                f"Size: {size_kb} KB"
            ),
            type="info",
        )
    )


async def copy_path(sigma: "SigmaApi", menu_context: MenuContext) -> None:
    if not menu_context.selected_entries:
        return
    entry = menu_context.selected_entries[0]
    await sigma.clipboard.write_text(entry.path)

    sigma.ui.show_notification(
        Notification(
            title="Path Copied",
            message=f"Copied to clipboard: {entry.path}",
            type="success",
            duration=2000,
        )
    )


async def quick_view(sigma: "SigmaApi", menu_context: MenuContext) -> None:
    if not menu_context.selected_entries:
        return
    entry = menu_context.selected_entries[0]
    try:
        await sigma.commands.execute_command("sigma.quickView.open", entry.path)
    except Exception as e:
        logger.warning("Quick view failed for %s: %s", entry.path, e)
        sigma.ui.show_notification(
            Notification(
                title="Quick View Error",
                message=str(e) or "Could not open quick view",
                type="error",
            )
        )


async def greet(sigma: "SigmaApi", args: dict[str, Any]) -> None:
    """Greet by name, prompting for one when none was given."""
    if not await sigma.settings.get("showNotifications"):
        logger.info("Notifications disabled, skipping greeting")
        return

    greeting = await sigma.settings.get("greeting") or "Hello"
    duration = await sigma.settings.get("notificationDuration") or 5000
    style = args.get("style") or await sigma.settings.get("greetingStyle")
    name = args.get("name")

    if not name:
        answer = await sigma.ui.show_dialog(
            DialogOptions(
                title=greeting,
                message="What is your name?",
                type="prompt",
                default_value="World",
                confirm_text="Greet Me",
                cancel_text="Cancel",
            )
        )
        if not (answer.confirmed and answer.value):
            return
        name = answer.value

    sigma.ui.show_notification(
        Notification(
            title=greeting,
            message=greeting_for_style(style, name),
            type="success",
            duration=duration,
        )
    )


async def show_info(sigma: "SigmaApi", args: dict[str, Any]) -> None:
    app_version = await sigma.context.get_app_version()
    duration = await sigma.settings.get("notificationDuration")
    sigma.ui.show_notification(
        Notification(
            title="Example Extension",
            message=f"Version {EXTENSION_VERSION} - Running on Sigma File Manager v{app_version}",
            type="info",
            duration=duration or 4000,
        )
    )


async def show_settings(sigma: "SigmaApi", args: dict[str, Any]) -> None:
    settings = await sigma.settings.get_all()
    settings_text = "\n".join(f"{key}: {json.dumps(value)}" for key, value in settings.items())

    await sigma.ui.show_dialog(
        DialogOptions(
            title="Example Extension Settings",
            message=(
                f"Current settings:\n\n{settings_text}\n\n"
                "You can change these in Settings > Extensions."
            ),
            type="info",
        )
    )


async def show_context(sigma: "SigmaApi", args: dict[str, Any]) -> None:
    current_path = sigma.context.get_current_path()
    entries = sigma.context.get_selected_entries()

    if entries:
        message = (
            f"Path: {current_path}\n"
            f"Selected: {len(entries)} items\n"
            f"First: {entries[0].name}"
        )
    else:
        message = f"Path: {current_path}\nNo items selected"

    await sigma.ui.show_dialog(DialogOptions(title="Current Context", message=message, type="info"))


async def open_file_dialog(sigma: "SigmaApi", args: dict[str, Any]) -> None:
    selection = await sigma.dialog.open_file(
        FileDialogOptions(
            title="Select a file",
            filters=[
                FileFilter("Images", ("png", "jpg", "jpeg", "gif")),
                FileFilter("All Files", ("*",)),
            ],
        )
    )
    if not selection:
        return

    selected = ", ".join(selection) if isinstance(selection, list) else selection
    sigma.ui.show_notification(
        Notification(title="File Selected", message=f"You selected: {selected}", type="success")
    )


async def list_builtin_commands(sigma: "SigmaApi", args: dict[str, Any]) -> None:
    commands = sigma.commands.get_builtin_commands()
    command_list = "\n".join(f"• {command.id}" for command in commands)

    await sigma.ui.show_dialog(
        DialogOptions(
            title="Built-in Commands",
            message=f"Available commands:\n\n{command_list}",
            type="info",
        )
    )


async def demo_progress(sigma: "SigmaApi", args: dict[str, Any]) -> None:
    """Process ten fake items under a cancellable progress notification."""

    async def process(progress: "ProgressSink", token: "CancellationToken") -> tuple[bool, int]:
        token.on_cancellation_requested(lambda: logger.info("Demo progress cancelled by user"))
        processed = 0
        for index in range(DEMO_PROGRESS_ITEMS):
            if token.is_cancellation_requested:
                return False, processed
            progress.report(
                ProgressUpdate(
                    description=f"Processing item {index + 1} of {DEMO_PROGRESS_ITEMS}",
                    increment=100 / DEMO_PROGRESS_ITEMS,
                )
            )
            await asyncio.sleep(DEMO_PROGRESS_DELAY)
            processed += 1
        return True, processed

    completed, processed = await sigma.ui.with_progress(
        ProgressOptions(title="Processing Items...", cancellable=True),
        process,
    )

    if completed:
        sigma.ui.show_notification(
            Notification(
                title="Processing Complete",
                message=f"Successfully processed {processed} items!",
                type="success",
            )
        )
    else:
        sigma.ui.show_notification(
            Notification(
                title="Processing Cancelled",
                message=(
                    f"Processed {processed} of {DEMO_PROGRESS_ITEMS} items "
                    "before cancellation."
                ),
                type="warning",
            )
        )
