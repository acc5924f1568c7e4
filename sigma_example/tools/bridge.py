"""MCP tools that drive the extension through the headless host."""

import logging
from typing import Any

from fastmcp.exceptions import ToolError

from sigma_example.host import UnknownCommandError
from sigma_example.models import Entry, MenuContext
from sigma_example.state import get_deps

logger = logging.getLogger(__name__)


def _format_transcript(lines: list[str]) -> str:
    if not lines:
        return "(no notifications or dialogs)"
    return "\n\n".join(lines)


async def list_extension_commands() -> str:
    """List the commands and context-menu items the extension registered.

    Returns:
        One line per command and per menu item, with their arguments and
        selection requirements.
    """
    sigma = get_deps().sigma

    lines = ["Commands:"]
    for spec, _ in sigma.commands.commands.values():
        arguments = ", ".join(
            f"{a.name}{'*' if a.required else ''}" for a in spec.arguments
        )
        suffix = f" ({arguments})" if arguments else ""
        lines.append(f"  {spec.id}{suffix} - {spec.title}")

    lines.append("Context menu items:")
    for item, _ in sorted(sigma.context_menu.items.values(), key=lambda pair: pair[0].order):
        when = ", ".join(f"{k}={v}" for k, v in (item.when or {}).items())
        suffix = f" [{when}]" if when else ""
        lines.append(f"  {item.id}{suffix} - {item.title}")

    return "\n".join(lines)


async def run_command(command_id: str, arguments: dict[str, Any] | None = None) -> str:
    """Run an extension command and return what it showed the user.

    Args:
        command_id: Command id, e.g. "greet" or "json-tools".
        arguments: Command arguments, e.g. {"action": "pretty", "json": "[1,2]"}.

    Returns:
        Notifications and dialogs produced by the command.
    """
    sigma = get_deps().sigma
    marks = (len(sigma.ui.notifications), len(sigma.ui.dialogs))
    logger.info("Running command %s", command_id)

    try:
        await sigma.commands.execute_command(command_id, arguments or {})
    except UnknownCommandError as e:
        raise ToolError(str(e)) from e

    return _format_transcript(sigma.transcript_since(*marks))


async def run_menu_item(item_id: str, paths: list[str]) -> str:
    """Invoke a context-menu item on local paths.

    Args:
        item_id: Menu item id, e.g. "analyze-file".
        paths: Selected files or directories.

    Returns:
        Notifications and dialogs produced by the item.
    """
    sigma = get_deps().sigma
    entries = [Entry.from_path(path) for path in paths]
    sigma.context.selected_entries = entries
    marks = (len(sigma.ui.notifications), len(sigma.ui.dialogs))
    logger.info("Running menu item %s on %d entr(ies)", item_id, len(entries))

    try:
        await sigma.context_menu.invoke(item_id, MenuContext(selected_entries=entries))
    except (UnknownCommandError, ValueError) as e:
        raise ToolError(str(e)) from e

    return _format_transcript(sigma.transcript_since(*marks))


async def update_setting(key: str, value: str | int | bool) -> str:
    """Change an extension setting (e.g. greetingStyle, showNotifications)."""
    sigma = get_deps().sigma
    sigma.settings.set(key, value)
    return f"{key} = {value!r}"


async def cancel_running() -> str:
    """Cancel every running cancellable operation."""
    cancelled = get_deps().sigma.ui.cancel_progress()
    return f"Cancelled {cancelled} operation(s)"
