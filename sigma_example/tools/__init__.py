"""MCP tools for the bridge server."""

from sigma_example.tools.bridge import (
    cancel_running,
    list_extension_commands,
    run_command,
    run_menu_item,
    update_setting,
)

__all__ = [
    "cancel_running",
    "list_extension_commands",
    "run_command",
    "run_menu_item",
    "update_setting",
]
