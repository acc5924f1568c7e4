"""Registries for context-menu items and commands."""

import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from typing import Any

from sigma_example.models import BuiltinCommand, CommandSpec, MenuContext, MenuItem
from sigma_example.services.cancellation import Disposable

logger = logging.getLogger(__name__)

MenuHandler = Callable[[MenuContext], Awaitable[None]]
CommandHandler = Callable[[dict[str, Any]], Awaitable[None]]
BuiltinHandler = Callable[..., Awaitable[Any]]

DEFAULT_BUILTIN_COMMANDS: tuple[BuiltinCommand, ...] = (
    BuiltinCommand("sigma.quickView.open", "Open Quick View"),
    BuiltinCommand("sigma.navigator.openPath", "Navigate to Path"),
    BuiltinCommand("sigma.dialog.openSettings", "Open Settings"),
    BuiltinCommand("sigma.dialog.openNewTab", "Open New Tab"),
)


class UnknownCommandError(LookupError):
    """No command or menu item with the given id."""

    pass


def _matches_when(item: MenuItem, context: MenuContext) -> bool:
    """Evaluate an item's ``when`` conditions against a selection."""
    when = item.when or {}
    entries = context.selected_entries

    selection_type = when.get("selectionType")
    if selection_type == "single" and len(entries) != 1:
        return False
    if selection_type == "multiple" and len(entries) < 2:
        return False

    entry_type = when.get("entryType")
    if entry_type == "file" and any(e.is_directory for e in entries):
        return False
    if entry_type == "directory" and not all(e.is_directory for e in entries):
        return False
    return True


@dataclass
class MenuRegistry:
    """Implements ``sigma.contextMenu``."""

    items: dict[str, tuple[MenuItem, MenuHandler]] = field(default_factory=dict)

    def register_item(self, item: MenuItem, handler: MenuHandler) -> Disposable:
        if item.id in self.items:
            logger.warning("Replacing context menu item %s", item.id)
        self.items[item.id] = (item, handler)
        logger.debug("Registered context menu item %s", item.id)
        return Disposable(lambda: self.items.pop(item.id, None))

    def visible_items(self, context: MenuContext) -> list[MenuItem]:
        """Items whose conditions match, sorted by order."""
        matching = [item for item, _ in self.items.values() if _matches_when(item, context)]
        return sorted(matching, key=lambda item: item.order)

    async def invoke(self, item_id: str, context: MenuContext) -> None:
        """Run a menu item's handler.

        Raises:
            UnknownCommandError: If item_id is not registered.
            ValueError: If the item is not available for this selection.
        """
        if item_id not in self.items:
            raise UnknownCommandError(f"Unknown context menu item: {item_id}")
        item, handler = self.items[item_id]
        if not _matches_when(item, context):
            raise ValueError(f"Menu item {item_id} is not available for this selection")
        await handler(context)


@dataclass
class CommandRegistry:
    """Implements ``sigma.commands``."""

    commands: dict[str, tuple[CommandSpec, CommandHandler]] = field(default_factory=dict)
    builtins: dict[str, BuiltinHandler] = field(default_factory=dict)
    builtin_commands: tuple[BuiltinCommand, ...] = DEFAULT_BUILTIN_COMMANDS
    executed: list[tuple[str, tuple[Any, ...]]] = field(default_factory=list)

    def register_command(self, spec: CommandSpec, handler: CommandHandler) -> Disposable:
        if spec.id in self.commands:
            logger.warning("Replacing command %s", spec.id)
        self.commands[spec.id] = (spec, handler)
        logger.debug("Registered command %s", spec.id)
        return Disposable(lambda: self.commands.pop(spec.id, None))

    def get_builtin_commands(self) -> list[BuiltinCommand]:
        return list(self.builtin_commands)

    async def execute_command(self, command_id: str, *args: Any) -> Any:
        """Execute a built-in or registered command.

        Built-ins without a handler are recorded and return None.

        Raises:
            UnknownCommandError: If command_id is unknown.
        """
        self.executed.append((command_id, args))

        if command_id in self.commands:
            _, handler = self.commands[command_id]
            arguments = args[0] if args and isinstance(args[0], dict) else {}
            return await handler(arguments)

        if any(b.id == command_id for b in self.builtin_commands):
            if command_id in self.builtins:
                return await self.builtins[command_id](*args)
            logger.info("Built-in command %s executed with %d argument(s)", command_id, len(args))
            return None

        raise UnknownCommandError(f"Unknown command: {command_id}")
