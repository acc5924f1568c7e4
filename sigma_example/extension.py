"""Extension entry points: ``activate`` and ``deactivate``.

``activate`` receives the host API and registers every context-menu item
and command. Registrations are returned as disposables so the host (or a
test) can unload the extension cleanly.
"""

import logging
from dataclasses import dataclass, field
from functools import partial
from typing import TYPE_CHECKING, Any

from sigma_example import commands
from sigma_example.config import Settings
from sigma_example.models import CommandArgument, CommandSpec, MenuItem
from sigma_example.services.cancellation import Disposable

if TYPE_CHECKING:
    from sigma_example.protocols import SigmaApi

logger = logging.getLogger(__name__)

SINGLE_FILE = {"selectionType": "single", "entryType": "file"}

MENU_ITEMS: tuple[MenuItem, ...] = (
    MenuItem("say-hello", "Say Hello", icon="Hand", order=1),
    MenuItem("count-selected", "Count Selected Items", icon="Hash", order=2, when={"selectionType": "multiple"}),
    MenuItem("file-info", "Show File Details", icon="Info", order=3, when=SINGLE_FILE),
    MenuItem("copy-path", "Copy Path", icon="Copy", order=4, when={"selectionType": "single"}),
    MenuItem("quick-view-file", "Quick View", icon="Eye", order=5, when=SINGLE_FILE),
    MenuItem("analyze-file", "Analyze File", icon="FileSearch", order=6, when=SINGLE_FILE),
)

COMMAND_SPECS: tuple[CommandSpec, ...] = (
    CommandSpec(
        "greet",
        "Greet User",
        "Shows a greeting notification with your name",
        arguments=(
            CommandArgument("name", placeholder="Enter your name", required=True),
            CommandArgument(
                "style",
                type="dropdown",
                placeholder="Greeting style",
                data=(("Friendly", "friendly"), ("Formal", "formal"), ("Casual", "casual")),
            ),
        ),
    ),
    CommandSpec("show-info", "Show Extension Info"),
    CommandSpec("show-settings", "Show Current Settings", "Displays the current extension settings"),
    CommandSpec("show-context", "Show Current Context", "Shows current path and selection info"),
    CommandSpec("open-file-dialog", "Open File Dialog", "Opens a native file picker"),
    CommandSpec("list-builtin-commands", "List Built-in Commands", "Shows available built-in commands"),
    CommandSpec("demo-progress", "Demo Progress API", "Demonstrates the progress notification API"),
    CommandSpec(
        "runtime-eval",
        "Run Runtime Eval",
        "Evaluates a JavaScript expression using the runtime and shows the result",
        arguments=(
            CommandArgument(
                "expression",
                placeholder="Enter a JavaScript expression (e.g. 2 + 2)",
                required=True,
            ),
        ),
    ),
    CommandSpec("runtime-system-info", "Show Runtime System Info", "Displays system information reported by the runtime"),
    CommandSpec(
        "json-tools",
        "JSON Tools",
        "Validates, pretty-prints or minifies JSON",
        arguments=(
            CommandArgument(
                "action",
                type="dropdown",
                placeholder="Action",
                data=(("Validate", "validate"), ("Pretty", "pretty"), ("Minify", "minify")),
            ),
            CommandArgument("json", placeholder="Paste JSON", required=True),
        ),
    ),
)


@dataclass
class Activation:
    """Registrations made by one ``activate`` call."""

    disposables: list[Disposable] = field(default_factory=list)

    def dispose(self) -> None:
        for disposable in self.disposables:
            disposable.dispose()
        self.disposables.clear()


def _menu_handlers(sigma: "SigmaApi", settings: Settings) -> dict[str, Any]:
    return {
        "say-hello": partial(commands.say_hello, sigma),
        "count-selected": partial(commands.count_selected, sigma),
        "file-info": partial(commands.file_info, sigma),
        "copy-path": partial(commands.copy_path, sigma),
        "quick-view-file": partial(commands.quick_view, sigma),
        "analyze-file": partial(commands.analyze_file, sigma, settings),
    }


def _command_handlers(sigma: "SigmaApi", settings: Settings) -> dict[str, Any]:
    return {
        "greet": partial(commands.greet, sigma),
        "show-info": partial(commands.show_info, sigma),
        "show-settings": partial(commands.show_settings, sigma),
        "show-context": partial(commands.show_context, sigma),
        "open-file-dialog": partial(commands.open_file_dialog, sigma),
        "list-builtin-commands": partial(commands.list_builtin_commands, sigma),
        "demo-progress": partial(commands.demo_progress, sigma),
        "runtime-eval": partial(commands.runtime_eval, sigma, settings),
        "runtime-system-info": partial(commands.runtime_system_info, sigma, settings),
        "json-tools": partial(commands.json_tools, sigma, settings),
    }


async def activate(sigma: "SigmaApi", settings: Settings | None = None) -> Activation:
    """Register the extension's menu items, commands and listeners.

    Args:
        sigma: Host API
        settings: Runtime settings; read from the environment when omitted

    Returns:
        Activation holding every registration
    """
    settings = settings or Settings.from_env()
    activation = Activation()

    app_version = await sigma.context.get_app_version()
    logger.info("Example extension activated on Sigma File Manager v%s", app_version)
    logger.debug("Current settings: %s", await sigma.settings.get_all())

    activation.disposables.append(
        sigma.settings.on_change(
            "showNotifications",
            lambda new, old: logger.info("showNotifications changed from %s to %s", old, new),
        )
    )

    menu_handlers = _menu_handlers(sigma, settings)
    for item in MENU_ITEMS:
        activation.disposables.append(sigma.context_menu.register_item(item, menu_handlers[item.id]))

    command_handlers = _command_handlers(sigma, settings)
    for spec in COMMAND_SPECS:
        activation.disposables.append(sigma.commands.register_command(spec, command_handlers[spec.id]))

    logger.info(
        "Registered %d menu item(s) and %d command(s)",
        len(MENU_ITEMS),
        len(COMMAND_SPECS),
    )
    return activation


async def deactivate(activation: Activation) -> None:
    """Remove everything ``activate`` registered."""
    activation.dispose()
    logger.info("Example extension deactivated")
