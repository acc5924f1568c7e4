"""FastMCP bridge server for the Sigma example extension.

This is a thin wrapper: it activates the extension against the headless host
at startup and exposes the registered commands and menu items as tools.
All behavior lives in commands/, services/ and host/.
"""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any

from fastmcp import FastMCP
from starlette.requests import Request
from starlette.responses import PlainTextResponse

from sigma_example.middleware import ErrorHandlingMiddleware, ToolTimingMiddleware
from sigma_example.state import get_deps
from sigma_example.tools import (
    cancel_running,
    list_extension_commands,
    run_command,
    run_menu_item,
    update_setting,
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def app_lifespan(server: FastMCP) -> AsyncIterator[dict[str, Any]]:
    """Activate the extension at startup and deactivate it on shutdown.

    Yields:
        Dict with the registered command and menu item ids
    """
    logger.info("Sigma example bridge starting up")
    deps = get_deps()
    await deps.start()

    commands = sorted(deps.sigma.commands.commands)
    menu_items = sorted(deps.sigma.context_menu.items)
    logger.info(
        "Bridge ready: %d command(s), %d menu item(s), runtime=%s",
        len(commands),
        len(menu_items),
        deps.settings.runtime_binary,
    )

    try:
        yield {"commands": commands, "menu_items": menu_items}
    finally:
        logger.info("Sigma example bridge shutting down")
        await deps.cleanup()


def configure_middleware(server: FastMCP) -> None:
    """Add middleware: error handling innermost, timing outside it."""
    settings = get_deps().settings
    server.add_middleware(ErrorHandlingMiddleware(include_traceback=settings.include_traceback))
    server.add_middleware(ToolTimingMiddleware())


def create_server() -> FastMCP:
    """Create the MCP server with middleware, tools and health route.

    Returns:
        Configured FastMCP server instance
    """
    server = FastMCP("sigma_example", lifespan=app_lifespan)

    configure_middleware(server)

    server.tool()(list_extension_commands)
    server.tool()(run_command)
    server.tool()(run_menu_item)
    server.tool()(update_setting)
    server.tool()(cancel_running)

    @server.custom_route("/health", methods=["GET"])
    async def health_check(request: Request) -> PlainTextResponse:
        """Health check endpoint."""
        client_host = request.client.host if request.client else "unknown"
        logger.debug("Health check from %s", client_host)
        return PlainTextResponse("OK")

    return server
