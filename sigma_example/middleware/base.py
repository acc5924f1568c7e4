"""Base middleware class for the bridge server."""

import logging
from typing import Any

from fastmcp.server.middleware import Middleware, MiddlewareContext


class BridgeMiddleware(Middleware):
    """Middleware with a configurable logger."""

    def __init__(self, logger: logging.Logger | None = None) -> None:
        """Initialize middleware.

        Args:
            logger: Optional custom logger. Defaults to module logger.
        """
        self.logger = logger or logging.getLogger(__name__)

    @staticmethod
    def tool_name(context: MiddlewareContext) -> str:
        """Tool name for tools/call messages, else the MCP method."""
        name: Any = getattr(context.message, "name", None)
        if isinstance(name, str) and name:
            return name
        return context.method or "unknown"
