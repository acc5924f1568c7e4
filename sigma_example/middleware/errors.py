"""Error logging middleware for bridge tool calls."""

import logging
from collections import defaultdict
from collections.abc import Callable
from typing import Any

from fastmcp.server.middleware import MiddlewareContext

from sigma_example.middleware.base import BridgeMiddleware

ErrorCallback = Callable[[Exception, MiddlewareContext], None]


class ErrorHandlingMiddleware(BridgeMiddleware):
    """Logs failed requests, counts them, and re-raises.

    Counts are kept per exception type and per tool so a flaky runtime
    shows up in ``get_error_stats()``.

    Example:
        >>> middleware = ErrorHandlingMiddleware(include_traceback=True)
        >>> mcp.add_middleware(middleware)
    """

    def __init__(
        self,
        logger: logging.Logger | None = None,
        include_traceback: bool = False,
        error_callback: ErrorCallback | None = None,
    ) -> None:
        """Initialize error handling middleware.

        Args:
            logger: Optional custom logger.
            include_traceback: Whether to log the full traceback.
            error_callback: Optional callback receiving (exception, context).
        """
        super().__init__(logger=logger)
        self.include_traceback = include_traceback
        self.error_callback = error_callback
        self._error_counts: dict[str, int] = defaultdict(int)
        self._tool_errors: dict[str, int] = defaultdict(int)

    def get_error_stats(self) -> dict[str, int]:
        """Occurrences by exception type name."""
        return dict(self._error_counts)

    def get_tool_error_stats(self) -> dict[str, int]:
        """Occurrences by tool name (or MCP method)."""
        return dict(self._tool_errors)

    def reset_stats(self) -> None:
        self._error_counts.clear()
        self._tool_errors.clear()

    async def on_message(
        self,
        context: MiddlewareContext,
        call_next: Any,
    ) -> Any:
        """Pass the request on; log and count any exception, then re-raise."""
        try:
            return await call_next(context)
        except Exception as e:
            error_type = type(e).__name__
            source = self.tool_name(context)

            self._error_counts[error_type] += 1
            self._tool_errors[source] += 1

            self.logger.error(
                "Error in %s: %s: %s",
                source,
                error_type,
                str(e),
                exc_info=self.include_traceback,
            )

            if self.error_callback:
                try:
                    self.error_callback(e, context)
                except Exception as callback_error:
                    self.logger.warning("Error callback failed: %s", callback_error)

            raise
