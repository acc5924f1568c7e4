"""Per-tool timing middleware."""

import logging
import time
from collections import defaultdict
from dataclasses import dataclass
from typing import Any

from fastmcp.server.middleware import MiddlewareContext

from sigma_example.middleware.base import BridgeMiddleware


@dataclass
class TimingStats:
    """Duration statistics for one tool."""

    count: int = 0
    total_ms: float = 0.0
    max_ms: float = 0.0

    @property
    def avg_ms(self) -> float:
        return self.total_ms / self.count if self.count > 0 else 0.0

    def record(self, duration_ms: float) -> None:
        self.count += 1
        self.total_ms += duration_ms
        self.max_ms = max(self.max_ms, duration_ms)


class ToolTimingMiddleware(BridgeMiddleware):
    """Logs how long each tool call took.

    Tool calls run external processes, so a warning is logged when a call
    exceeds ``slow_threshold_ms``.
    """

    def __init__(
        self,
        logger: logging.Logger | None = None,
        slow_threshold_ms: float = 5000.0,
    ) -> None:
        super().__init__(logger=logger)
        self.slow_threshold_ms = slow_threshold_ms
        self.stats: dict[str, TimingStats] = defaultdict(TimingStats)

    async def on_call_tool(
        self,
        context: MiddlewareContext,
        call_next: Any,
    ) -> Any:
        name = self.tool_name(context)
        start_time = time.perf_counter()
        try:
            return await call_next(context)
        finally:
            duration_ms = (time.perf_counter() - start_time) * 1000
            self.stats[name].record(duration_ms)
            if duration_ms >= self.slow_threshold_ms:
                self.logger.warning("Slow tool call: %s took %.2fms", name, duration_ms)
            else:
                self.logger.info("Tool %s completed in %.2fms", name, duration_ms)
