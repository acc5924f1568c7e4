"""Bridge server middleware components."""

from sigma_example.middleware.base import BridgeMiddleware
from sigma_example.middleware.errors import ErrorHandlingMiddleware
from sigma_example.middleware.timing import TimingStats, ToolTimingMiddleware

__all__ = [
    "BridgeMiddleware",
    "ErrorHandlingMiddleware",
    "TimingStats",
    "ToolTimingMiddleware",
]
