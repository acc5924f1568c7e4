"""Global state for the bridge server."""

from sigma_example.dependencies import Dependencies

# Initialized on first access
_deps: Dependencies | None = None


def get_deps() -> Dependencies:
    """Get or create the dependency container."""
    global _deps
    if _deps is None:
        _deps = Dependencies.create()
    return _deps


def set_deps(deps: Dependencies) -> None:
    """Set the global container.

    Allows tests to inject a host with stubbed processes.
    """
    global _deps
    _deps = deps


def reset_state() -> None:
    """Clear the global container. Intended for test fixtures."""
    global _deps
    _deps = None
