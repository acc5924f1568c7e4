"""Progress reporting data models."""

from dataclasses import dataclass


@dataclass(frozen=True)
class ProgressUpdate:
    """A single progress report; the most recent one wins for display."""

    description: str
    increment: float = 0.0


@dataclass(frozen=True)
class ProgressOptions:
    """Options for a host progress notification."""

    title: str
    location: str = "notification"
    cancellable: bool = False
