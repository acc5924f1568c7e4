"""Data models for the Sigma example extension."""

from sigma_example.models.command import (
    CommandCandidate,
    ExecutionResult,
    ProgressRunOutcome,
)
from sigma_example.models.host import (
    BuiltinCommand,
    CommandArgument,
    CommandSpec,
    DialogOptions,
    DialogResult,
    Entry,
    FileDialogOptions,
    FileFilter,
    MenuContext,
    MenuItem,
    Notification,
)
from sigma_example.models.progress import ProgressOptions, ProgressUpdate

__all__ = [
    "BuiltinCommand",
    "CommandArgument",
    "CommandCandidate",
    "CommandSpec",
    "DialogOptions",
    "DialogResult",
    "Entry",
    "ExecutionResult",
    "FileDialogOptions",
    "FileFilter",
    "MenuContext",
    "MenuItem",
    "Notification",
    "ProgressOptions",
    "ProgressRunOutcome",
    "ProgressUpdate",
]
