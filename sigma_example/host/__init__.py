"""Headless Sigma host for running the extension without the desktop app."""

from sigma_example.host.headless import (
    HeadlessClipboard,
    HeadlessContext,
    HeadlessDialog,
    HeadlessSettings,
    HeadlessSigma,
    HeadlessUi,
    RecordingProgress,
    detect_platform,
)
from sigma_example.host.registry import CommandRegistry, MenuRegistry, UnknownCommandError

__all__ = [
    "CommandRegistry",
    "HeadlessClipboard",
    "HeadlessContext",
    "HeadlessDialog",
    "HeadlessSettings",
    "HeadlessSigma",
    "HeadlessUi",
    "MenuRegistry",
    "RecordingProgress",
    "UnknownCommandError",
    "detect_platform",
]
