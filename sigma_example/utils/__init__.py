"""Utilities for the Sigma example extension."""

from sigma_example.utils.console import ColorfulFormatter, CommandFormatter, configure_logging
from sigma_example.utils.formatting import format_runtime_info, format_size, greeting_for_style
from sigma_example.utils.shell import (
    escape_powershell_literal,
    format_command_line,
    powershell_literal,
)

__all__ = [
    "ColorfulFormatter",
    "CommandFormatter",
    "configure_logging",
    "escape_powershell_literal",
    "format_command_line",
    "format_runtime_info",
    "format_size",
    "greeting_for_style",
    "powershell_literal",
]
