"""Shell quoting utilities."""

import shlex
from collections.abc import Sequence


def escape_powershell_literal(text: str) -> str:
    """Escape text for use inside a PowerShell single-quoted string.

    Single quotes are the only special character in such literals and are
    escaped by doubling them.

    Args:
        text: Untrusted text (path, JSON, expression)

    Returns:
        Escaped text, without surrounding quotes
    """
    return text.replace("'", "''")


def powershell_literal(text: str) -> str:
    """Quote text as a complete PowerShell single-quoted string literal."""
    return f"'{escape_powershell_literal(text)}'"


def format_command_line(executable: str, args: Sequence[str]) -> str:
    """Render a command for logs and messages.

    Args:
        executable: Program name or path
        args: Program arguments

    Returns:
        POSIX shell-quoted command line
    """
    return shlex.join([executable, *args])
