"""Text formatting helpers for notifications and dialogs."""

from collections.abc import Mapping
from typing import Any


def format_size(size_bytes: int) -> str:
    """Human readable size: ``512 B``, ``1.50 KB``, ``2.00 MB``."""
    if size_bytes < 1024:
        return f"{size_bytes} B"
    if size_bytes < 1_048_576:
        return f"{size_bytes / 1024:.2f} KB"
    return f"{size_bytes / 1_048_576:.2f} MB"


def greeting_for_style(style: str | None, name: str) -> str:
    """Greeting text for a greeting style; unknown styles are friendly."""
    if style == "formal":
        return f"Good day, {name}. How may I assist you?"
    if style == "casual":
        return f"Hey {name}! What's up?"
    return f"Hello, {name}! Nice to see you!"


# Display labels for runtime info keys, in display order.
RUNTIME_INFO_LABELS: dict[str, tuple[str, str]] = {
    "os": ("OS", ""),
    "arch": ("Architecture", ""),
    "denoVersion": ("Deno", "v"),
    "v8Version": ("V8", "v"),
    "typescriptVersion": ("TypeScript", "v"),
    "powershellVersion": ("PowerShell", "v"),
    "dotnetVersion": (".NET", "v"),
    "hostname": ("Hostname", ""),
    "homeDir": ("Home", ""),
}


def format_runtime_info(info: Mapping[str, Any]) -> str:
    """One ``Label: value`` line per known key present in info."""
    lines = []
    for key, (label, prefix) in RUNTIME_INFO_LABELS.items():
        if key in info and info[key] not in (None, ""):
            lines.append(f"{label}: {prefix}{info[key]}")
    return "\n".join(lines)
