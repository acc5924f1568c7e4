"""Tests for notification and dialog formatting helpers."""

import pytest

from sigma_example.utils.formatting import (
    format_runtime_info,
    format_size,
    greeting_for_style,
)


@pytest.mark.parametrize(
    ("size", "expected"),
    [
        (0, "0 B"),
        (1023, "1023 B"),
        (1024, "1.00 KB"),
        (1536, "1.50 KB"),
        (1_048_576, "1.00 MB"),
        (5 * 1_048_576 + 524_288, "5.50 MB"),
    ],
)
def test_format_size(size: int, expected: str) -> None:
    assert format_size(size) == expected


@pytest.mark.parametrize(
    ("style", "expected"),
    [
        ("formal", "Good day, Ada. How may I assist you?"),
        ("casual", "Hey Ada! What's up?"),
        ("friendly", "Hello, Ada! Nice to see you!"),
        (None, "Hello, Ada! Nice to see you!"),
        ("shouty", "Hello, Ada! Nice to see you!"),
    ],
)
def test_greeting_for_style(style: str | None, expected: str) -> None:
    assert greeting_for_style(style, "Ada") == expected


def test_format_runtime_info_deno() -> None:
    info = {
        "os": "linux",
        "arch": "x86_64",
        "denoVersion": "2.1.4",
        "v8Version": "13.0",
        "typescriptVersion": "5.6.2",
        "hostname": "box",
        "homeDir": "/home/user",
    }

    text = format_runtime_info(info)

    assert text.splitlines() == [
        "OS: linux",
        "Architecture: x86_64",
        "Deno: v2.1.4",
        "V8: v13.0",
        "TypeScript: v5.6.2",
        "Hostname: box",
        "Home: /home/user",
    ]


def test_format_runtime_info_skips_missing_and_unknown_keys() -> None:
    info = {"os": "windows", "powershellVersion": "5.1", "homeDir": "", "extra": "x"}

    assert format_runtime_info(info) == "OS: windows\nPowerShell: v5.1"
