"""Tests for candidate list construction."""

import pytest

from sigma_example.models import CommandCandidate
from sigma_example.services.candidates import (
    POWERSHELL_ARGS,
    POWERSHELL_EXECUTABLES,
    build_candidates,
    build_runtime_candidates,
    build_shell_candidates,
    resolve_binary,
)


class BrokenResolver:
    async def resolve(self, name: str) -> str | None:
        raise OSError("PATH lookup failed")


@pytest.mark.asyncio
async def test_resolved_path_comes_first(shell) -> None:
    shell.paths["deno"] = "/usr/local/bin/deno"

    candidates = await build_runtime_candidates("deno", ["eval", "1"], shell)

    assert candidates == [
        CommandCandidate("/usr/local/bin/deno", ("eval", "1")),
        CommandCandidate("deno", ("eval", "1")),
    ]


@pytest.mark.asyncio
async def test_unresolved_runtime_uses_bare_name(shell) -> None:
    candidates = await build_runtime_candidates("deno", ["eval", "1"], shell)

    assert [c.executable for c in candidates] == ["deno"]


@pytest.mark.asyncio
async def test_resolution_equal_to_name_is_not_duplicated(shell) -> None:
    shell.paths["deno"] = "deno"

    candidates = await build_runtime_candidates("deno", [], shell)

    assert [c.executable for c in candidates] == ["deno"]


@pytest.mark.asyncio
async def test_resolver_failure_counts_as_no_match() -> None:
    assert await resolve_binary(BrokenResolver(), "deno") is None

    candidates = await build_runtime_candidates("deno", [], BrokenResolver())

    assert [c.executable for c in candidates] == ["deno"]


def test_shell_candidates_order_and_arguments() -> None:
    script = "Write-Output 'hi'"

    candidates = build_shell_candidates(script, timeout=30.0)

    assert [c.executable for c in candidates] == list(POWERSHELL_EXECUTABLES)
    assert candidates[0].executable == "powershell"
    assert candidates[1].executable == "pwsh"
    assert candidates[2].executable.endswith("powershell.exe")
    for candidate in candidates:
        assert candidate.args == (*POWERSHELL_ARGS, script)
        assert candidate.timeout == 30.0


def test_shell_arguments_are_non_interactive() -> None:
    assert POWERSHELL_ARGS == (
        "-NoProfile",
        "-NonInteractive",
        "-ExecutionPolicy",
        "Bypass",
        "-Command",
    )


@pytest.mark.asyncio
async def test_build_candidates_without_fallback(shell) -> None:
    candidates = await build_candidates(
        "deno", ["run", "x.js"], shell, shell_script="Get-Date", shell_fallback=False
    )

    assert [c.executable for c in candidates] == ["deno"]


@pytest.mark.asyncio
async def test_build_candidates_with_fallback(shell) -> None:
    shell.paths["deno"] = "/opt/deno"

    candidates = await build_candidates(
        "deno",
        ["run", "x.js"],
        shell,
        shell_script="Get-Date",
        shell_fallback=True,
        shell_timeout=5.0,
    )

    assert [c.executable for c in candidates] == [
        "/opt/deno",
        "deno",
        *POWERSHELL_EXECUTABLES,
    ]
    assert candidates[0].timeout is None
    assert candidates[-1].timeout == 5.0


@pytest.mark.asyncio
async def test_build_candidates_fallback_needs_script(shell) -> None:
    candidates = await build_candidates("deno", [], shell, shell_fallback=True)

    assert [c.executable for c in candidates] == ["deno"]
