"""Build ordered command candidate lists."""

import logging
from collections.abc import Sequence
from typing import TYPE_CHECKING

from sigma_example.models import CommandCandidate

if TYPE_CHECKING:
    from sigma_example.protocols import BinaryResolver

logger = logging.getLogger(__name__)

# Tried in this order after the runtime candidates.
POWERSHELL_EXECUTABLES: tuple[str, ...] = (
    "powershell",
    "pwsh",
    r"C:\Windows\System32\WindowsPowerShell\v1.0\powershell.exe",
)

POWERSHELL_ARGS: tuple[str, ...] = (
    "-NoProfile",
    "-NonInteractive",
    "-ExecutionPolicy",
    "Bypass",
    "-Command",
)


async def resolve_binary(resolver: "BinaryResolver", name: str) -> str | None:
    """Resolve name to an absolute path; lookup failures count as no match."""
    try:
        return await resolver.resolve(name)
    except Exception as e:
        logger.debug("Could not resolve %s: %s", name, e)
        return None


async def build_runtime_candidates(
    name: str,
    args: Sequence[str],
    resolver: "BinaryResolver",
) -> list[CommandCandidate]:
    """Candidates for running the external runtime.

    The resolved absolute path comes first, then the bare name so PATH
    lookup is still attempted.
    """
    candidates: list[CommandCandidate] = []
    resolved = await resolve_binary(resolver, name)
    if resolved:
        candidates.append(CommandCandidate(resolved, tuple(args)))
    if all(c.executable != name for c in candidates):
        candidates.append(CommandCandidate(name, tuple(args)))
    return candidates


def build_shell_candidates(
    script: str,
    timeout: float | None = None,
) -> list[CommandCandidate]:
    """PowerShell invocations of script, each with the same script text."""
    return [
        CommandCandidate(executable, (*POWERSHELL_ARGS, script), timeout=timeout)
        for executable in POWERSHELL_EXECUTABLES
    ]


async def build_candidates(
    runtime: str,
    runtime_args: Sequence[str],
    resolver: "BinaryResolver",
    *,
    shell_script: str | None = None,
    shell_fallback: bool = False,
    shell_timeout: float | None = None,
) -> list[CommandCandidate]:
    """Full candidate list: runtime first, platform shell after.

    Shell candidates are only added when shell_fallback is set and a script
    is given.
    """
    candidates = await build_runtime_candidates(runtime, runtime_args, resolver)
    if shell_fallback and shell_script is not None:
        candidates.extend(build_shell_candidates(shell_script, shell_timeout))
    return candidates
