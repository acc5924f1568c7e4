"""Command execution data models."""

from dataclasses import dataclass


@dataclass(frozen=True)
class CommandCandidate:
    """One executable to try, with its arguments.

    Candidates are tried in list order. ``timeout`` is only set for
    platform-shell candidates.
    """

    executable: str
    args: tuple[str, ...] = ()
    timeout: float | None = None


@dataclass
class ExecutionResult:
    """Result of a local process execution."""

    code: int
    stdout: str
    stderr: str

    @property
    def ok(self) -> bool:
        """True when the process exited with code 0."""
        return self.code == 0


@dataclass
class ProgressRunOutcome:
    """Outcome of a progress-reporting fallback run.

    Either ``cancelled`` is True (and ``result`` is None), or the run
    completed and ``result``/``command_used`` describe the candidate that
    served the request.
    """

    cancelled: bool
    result: ExecutionResult | None = None
    command_used: str | None = None
    timed_out: bool = False

    @classmethod
    def completed(cls, result: ExecutionResult, command: str) -> "ProgressRunOutcome":
        return cls(cancelled=False, result=result, command_used=command)

    @classmethod
    def cancellation(cls, timed_out: bool = False) -> "ProgressRunOutcome":
        return cls(cancelled=True, timed_out=timed_out)
