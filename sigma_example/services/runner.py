"""Fallback runner for external commands.

Candidates are tried strictly in order. A "not found" launch failure moves on
to the next candidate; any other launch failure is raised immediately. A
process that runs and exits (with any code) ends the search.
"""

import asyncio
import logging
from collections.abc import Sequence
from typing import TYPE_CHECKING

from sigma_example.models import (
    CommandCandidate,
    ExecutionResult,
    ProgressRunOutcome,
    ProgressUpdate,
)
from sigma_example.services.cancellation import CancellationToken
from sigma_example.services.errors import CandidatesExhaustedError

if TYPE_CHECKING:
    from sigma_example.protocols import (
        ProcessExecutor,
        ProgressProcessExecutor,
        ProgressSink,
        RunningProcess,
    )

logger = logging.getLogger(__name__)

NOT_FOUND_MARKERS = ("not found", "does not exist", "cannot find")

FIRST_ATTEMPT_INCREMENT = 10.0
ATTEMPT_INCREMENT = 5.0
TICK_INCREMENT = 1.0


def is_not_found_error(error: BaseException) -> bool:
    """Check whether a launch error means the executable is missing.

    Matching is a case-insensitive substring search on the error message.
    Note that "does not exist" also matches unrelated file errors.
    """
    message = str(error).lower()
    return any(marker in message for marker in NOT_FOUND_MARKERS)


def _exhausted(last_error: BaseException | None) -> BaseException:
    if last_error is not None:
        return last_error
    return CandidatesExhaustedError("No command candidates available")


async def run_with_fallback(
    candidates: Sequence[CommandCandidate],
    executor: "ProcessExecutor",
) -> ExecutionResult:
    """Run the first candidate that can be launched.

    Args:
        candidates: Ordered candidates, most specific first.
        executor: Process execution capability.

    Returns:
        Result of the first candidate that launched.

    Raises:
        Exception: The first non "not found" launch error, unchanged; or the
            last "not found" error when every candidate is missing.
        CandidatesExhaustedError: If candidates is empty.
    """
    last_error: BaseException | None = None

    for candidate in candidates:
        try:
            result = await executor.execute(candidate.executable, list(candidate.args))
        except Exception as e:
            if not is_not_found_error(e):
                raise
            logger.debug("Candidate %s not available: %s", candidate.executable, e)
            last_error = e
            continue

        logger.debug(
            "Candidate %s exited with code %d", candidate.executable, result.code
        )
        return result

    raise _exhausted(last_error)


# Cancel tasks outlive their attempt; hold them until they finish.
_cancel_tasks: set[asyncio.Task[None]] = set()


class _Attempt:
    """State for launching a single candidate under progress reporting."""

    def __init__(
        self,
        candidate: CommandCandidate,
        progress: "ProgressSink",
        token: CancellationToken,
    ) -> None:
        self.candidate = candidate
        self.progress = progress
        self.token = token
        self.process: "RunningProcess | None" = None
        self.cancel_requested = False
        self.finished = False
        self._cancelled = asyncio.Event()

    def on_tick(self) -> None:
        if self.finished or self.cancel_requested or self.token.is_cancellation_requested:
            return
        self.progress.report(
            ProgressUpdate(
                description=f"Running {self.candidate.executable}...",
                increment=TICK_INCREMENT,
            )
        )

    def request_cancel(self) -> None:
        """Ask the running process to stop, at most once."""
        if self.cancel_requested or self.process is None:
            return
        self.cancel_requested = True
        self._cancelled.set()
        task = asyncio.ensure_future(self._cancel(self.process))
        _cancel_tasks.add(task)
        task.add_done_callback(_cancel_tasks.discard)

    async def _cancel(self, process: "RunningProcess") -> None:
        try:
            await process.cancel()
        except Exception as e:
            logger.debug("Cancelling %s failed: %s", self.candidate.executable, e)

    async def run(self, executor: "ProgressProcessExecutor") -> tuple[ExecutionResult | None, bool]:
        """Launch and wait, racing cancellation and an optional timeout.

        The process is not awaited once cancellation or the timeout wins.

        Returns:
            Tuple of (result, timed_out). result is None when cancelled or
            timed out.
        """
        self.process = await executor.start(
            self.candidate.executable, list(self.candidate.args), self.on_tick
        )
        # Cancellation may have been requested while the process was starting.
        if self.token.is_cancellation_requested:
            self.request_cancel()
            self.finished = True
            return None, False

        registration = self.token.on_cancellation_requested(self.request_cancel)
        wait_task = asyncio.ensure_future(self.process.wait())
        cancel_task = asyncio.ensure_future(self._cancelled.wait())
        try:
            done, _ = await asyncio.wait(
                {wait_task, cancel_task},
                timeout=self.candidate.timeout,
                return_when=asyncio.FIRST_COMPLETED,
            )
            if wait_task in done:
                return wait_task.result(), False

            timed_out = cancel_task not in done
            if timed_out:
                logger.warning(
                    "%s timed out after %.1fs",
                    self.candidate.executable,
                    self.candidate.timeout,
                )
                self.request_cancel()
            return None, timed_out
        finally:
            self.finished = True
            cancel_task.cancel()
            registration.dispose()
            if not wait_task.done():
                wait_task.add_done_callback(_consume_result)


def _consume_result(task: "asyncio.Future[ExecutionResult]") -> None:
    if not task.cancelled():
        task.exception()


async def run_with_progress(
    candidates: Sequence[CommandCandidate],
    executor: "ProgressProcessExecutor",
    progress: "ProgressSink",
    token: CancellationToken,
) -> ProgressRunOutcome:
    """Run candidates in order with progress reporting and cancellation.

    Cancellation is checked before each candidate and takes priority over
    error classification. A cancellation requested while a candidate runs
    is forwarded to that process only; the registration is dropped once the
    attempt ends.

    Args:
        candidates: Ordered candidates, most specific first.
        executor: Progress-capable process execution capability.
        progress: Sink for progress updates.
        token: Caller-owned cancellation token.

    Returns:
        Cancelled outcome, or the result and the command that produced it.

    Raises:
        Exception: Same rules as ``run_with_fallback``.
    """
    last_error: BaseException | None = None

    for index, candidate in enumerate(candidates):
        if token.is_cancellation_requested:
            logger.info("Run cancelled before trying %s", candidate.executable)
            return ProgressRunOutcome.cancellation()

        progress.report(
            ProgressUpdate(
                description=f"Starting {candidate.executable}...",
                increment=FIRST_ATTEMPT_INCREMENT if index == 0 else ATTEMPT_INCREMENT,
            )
        )

        attempt = _Attempt(candidate, progress, token)
        try:
            result, timed_out = await attempt.run(executor)
        except Exception as e:
            if token.is_cancellation_requested:
                logger.info("Run cancelled while %s failed: %s", candidate.executable, e)
                return ProgressRunOutcome.cancellation()
            if not is_not_found_error(e):
                raise
            logger.debug("Candidate %s not available: %s", candidate.executable, e)
            last_error = e
            continue

        if timed_out:
            return ProgressRunOutcome.cancellation(timed_out=True)
        if token.is_cancellation_requested or result is None:
            logger.info("Run cancelled while %s was running", candidate.executable)
            return ProgressRunOutcome.cancellation()

        logger.debug(
            "Candidate %s exited with code %d", candidate.executable, result.code
        )
        return ProgressRunOutcome.completed(result, candidate.executable)

    if token.is_cancellation_requested:
        return ProgressRunOutcome.cancellation()
    raise _exhausted(last_error)
