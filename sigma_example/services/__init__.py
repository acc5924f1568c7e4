"""Services for the Sigma example extension."""

from sigma_example.services.candidates import (
    build_candidates,
    build_runtime_candidates,
    build_shell_candidates,
)
from sigma_example.services.cancellation import (
    CancellationToken,
    CancellationTokenSource,
    Disposable,
)
from sigma_example.services.errors import (
    CandidatesExhaustedError,
    CommandError,
    CommandLaunchError,
    CommandNotFoundError,
)
from sigma_example.services.process import LocalShell, SubprocessExecutor, WhichResolver
from sigma_example.services.runner import (
    is_not_found_error,
    run_with_fallback,
    run_with_progress,
)

__all__ = [
    "CancellationToken",
    "CancellationTokenSource",
    "CandidatesExhaustedError",
    "CommandError",
    "CommandLaunchError",
    "CommandNotFoundError",
    "Disposable",
    "LocalShell",
    "SubprocessExecutor",
    "WhichResolver",
    "build_candidates",
    "build_runtime_candidates",
    "build_shell_candidates",
    "is_not_found_error",
    "run_with_fallback",
    "run_with_progress",
]
