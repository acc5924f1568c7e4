"""Handlers that shell out to the external runtime.

Each handler builds a candidate list (runtime first, PowerShell after on
Windows), runs it, and tells the user which of three things happened:
success, a real error, or cancellation.
"""

import json
import logging
from typing import TYPE_CHECKING, Any

from sigma_example.models import (
    DialogOptions,
    MenuContext,
    Notification,
    ProgressOptions,
    ProgressRunOutcome,
)
from sigma_example.services import scripts
from sigma_example.services.candidates import build_candidates, build_runtime_candidates
from sigma_example.services.runner import run_with_fallback, run_with_progress
from sigma_example.utils.formatting import format_runtime_info, format_size

if TYPE_CHECKING:
    from sigma_example.config import Settings
    from sigma_example.models import ExecutionResult
    from sigma_example.protocols import ProgressSink, SigmaApi
    from sigma_example.services.cancellation import CancellationToken

logger = logging.getLogger(__name__)


class RuntimeOutputError(RuntimeError):
    """The runtime ran but its output could not be used."""

    pass


async def run_invocation(
    sigma: "SigmaApi",
    settings: "Settings",
    invocation: scripts.Invocation,
    title: str,
) -> ProgressRunOutcome:
    """Run an invocation under a cancellable host progress indicator."""
    shell_fallback = settings.shell_fallback_enabled(sigma.context.get_platform())
    candidates = await build_candidates(
        settings.runtime_binary,
        invocation.runtime_args,
        sigma.shell,
        shell_script=invocation.shell_script,
        shell_fallback=shell_fallback,
        shell_timeout=settings.shell_timeout,
    )
    logger.debug(
        "Running %s with candidates: %s",
        title,
        ", ".join(c.executable for c in candidates),
    )

    async def task(progress: "ProgressSink", token: "CancellationToken") -> ProgressRunOutcome:
        return await run_with_progress(candidates, sigma.shell, progress, token)

    return await sigma.ui.with_progress(ProgressOptions(title=title, cancellable=True), task)


def parse_json_output(result: "ExecutionResult", command: str) -> dict[str, Any]:
    """Decode the single JSON object a runtime script prints.

    Raises:
        RuntimeOutputError: On a non-zero exit or unparseable output.
    """
    if not result.ok:
        raise RuntimeOutputError(
            result.stderr.strip() or f"{command} exited with code {result.code}"
        )
    try:
        data = json.loads(result.stdout.strip())
    except json.JSONDecodeError as e:
        raise RuntimeOutputError(f"Unexpected output from {command}: {e}") from e
    if not isinstance(data, dict):
        raise RuntimeOutputError(f"Unexpected output from {command}: expected an object")
    return data


def notify_cancelled(sigma: "SigmaApi", settings: "Settings", title: str, outcome: ProgressRunOutcome) -> None:
    if outcome.timed_out:
        message = f"Timed out after {settings.shell_timeout:g} seconds."
    else:
        message = "Operation cancelled."
    sigma.ui.show_notification(Notification(title=title, message=message, type="warning"))


def notify_error(sigma: "SigmaApi", title: str, error: Exception, fallback: str) -> None:
    sigma.ui.show_notification(
        Notification(title=title, message=str(error) or fallback, type="error")
    )


async def analyze_file(sigma: "SigmaApi", settings: "Settings", menu_context: MenuContext) -> None:
    """Show SHA-256, line count and size of the selected file."""
    if not menu_context.selected_entries:
        return
    entry = menu_context.selected_entries[0]

    try:
        outcome = await run_invocation(
            sigma, settings, scripts.file_analysis(entry.path), f"Analyzing {entry.name}..."
        )
        if outcome.cancelled:
            notify_cancelled(sigma, settings, "Analysis Cancelled", outcome)
            return
        analysis = parse_json_output(outcome.result, outcome.command_used)
    except Exception as e:
        logger.warning("File analysis failed for %s: %s", entry.path, e)
        notify_error(sigma, "Analysis Error", e, "Failed to analyze file")
        return

    await sigma.ui.show_dialog(
        DialogOptions(
            title=f"File Analysis: {entry.name}",
            message="\n".join(
                [
                    f"SHA-256: {analysis.get('hash')}",
                    f"Lines: {analysis.get('lines')}",
                    f"Size: {format_size(int(analysis.get('sizeBytes') or 0))}",
                    f"Analyzed with: {outcome.command_used}",
                ]
            ),
            type="info",
        )
    )


async def runtime_eval(sigma: "SigmaApi", settings: "Settings", args: dict[str, Any]) -> None:
    """Evaluate a JavaScript expression with the runtime."""
    expression = (args.get("expression") or "").strip()
    if not expression:
        sigma.ui.show_notification(
            Notification(title="Runtime Eval", message="No expression provided", type="warning")
        )
        return

    invocation = scripts.evaluate(expression)
    try:
        candidates = await build_runtime_candidates(
            settings.runtime_binary, invocation.runtime_args, sigma.shell
        )
        result = await run_with_fallback(candidates, sigma.shell)
    except Exception as e:
        logger.warning("Runtime eval failed: %s", e)
        notify_error(sigma, "Runtime Eval Error", e, "Failed to run the runtime")
        return

    if not result.ok:
        await sigma.ui.show_dialog(
            DialogOptions(
                title="Runtime Eval - Error",
                message=result.stderr.strip() or f"Exited with code {result.code}",
                type="error",
            )
        )
        return

    await sigma.ui.show_dialog(
        DialogOptions(
            title="Runtime Eval - Result",
            message=f"Expression: {expression}\n\nOutput:\n{result.stdout.strip()}",
            type="info",
        )
    )


async def runtime_system_info(sigma: "SigmaApi", settings: "Settings", args: dict[str, Any]) -> None:
    """Show OS and runtime information reported by the runtime."""
    title = "Runtime System Info"
    try:
        outcome = await run_invocation(sigma, settings, scripts.runtime_info(), "Collecting system info...")
        if outcome.cancelled:
            notify_cancelled(sigma, settings, title, outcome)
            return
        info = parse_json_output(outcome.result, outcome.command_used)
    except Exception as e:
        logger.warning("System info failed: %s", e)
        notify_error(sigma, title, e, "No runtime is installed or on PATH")
        return

    await sigma.ui.show_dialog(
        DialogOptions(
            title=title,
            message=f"{format_runtime_info(info)}\n\nReported by: {outcome.command_used}",
            type="info",
        )
    )


async def json_tools(sigma: "SigmaApi", settings: "Settings", args: dict[str, Any]) -> None:
    """Validate, pretty-print or minify JSON text."""
    title = "JSON Tools"
    action = args.get("action") or "validate"
    raw = args.get("json")
    # Structured input arrives already parsed; serialize it back to text.
    if raw is None or isinstance(raw, str):
        json_text = raw or ""
    else:
        json_text = json.dumps(raw)

    if action not in scripts.JSON_ACTIONS:
        sigma.ui.show_notification(
            Notification(title=title, message=f"Unsupported action: {action}", type="warning")
        )
        return
    if not json_text.strip():
        sigma.ui.show_notification(
            Notification(title=title, message="JSON input is required", type="warning")
        )
        return

    try:
        outcome = await run_invocation(
            sigma, settings, scripts.json_tools(action, json_text), f"Running JSON {action}..."
        )
        if outcome.cancelled:
            notify_cancelled(sigma, settings, title, outcome)
            return
        data = parse_json_output(outcome.result, outcome.command_used)
    except Exception as e:
        logger.warning("JSON %s failed: %s", action, e)
        notify_error(sigma, f"{title} - Error", e, "Failed to process JSON")
        return

    await sigma.ui.show_dialog(
        DialogOptions(
            title=f"{title} - {action.capitalize()}",
            message=str(data.get("output", "")),
            type="info",
        )
    )
