"""Tests for handlers that run the external runtime."""

import asyncio
import json

import pytest

from sigma_example.commands import runtime
from sigma_example.config import Settings
from sigma_example.models import Entry, ExecutionResult, MenuContext


def analysis_json(size: int = 2048) -> str:
    return json.dumps({"hash": "ab" * 32, "lines": 12, "sizeBytes": size})


@pytest.fixture
def report() -> MenuContext:
    return MenuContext(
        selected_entries=[Entry(name="report.txt", path="/home/user/report.txt", extension="txt")]
    )


@pytest.fixture
def windows_settings() -> Settings:
    return Settings(shell_fallback="on", shell_timeout=0.05, tick_interval=0.01)


class TestParseJsonOutput:
    """Tests for parse_json_output."""

    def test_object(self) -> None:
        result = ExecutionResult(code=0, stdout='{"output": "ok"}\n', stderr="")

        assert runtime.parse_json_output(result, "deno") == {"output": "ok"}

    def test_non_zero_exit_uses_stderr(self) -> None:
        result = ExecutionResult(code=1, stdout="", stderr="Invalid JSON\n")

        with pytest.raises(runtime.RuntimeOutputError, match="^Invalid JSON$"):
            runtime.parse_json_output(result, "deno")

    def test_non_zero_exit_without_stderr(self) -> None:
        result = ExecutionResult(code=2, stdout="", stderr="")

        with pytest.raises(runtime.RuntimeOutputError, match="deno exited with code 2"):
            runtime.parse_json_output(result, "deno")

    @pytest.mark.parametrize("stdout", ["not json", "[1, 2]", ""])
    def test_unexpected_output(self, stdout: str) -> None:
        result = ExecutionResult(code=0, stdout=stdout, stderr="")

        with pytest.raises(runtime.RuntimeOutputError, match="Unexpected output from pwsh"):
            runtime.parse_json_output(result, "pwsh")


class TestAnalyzeFile:
    """Tests for the analyze-file menu item."""

    @pytest.mark.asyncio
    async def test_success_with_runtime(self, sigma, settings, shell, result, report) -> None:
        shell.set("deno", result(analysis_json()))

        await runtime.analyze_file(sigma, settings, report)

        dialog = sigma.ui.dialogs[0]
        assert dialog.title == "File Analysis: report.txt"
        assert f"SHA-256: {'ab' * 32}" in dialog.message
        assert "Lines: 12" in dialog.message
        assert "Size: 2.00 KB" in dialog.message
        assert "Analyzed with: deno" in dialog.message
        command, args = shell.calls[0]
        assert args[:2] == ("run", "--allow-read")
        assert args[-1] == "/home/user/report.txt"

    @pytest.mark.asyncio
    async def test_prefers_resolved_runtime(self, sigma, settings, shell, result, report) -> None:
        shell.paths["deno"] = "/usr/local/bin/deno"
        shell.set("/usr/local/bin/deno", result(analysis_json()))

        await runtime.analyze_file(sigma, settings, report)

        assert shell.commands == ["/usr/local/bin/deno"]
        assert "Analyzed with: /usr/local/bin/deno" in sigma.ui.dialogs[0].message

    @pytest.mark.asyncio
    async def test_falls_back_to_powershell(
        self, sigma, windows_settings, shell, result, report
    ) -> None:
        shell.set("powershell", result(analysis_json(100)))

        await runtime.analyze_file(sigma, windows_settings, report)

        assert shell.commands == ["deno", "powershell"]
        assert "Analyzed with: powershell" in sigma.ui.dialogs[0].message
        assert "Size: 100 B" in sigma.ui.dialogs[0].message

    @pytest.mark.asyncio
    async def test_no_runtime_installed(self, sigma, settings, report) -> None:
        await runtime.analyze_file(sigma, settings, report)

        notification = sigma.ui.notifications[0]
        assert notification.title == "Analysis Error"
        assert notification.type == "error"
        assert notification.message == "deno: command not found"

    @pytest.mark.asyncio
    async def test_script_error(self, sigma, settings, shell, result, report) -> None:
        shell.set("deno", result(code=1, stderr="NotFound: No such file"))

        await runtime.analyze_file(sigma, settings, report)

        assert sigma.ui.notifications[0].message == "NotFound: No such file"

    @pytest.mark.asyncio
    async def test_timeout_reports_cancelled(
        self, sigma, windows_settings, shell, make_process, report
    ) -> None:
        process = make_process(block=True)
        shell.set("powershell", process)

        await runtime.analyze_file(sigma, windows_settings, report)
        await asyncio.sleep(0.01)

        notification = sigma.ui.notifications[0]
        assert notification.title == "Analysis Cancelled"
        assert notification.message == "Timed out after 0.05 seconds."
        assert process.cancel_calls == 1
        assert sigma.ui.dialogs == []

    @pytest.mark.asyncio
    async def test_user_cancel(self, sigma, settings, shell, make_process, report) -> None:
        process = make_process(block=True)
        shell.set("deno", process)

        task = asyncio.create_task(runtime.analyze_file(sigma, settings, report))
        await asyncio.sleep(0.01)
        assert sigma.ui.cancel_progress() == 1
        await task

        notification = sigma.ui.notifications[0]
        assert notification.title == "Analysis Cancelled"
        assert notification.message == "Operation cancelled."
        assert process.cancel_calls == 1

    @pytest.mark.asyncio
    async def test_no_selection(self, sigma, settings, shell) -> None:
        await runtime.analyze_file(sigma, settings, MenuContext())

        assert shell.calls == []


class TestRuntimeEval:
    """Tests for the runtime-eval command."""

    @pytest.mark.asyncio
    async def test_success(self, sigma, settings, shell, result) -> None:
        shell.set("deno", result("4\n"))

        await runtime.runtime_eval(sigma, settings, {"expression": " 2 + 2 "})

        assert shell.calls == [("deno", ("eval", "console.log(2 + 2)"))]
        dialog = sigma.ui.dialogs[0]
        assert dialog.title == "Runtime Eval - Result"
        assert dialog.message == "Expression: 2 + 2\n\nOutput:\n4"

    @pytest.mark.asyncio
    async def test_error_exit(self, sigma, settings, shell, result) -> None:
        shell.set("deno", result(code=1, stderr="ReferenceError: x is not defined"))

        await runtime.runtime_eval(sigma, settings, {"expression": "x"})

        dialog = sigma.ui.dialogs[0]
        assert dialog.title == "Runtime Eval - Error"
        assert dialog.type == "error"
        assert dialog.message == "ReferenceError: x is not defined"

    @pytest.mark.asyncio
    async def test_never_uses_powershell(self, sigma, windows_settings, shell, result) -> None:
        shell.set("powershell", result("4"))

        await runtime.runtime_eval(sigma, windows_settings, {"expression": "2 + 2"})

        assert shell.commands == ["deno"]
        assert sigma.ui.notifications[0].title == "Runtime Eval Error"

    @pytest.mark.asyncio
    async def test_empty_expression(self, sigma, settings, shell) -> None:
        await runtime.runtime_eval(sigma, settings, {"expression": "   "})

        assert shell.calls == []
        assert sigma.ui.notifications[0].message == "No expression provided"


class TestRuntimeSystemInfo:
    """Tests for the runtime-system-info command."""

    @pytest.mark.asyncio
    async def test_deno_info(self, sigma, settings, shell, result) -> None:
        shell.set(
            "deno",
            result(json.dumps({"os": "linux", "arch": "x86_64", "denoVersion": "2.1.4"})),
        )

        await runtime.runtime_system_info(sigma, settings, {})

        dialog = sigma.ui.dialogs[0]
        assert dialog.title == "Runtime System Info"
        assert dialog.message == (
            "OS: linux\nArchitecture: x86_64\nDeno: v2.1.4\n\nReported by: deno"
        )

    @pytest.mark.asyncio
    async def test_powershell_info(self, sigma, windows_settings, shell, result) -> None:
        shell.set("deno", RuntimeError("The system cannot find the file specified"))
        shell.set("pwsh", result(json.dumps({"os": "windows", "powershellVersion": "7.4.1"})))

        await runtime.runtime_system_info(sigma, windows_settings, {})

        assert shell.commands == ["deno", "powershell", "pwsh"]
        assert sigma.ui.dialogs[0].message.endswith("Reported by: pwsh")
        assert "PowerShell: v7.4.1" in sigma.ui.dialogs[0].message

    @pytest.mark.asyncio
    async def test_fatal_launch_error_stops(self, sigma, windows_settings, shell, result) -> None:
        shell.set("deno", PermissionError("Permission denied"))
        shell.set("powershell", result("{}"))

        await runtime.runtime_system_info(sigma, windows_settings, {})

        assert shell.commands == ["deno"]
        assert sigma.ui.notifications[0].type == "error"
        assert sigma.ui.notifications[0].message == "Permission denied"


class TestJsonTools:
    """Tests for the json-tools command."""

    @pytest.mark.asyncio
    async def test_pretty(self, sigma, settings, shell, result) -> None:
        shell.set("deno", result(json.dumps({"output": '{\n  "a": 1\n}'})))

        await runtime.json_tools(sigma, settings, {"action": "pretty", "json": '{"a":1}'})

        command, args = shell.calls[0]
        assert args[-2:] == ("pretty", '{"a":1}')
        dialog = sigma.ui.dialogs[0]
        assert dialog.title == "JSON Tools - Pretty"
        assert dialog.message == '{\n  "a": 1\n}'

    @pytest.mark.asyncio
    async def test_default_action_is_validate(self, sigma, settings, shell, result) -> None:
        shell.set("deno", result('{"output": "JSON is valid."}'))

        await runtime.json_tools(sigma, settings, {"json": "[]"})

        assert sigma.ui.dialogs[0].title == "JSON Tools - Validate"

    @pytest.mark.asyncio
    async def test_invalid_json_reports_error(self, sigma, settings, shell, result) -> None:
        shell.set("deno", result(code=1, stderr="Unexpected token } in JSON"))

        await runtime.json_tools(sigma, settings, {"action": "minify", "json": "{]"})

        notification = sigma.ui.notifications[0]
        assert notification.title == "JSON Tools - Error"
        assert notification.message == "Unexpected token } in JSON"

    @pytest.mark.asyncio
    async def test_unsupported_action(self, sigma, settings, shell) -> None:
        await runtime.json_tools(sigma, settings, {"action": "sort", "json": "{}"})

        assert shell.calls == []
        assert sigma.ui.notifications[0].message == "Unsupported action: sort"

    @pytest.mark.asyncio
    async def test_missing_input(self, sigma, settings, shell) -> None:
        await runtime.json_tools(sigma, settings, {"action": "pretty", "json": "  "})

        assert shell.calls == []
        assert sigma.ui.notifications[0].message == "JSON input is required"

    @pytest.mark.asyncio
    async def test_structured_input_is_serialized(self, sigma, settings, shell, result) -> None:
        shell.set("deno", result(json.dumps({"output": "{\"a\":1}"})))

        await runtime.json_tools(sigma, settings, {"action": "minify", "json": {"a": 1}})

        command, args = shell.calls[0]
        assert args[-2:] == ("minify", '{"a": 1}')
        assert sigma.ui.dialogs[0].message == '{"a":1}'

    @pytest.mark.asyncio
    async def test_null_input_is_missing(self, sigma, settings, shell) -> None:
        await runtime.json_tools(sigma, settings, {"action": "pretty", "json": None})

        assert shell.calls == []
        assert sigma.ui.notifications[0].message == "JSON input is required"

    @pytest.mark.asyncio
    async def test_quote_in_input_reaches_powershell_escaped(
        self, sigma, windows_settings, shell, result
    ) -> None:
        shell.set("powershell", result('{"output": "JSON is valid."}'))

        await runtime.json_tools(
            sigma, windows_settings, {"action": "validate", "json": '{"name": "O\'Brien"}'}
        )

        command, args = shell.calls[-1]
        assert command == "powershell"
        assert "$raw = '{\"name\": \"O''Brien\"}'" in args[-1]
