"""Runtime invocations and their PowerShell equivalents.

Each operation is expressed twice: arguments for the Deno runtime (running
one of the bundled scripts) and, where one exists, a PowerShell script that
prints the same JSON shape. Untrusted values only ever reach PowerShell
through ``powershell_literal``.
"""

from dataclasses import dataclass
from pathlib import Path

from sigma_example.utils.shell import powershell_literal

SCRIPTS_DIR = Path(__file__).resolve().parent.parent / "scripts"

JSON_ACTIONS = ("validate", "pretty", "minify")


@dataclass(frozen=True)
class Invocation:
    """How to perform one operation."""

    runtime_args: tuple[str, ...]
    shell_script: str | None = None


def script_path(name: str) -> str:
    return str(SCRIPTS_DIR / name)


def file_analysis(file_path: str) -> Invocation:
    """SHA-256, line count and size of a file.

    Output: ``{"hash": str, "lines": int, "sizeBytes": int}``
    """
    shell_script = "\n".join(
        [
            "$ErrorActionPreference = 'Stop'",
            f"$path = {powershell_literal(file_path)}",
            "$item = Get-Item -LiteralPath $path",
            "$hash = (Get-FileHash -LiteralPath $path -Algorithm SHA256).Hash.ToLower()",
            "$text = [System.IO.File]::ReadAllText($item.FullName)",
            "$lines = ($text -split \"`r`n|`r|`n\").Length",
            "[pscustomobject]@{ hash = $hash; lines = $lines; sizeBytes = $item.Length }"
            " | ConvertTo-Json -Compress",
        ]
    )
    return Invocation(
        runtime_args=("run", "--allow-read", script_path("file-analysis.js"), file_path),
        shell_script=shell_script,
    )


def json_tools(action: str, json_text: str) -> Invocation:
    """Validate, pretty-print or minify JSON.

    Output: ``{"output": str}``
    """
    shell_script = "\n".join(
        [
            "$ErrorActionPreference = 'Stop'",
            f"$action = {powershell_literal(action)}",
            f"$raw = {powershell_literal(json_text)}",
            "try { $parsed = $raw | ConvertFrom-Json }",
            "catch { [Console]::Error.WriteLine($_.Exception.Message); exit 1 }",
            "switch ($action) {",
            "  'validate' { $out = 'JSON is valid.' }",
            "  'pretty' { $out = $parsed | ConvertTo-Json -Depth 100 }",
            "  'minify' { $out = $parsed | ConvertTo-Json -Depth 100 -Compress }",
            "  default { [Console]::Error.WriteLine(\"Unsupported action: $action\"); exit 1 }",
            "}",
            "@{ output = $out } | ConvertTo-Json -Compress",
        ]
    )
    return Invocation(
        runtime_args=("run", script_path("json-tools.js"), action, json_text),
        shell_script=shell_script,
    )


def runtime_info() -> Invocation:
    """OS, architecture, runtime versions, hostname and home directory."""
    shell_script = "\n".join(
        [
            "$ErrorActionPreference = 'Stop'",
            "[ordered]@{",
            "  os = 'windows'",
            "  arch = $env:PROCESSOR_ARCHITECTURE",
            "  powershellVersion = $PSVersionTable.PSVersion.ToString()",
            "  dotnetVersion = [System.Environment]::Version.ToString()",
            "  hostname = [System.Environment]::MachineName",
            "  homeDir = $env:USERPROFILE",
            "} | ConvertTo-Json -Compress",
        ]
    )
    return Invocation(
        runtime_args=(
            "run",
            "--allow-env",
            "--allow-sys",
            script_path("runtime-info.js"),
        ),
        shell_script=shell_script,
    )


def evaluate(expression: str) -> Invocation:
    """Print the value of a JavaScript expression. No shell equivalent."""
    return Invocation(runtime_args=("eval", f"console.log({expression})"))
