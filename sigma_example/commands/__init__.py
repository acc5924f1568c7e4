"""Command and context-menu handlers for the Sigma example extension."""

from sigma_example.commands.basic import (
    copy_path,
    count_selected,
    demo_progress,
    file_info,
    greet,
    list_builtin_commands,
    open_file_dialog,
    quick_view,
    say_hello,
    show_context,
    show_info,
    show_settings,
)
from sigma_example.commands.runtime import (
    RuntimeOutputError,
    analyze_file,
    json_tools,
    parse_json_output,
    run_invocation,
    runtime_eval,
    runtime_system_info,
)

__all__ = [
    "RuntimeOutputError",
    "analyze_file",
    "copy_path",
    "count_selected",
    "demo_progress",
    "file_info",
    "greet",
    "json_tools",
    "list_builtin_commands",
    "open_file_dialog",
    "parse_json_output",
    "quick_view",
    "run_invocation",
    "runtime_eval",
    "runtime_system_info",
    "say_hello",
    "show_context",
    "show_info",
    "show_settings",
]
