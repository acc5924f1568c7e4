"""Colorful console logging formatter."""

import logging
import re
import sys
from datetime import datetime

# ANSI color codes
COLORS = {
    "reset": "\033[0m",
    "bold": "\033[1m",
    "dim": "\033[2m",
    "green": "\033[32m",
    "yellow": "\033[33m",
    "cyan": "\033[36m",
    "white": "\033[37m",
    "bright_black": "\033[90m",
    "bright_red": "\033[91m",
    "bright_green": "\033[92m",
    "bright_yellow": "\033[93m",
    "bright_blue": "\033[94m",
    "bright_magenta": "\033[95m",
    "bright_cyan": "\033[96m",
    "bg_red": "\033[41m",
}

LEVEL_COLORS = {
    "DEBUG": COLORS["bright_black"],
    "INFO": COLORS["bright_green"],
    "WARNING": COLORS["bright_yellow"],
    "ERROR": COLORS["bright_red"],
    "CRITICAL": COLORS["bg_red"] + COLORS["white"] + COLORS["bold"],
}

# Component colors for logger names
COMPONENT_COLORS = {
    "sigma_example.server": COLORS["bright_cyan"],
    "sigma_example.services": COLORS["bright_magenta"],
    "sigma_example.commands": COLORS["bright_blue"],
    "sigma_example.host": COLORS["cyan"],
    "sigma_example.middleware": COLORS["yellow"],
    "sigma_example.config": COLORS["green"],
    "default": COLORS["white"],
}

PACKAGE_PREFIX = "sigma_example."

DURATION_PATTERN = re.compile(r"(\d+\.?\d*m?s)\b")
PID_PATTERN = re.compile(r"(pid=\d+)")
EXIT_CODE_PATTERN = re.compile(r"(exited with code \d+)")


class ColorfulFormatter(logging.Formatter):
    """Log formatter with colored levels and component highlighting."""

    def __init__(self, use_colors: bool = True) -> None:
        """Initialize the formatter.

        Args:
            use_colors: Whether to use ANSI colors.
        """
        super().__init__()
        self.use_colors = use_colors

    def _colorize(self, text: str, color: str) -> str:
        if not self.use_colors:
            return text
        return f"{color}{text}{COLORS['reset']}"

    def _get_component_color(self, name: str) -> str:
        for prefix, color in COMPONENT_COLORS.items():
            if prefix != "default" and name.startswith(prefix):
                return color
        return COMPONENT_COLORS["default"]

    def _format_timestamp(self, record: logging.LogRecord) -> str:
        dt = datetime.fromtimestamp(record.created)
        return f"{dt.strftime('%H:%M:%S')}.{int(record.msecs):03d}"

    def _format_level(self, record: logging.LogRecord) -> str:
        level = record.levelname
        color = LEVEL_COLORS.get(level, COLORS["white"])
        return self._colorize(f"{level:<8}", color)

    def _format_component(self, record: logging.LogRecord) -> str:
        name = record.name
        if name.startswith(PACKAGE_PREFIX):
            name = name[len(PACKAGE_PREFIX):]
        color = self._get_component_color(record.name)
        return self._colorize(f"{name:<22}", color)

    def format(self, record: logging.LogRecord) -> str:
        """Format the log record as ``time | level | component | message``."""
        timestamp = self._colorize(self._format_timestamp(record), COLORS["dim"])
        level = self._format_level(record)
        component = self._format_component(record)
        sep = self._colorize("|", COLORS["dim"])
        message = self._highlight_message(record.getMessage())

        line = f"{timestamp} {sep} {level} {sep} {component} {sep} {message}"
        if record.exc_info:
            line = f"{line}\n{self.formatException(record.exc_info)}"
        return line

    def _highlight_message(self, message: str) -> str:
        """Highlight durations, pids and exit codes."""
        if not self.use_colors:
            return message

        message = DURATION_PATTERN.sub(
            f"{COLORS['bright_yellow']}\\1{COLORS['reset']}", message
        )
        message = PID_PATTERN.sub(f"{COLORS['bright_magenta']}\\1{COLORS['reset']}", message)
        message = EXIT_CODE_PATTERN.sub(f"{COLORS['cyan']}\\1{COLORS['reset']}", message)
        return message


class CommandFormatter(ColorfulFormatter):
    """Adds a short marker for process lifecycle events."""

    def format(self, record: logging.LogRecord) -> str:
        base = super().format(record)
        if not self.use_colors:
            return base

        message = record.getMessage().lower()
        if "started" in message or "activated" in message:
            return f"{COLORS['bright_green']}>>>{COLORS['reset']} {base}"
        elif "cancel" in message or "timed out" in message:
            return f"{COLORS['bright_yellow']}!{COLORS['reset']}   {base}"
        elif "error" in message or "failed" in message:
            return f"{COLORS['bright_red']}!!{COLORS['reset']}  {base}"
        elif "not available" in message:
            return f"{COLORS['bright_black']}~{COLORS['reset']}   {base}"
        elif "exited with code 0" in message:
            return f"{COLORS['bright_green']}OK{COLORS['reset']}  {base}"

        return f"    {base}"


def configure_logging(level: str = "INFO", use_colors: bool = True) -> logging.Logger:
    """Attach a formatter to the sigma_example package logger.

    Colors are disabled when stderr is not a TTY. Calling this twice does
    not add a second handler.

    Returns:
        The package logger.
    """
    if not sys.stderr.isatty():
        use_colors = False

    package_logger = logging.getLogger("sigma_example")
    package_logger.setLevel(getattr(logging, level.upper(), logging.INFO))

    if not package_logger.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(CommandFormatter(use_colors=use_colors))
        package_logger.addHandler(handler)
        package_logger.propagate = False

    for noisy_logger in ["uvicorn", "uvicorn.access", "uvicorn.error", "httpx", "httpcore", "fastmcp", "starlette", "anyio"]:
        logging.getLogger(noisy_logger).setLevel(logging.WARNING)

    return package_logger
