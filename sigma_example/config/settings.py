"""Application settings from environment variables.

Centralized environment variable parsing and validation.
"""

import logging
import os
from dataclasses import dataclass, field

logger = logging.getLogger(__name__)

ENV_PREFIX = "SIGMA_EXAMPLE_"


@dataclass
class Settings:
    """Runtime settings for the extension and its bridge server.

    Handles parsing, validation, and defaults for all env vars.
    """

    # External runtime
    runtime_binary: str = field(default="deno")
    shell_timeout: float = field(default=30.0)
    tick_interval: float = field(default=0.5)
    shell_fallback: str = field(default="auto")  # auto, on, off

    # Headless host
    app_version: str = field(default="1.10.0")
    current_path: str = field(default_factory=os.getcwd)

    # Transport
    transport: str = field(default="stdio")
    http_host: str = field(default="127.0.0.1")
    http_port: int = field(default=8000)

    # Logging
    log_level: str = field(default="INFO")
    log_colors: bool = field(default=True)
    include_traceback: bool = field(default=False)

    @classmethod
    def from_env(cls) -> "Settings":
        """Load settings from SIGMA_EXAMPLE_* environment variables.

        Returns:
            Settings instance with values from environment
        """
        return cls(
            runtime_binary=os.getenv(f"{ENV_PREFIX}RUNTIME", "deno"),
            shell_timeout=cls._get_float("SHELL_TIMEOUT", 30.0),
            tick_interval=cls._get_float("TICK_INTERVAL", 0.5),
            shell_fallback=cls._get_choice("SHELL_FALLBACK", ("auto", "on", "off"), "auto"),
            app_version=os.getenv(f"{ENV_PREFIX}APP_VERSION", "1.10.0"),
            current_path=os.getenv(f"{ENV_PREFIX}CURRENT_PATH", os.getcwd()),
            transport=cls._get_choice("TRANSPORT", ("stdio", "http"), "stdio"),
            http_host=os.getenv(f"{ENV_PREFIX}HTTP_HOST", "127.0.0.1"),
            http_port=cls._get_int("HTTP_PORT", 8000),
            log_level=os.getenv(f"{ENV_PREFIX}LOG_LEVEL", "INFO").upper(),
            log_colors=cls._get_bool("LOG_COLORS", True),
            include_traceback=cls._get_bool("INCLUDE_TRACEBACK", False),
        )

    def shell_fallback_enabled(self, platform: str) -> bool:
        """Whether PowerShell candidates should follow the runtime.

        Args:
            platform: Host platform name ("windows", "macos", "linux")
        """
        if self.shell_fallback == "on":
            return True
        if self.shell_fallback == "off":
            return False
        return platform == "windows"

    @staticmethod
    def _get_int(key: str, default: int) -> int:
        value = os.getenv(f"{ENV_PREFIX}{key}")
        if value is None:
            return default

        try:
            return int(value)
        except ValueError:
            logger.warning("Invalid int for %s%s: %s, using default %d", ENV_PREFIX, key, value, default)
            return default

    @staticmethod
    def _get_float(key: str, default: float) -> float:
        value = os.getenv(f"{ENV_PREFIX}{key}")
        if value is None:
            return default

        try:
            parsed = float(value)
        except ValueError:
            logger.warning("Invalid number for %s%s: %s, using default %s", ENV_PREFIX, key, value, default)
            return default

        if parsed <= 0:
            logger.warning("%s%s must be > 0, got %s. Using default: %s", ENV_PREFIX, key, value, default)
            return default
        return parsed

    @staticmethod
    def _get_bool(key: str, default: bool) -> bool:
        """Get boolean from environment.

        Args:
            key: Variable name without prefix
            default: Default value if not set

        Returns:
            Boolean value from environment or default
        """
        value = os.getenv(f"{ENV_PREFIX}{key}")
        if value is None:
            return default
        return value.lower() in ("1", "true", "yes", "on")

    @staticmethod
    def _get_choice(key: str, choices: tuple[str, ...], default: str) -> str:
        value = os.getenv(f"{ENV_PREFIX}{key}", "").lower()
        if value in choices:
            return value
        if value:
            logger.warning("Invalid value for %s%s: %s, using %s", ENV_PREFIX, key, value, default)
        return default
