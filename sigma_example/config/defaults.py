"""Extension manifest values."""

from typing import Any, Final

EXTENSION_ID: Final = "sigma-example"
EXTENSION_VERSION: Final = "1.10.0"

# Settings contributed to Settings > Extensions, with their defaults.
DEFAULT_SETTINGS: Final[dict[str, Any]] = {
    "showNotifications": True,
    "greeting": "Hello",
    "notificationDuration": 3000,
    "greetingStyle": "friendly",
}

GREETING_STYLES: Final = ("friendly", "formal", "casual")
