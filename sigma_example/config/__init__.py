"""Configuration module for the Sigma example extension.

- Settings: Environment variable configuration
- DEFAULT_SETTINGS: Extension settings declared to the host
"""

from sigma_example.config.defaults import DEFAULT_SETTINGS, EXTENSION_ID, EXTENSION_VERSION
from sigma_example.config.settings import Settings

__all__ = ["DEFAULT_SETTINGS", "EXTENSION_ID", "EXTENSION_VERSION", "Settings"]
