"""Sigma File Manager example extension.

Registers demo context-menu items and commands through the host API and
runs file analysis, JSON tools and system-info queries through an external
runtime with a PowerShell fallback.
"""

from sigma_example.extension import Activation, activate, deactivate

__version__ = "1.10.0"

__all__ = ["Activation", "activate", "deactivate"]
