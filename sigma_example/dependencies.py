"""Dependency container for the bridge server.

Holds the settings, the headless host and the extension activation, and is
passed explicitly to the server's tools.
"""

from dataclasses import dataclass, field

from sigma_example.config import Settings
from sigma_example.extension import Activation, activate, deactivate
from sigma_example.host import HeadlessContext, HeadlessSigma
from sigma_example.services.process import LocalShell


@dataclass
class Dependencies:
    """Container for settings, host and activation.

    Example:
        deps = Dependencies.create()
        await deps.start()
        await deps.sigma.commands.execute_command("show-info")
    """

    settings: Settings
    sigma: HeadlessSigma
    activation: Activation | None = field(default=None)

    @classmethod
    def create(cls, settings: Settings | None = None) -> "Dependencies":
        """Create dependencies from settings (environment by default).

        Returns:
            Dependencies with a headless host running real processes
        """
        settings = settings or Settings.from_env()
        sigma = HeadlessSigma(
            context=HeadlessContext(
                app_version=settings.app_version,
                current_path=settings.current_path,
            ),
            shell=LocalShell(tick_interval=settings.tick_interval),
        )
        return cls(settings=settings, sigma=sigma)

    async def start(self) -> Activation:
        """Activate the extension once."""
        if self.activation is None:
            self.activation = await activate(self.sigma, self.settings)
        return self.activation

    async def cleanup(self) -> None:
        """Deactivate the extension and cancel running progress tasks."""
        self.sigma.ui.cancel_progress()
        if self.activation is not None:
            await deactivate(self.activation)
            self.activation = None
