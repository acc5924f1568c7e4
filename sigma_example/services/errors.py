"""Exceptions raised while launching external commands."""


class CommandError(Exception):
    """Base class for command launch failures."""

    pass


class CommandNotFoundError(CommandError):
    """The executable could not be located or launched."""

    def __init__(self, command: str) -> None:
        self.command = command
        super().__init__(f"{command}: command not found")


class CommandLaunchError(CommandError):
    """The executable exists but could not be started."""

    def __init__(self, command: str, reason: str) -> None:
        self.command = command
        self.reason = reason
        super().__init__(f"Failed to launch {command}: {reason}")


class CandidatesExhaustedError(CommandError):
    """No candidate was available to run."""

    pass
