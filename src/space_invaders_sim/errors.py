"""
Space Invaders errors
"""


class SpaceInvadersError(Exception):
    """Base class for every error raised by the package."""


class ConfigError(SpaceInvadersError):
    """A configuration value is missing or out of range."""


class PersistenceError(SpaceInvadersError):
    """The high score could not be read from or written to storage."""


class InvalidTransitionError(SpaceInvadersError):
    """
    The state machine was asked for a transition it does not allow.

    :param current: State the machine is in
    :param target: State that was requested
    """

    def __init__(self, current, target):
        super().__init__(f"Cannot go from {current} to {target}")
        self.current = current
        self.target = target
