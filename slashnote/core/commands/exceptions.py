"""Exceptions raised while building the command registry.

All of these are configuration errors: they surface when the catalogue is
assembled at import time, never while a note is being interpreted.
"""


class CommandError(Exception):
    """Base class for command registry errors."""


class DuplicateCommandError(CommandError, ValueError):
    """Raised when a command name or alias is registered twice.

    Attributes:
        name: The conflicting name or alias.
    """

    def __init__(self, name: str, existing: str):
        super().__init__(
            f"Command name '{name}' is already registered by '/{existing}'"
        )
        self.name = name
        self.existing = existing


class InvalidDefinitionError(CommandError, ValueError):
    """Raised when a definition breaks the executor/noop invariant."""


class RegistryFrozenError(CommandError, RuntimeError):
    """Raised when registering into a registry that has been frozen."""
