"""Response codes and the exception hierarchy shared by the framework.

Invalid moves are never errors: the session rejects them silently. The
exceptions below cover configuration mistakes (bad plugin index, late
registration) and contract violations, which indicate a plugin or framework
bug and must reach the caller.
"""

from __future__ import annotations


OK = "OK"
INVALID_ARGS = "INVALID_ARGS"
PLUGIN_NOT_FOUND = "PLUGIN_NOT_FOUND"
UNKNOWN_COMMAND = "UNKNOWN_COMMAND"


class GridGamesError(Exception):
    """Base class for framework errors."""


class PluginIndexError(GridGamesError, IndexError):
    def __init__(self, index: int, count: int):
        self.index = index
        self.count = count
        super().__init__(f"Plugin index {index} is out of range (registry holds {count} plugins)")


class RegistryFrozenError(GridGamesError):
    """Raised when a plugin is registered after serving began."""


class ContractViolationError(GridGamesError, RuntimeError):
    """A plugin or the framework broke the plugin contract."""


class IncompleteGameError(ContractViolationError):
    """The game-over message was requested before the game ended."""
