from grid_games.protocol.commands import STANDARD_COMMANDS
from grid_games.protocol.errors import (
    INVALID_ARGS,
    OK,
    PLUGIN_NOT_FOUND,
    UNKNOWN_COMMAND,
    ContractViolationError,
    GridGamesError,
    IncompleteGameError,
    PluginIndexError,
    RegistryFrozenError,
)
from grid_games.protocol.models import PluginDescriptor, Request, Response, SessionView
from grid_games.protocol.version import PROTOCOL_VERSION

__all__ = [
    "ContractViolationError",
    "GridGamesError",
    "INVALID_ARGS",
    "IncompleteGameError",
    "OK",
    "PLUGIN_NOT_FOUND",
    "PROTOCOL_VERSION",
    "PluginDescriptor",
    "PluginIndexError",
    "RegistryFrozenError",
    "Request",
    "Response",
    "STANDARD_COMMANDS",
    "SessionView",
    "UNKNOWN_COMMAND",
]
