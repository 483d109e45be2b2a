
"""Plugin registry and startup loading."""

from __future__ import annotations

import importlib
import inspect
import logging
import random
import warnings
from typing import Iterator, List, Optional, Sequence, Tuple

from grid_games.plugins.base import GamePlugin
from grid_games.protocol.errors import PluginIndexError, RegistryFrozenError
from grid_games.protocol.models import PluginDescriptor


logger = logging.getLogger(__name__)

REQUIRED_PLUGIN_METHODS = (
    "get_game_name",
    "get_grid_width",
    "get_grid_height",
    "on_register",
    "on_new_game",
    "on_new_move",
    "is_move_valid",
    "is_move_over",
    "on_move_played",
    "is_game_over",
    "get_game_over_message",
    "on_game_closed",
    "current_player",
)

DEFAULT_PLUGIN_MODULES = (
    "grid_games.plugins.rockpaperscissors.game",
    "grid_games.plugins.memory.game",
)


def _validate_plugin(plugin: object) -> PluginDescriptor:
    for method_name in REQUIRED_PLUGIN_METHODS:
        if not callable(getattr(plugin, method_name, None)):
            raise TypeError(f"missing required method: {method_name}")

    return PluginDescriptor(
        name=plugin.get_game_name(),
        grid_width=plugin.get_grid_width(),
        grid_height=plugin.get_grid_height(),
    )


class PluginRegistry:
    """Ordered plugins addressed by insertion index.

    Duplicate names are allowed. Once frozen, the registry rejects further
    registrations.
    """

    def __init__(self) -> None:
        self._entries: List[Tuple[PluginDescriptor, GamePlugin]] = []
        self._frozen = False

    def register(self, plugin: GamePlugin) -> int:
        if self._frozen:
            raise RegistryFrozenError("Plugins cannot be registered once the registry is serving")
        descriptor = _validate_plugin(plugin)
        self._entries.append((descriptor, plugin))
        index = len(self._entries) - 1
        logger.info("Registered plugin %d: %s", index, descriptor.name)
        return index

    def freeze(self) -> None:
        self._frozen = True

    @property
    def frozen(self) -> bool:
        return self._frozen

    def _check_index(self, index: int) -> None:
        if isinstance(index, bool) or not isinstance(index, int):
            raise TypeError(f"plugin index must be an int, got {type(index).__name__}")
        if not 0 <= index < len(self._entries):
            raise PluginIndexError(index, len(self._entries))

    def get(self, index: int) -> GamePlugin:
        self._check_index(index)
        return self._entries[index][1]

    def descriptor(self, index: int) -> PluginDescriptor:
        self._check_index(index)
        return self._entries[index][0]

    def descriptors(self) -> List[PluginDescriptor]:
        return [descriptor for descriptor, _ in self._entries]

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[GamePlugin]:
        return iter([plugin for _, plugin in self._entries])


def _resolve_factory(path: str):
    module_name, _, attribute = path.partition(":")
    module = importlib.import_module(module_name)
    return getattr(module, attribute or "Plugin")


def _factory_kwargs(factory, seed: Optional[int]) -> dict:
    if seed is None:
        return {}
    try:
        parameters = inspect.signature(factory).parameters
    except (TypeError, ValueError):
        return {}
    return {"rng": random.Random(seed)} if "rng" in parameters else {}


def load_plugins(
    module_paths: Sequence[str] = DEFAULT_PLUGIN_MODULES,
    seed: Optional[int] = None,
) -> PluginRegistry:
    """Build a registry from import paths, in order.

    Each path is `package.module` (factory `Plugin`) or `package.module:Factory`.
    Paths that fail to import or do not satisfy the plugin contract are skipped
    with a warning. A seed is handed to factories that accept an `rng` argument.
    """
    registry = PluginRegistry()

    for path in module_paths:
        try:
            factory = _resolve_factory(path)
            plugin = factory(**_factory_kwargs(factory, seed))
            registry.register(plugin)
        except Exception as exc:
            logger.warning("Skipping plugin %s: %s", path, exc)
            warnings.warn(
                f"Skipping plugin {path}: {exc}",
                RuntimeWarning,
                stacklevel=2,
            )

    return registry
