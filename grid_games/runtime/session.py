"""The game session: one active plugin, one grid, one turn state machine."""

from __future__ import annotations

import logging
import threading
from typing import Dict, Optional

from grid_games.plugins.base import GamePlugin
from grid_games.protocol.errors import ContractViolationError
from grid_games.protocol.models import SessionView
from grid_games.registry import PluginRegistry
from grid_games.runtime.grid import GridModel
from grid_games.runtime.turns import SessionState, TurnMachine


logger = logging.getLogger(__name__)


class FrameworkHandle:
    """Grid mutation API handed to a plugin in `on_register`.

    A handle only paints while its plugin is the session's active plugin.
    """

    def __init__(self, session: "GameSession", plugin: GamePlugin):
        self._session = session
        self._plugin = plugin

    def _grid(self) -> GridModel:
        if self._session.active_plugin is not self._plugin or self._session.grid is None:
            raise ContractViolationError("Inactive plugin attempted to modify the grid")
        return self._session.grid

    def set_square(self, x: int, y: int, text: str) -> None:
        self._grid().set_square(x, y, text)

    def set_footer_text(self, text: str) -> None:
        self._grid().set_footer_text(text)


class GameSession:
    """Drives one plugin at a time through its lifecycle.

    All public operations hold a single lock, so a threaded transport can
    share one session.
    """

    def __init__(self, registry: PluginRegistry):
        registry.freeze()
        self.registry = registry
        self._lock = threading.RLock()
        self._machine = TurnMachine()
        self._handles: Dict[int, FrameworkHandle] = {}
        self._active: Optional[GamePlugin] = None
        self._active_index: Optional[int] = None
        self._grid: Optional[GridModel] = None
        self._moves_selected = 0
        self._turn_opened = False
        for plugin in registry:
            self._register_once(plugin)

    @property
    def state(self) -> SessionState:
        return self._machine.phase

    @property
    def active_plugin(self) -> Optional[GamePlugin]:
        return self._active

    @property
    def active_index(self) -> Optional[int]:
        return self._active_index

    @property
    def grid(self) -> Optional[GridModel]:
        return self._grid

    @property
    def moves_selected_this_turn(self) -> int:
        return self._moves_selected

    @property
    def terminal(self) -> bool:
        return self.state == SessionState.GAME_OVER

    @property
    def has_game(self) -> bool:
        return self._active is not None

    def _register_once(self, plugin: GamePlugin) -> None:
        key = id(plugin)
        if key in self._handles:
            return
        handle = FrameworkHandle(self, plugin)
        self._handles[key] = handle
        plugin.on_register(handle)

    def _reset_turn(self) -> None:
        self._moves_selected = 0
        self._turn_opened = False

    def _discard_game(self) -> None:
        # Drops a game whose plugin broke the contract; no close notification.
        self._active = None
        self._active_index = None
        self._grid = None
        self._reset_turn()
        self._machine = TurnMachine()

    def _close_active(self) -> None:
        if self._active is None:
            return
        plugin = self._active
        logger.info("Closing plugin %s", plugin.get_game_name())
        self._active = None
        self._active_index = None
        self._grid = None
        self._reset_turn()
        plugin.on_game_closed()

    def select_plugin(self, index: int) -> None:
        with self._lock:
            plugin = self.registry.get(index)
            descriptor = self.registry.descriptor(index)

            self._close_active()
            self._machine = TurnMachine()
            self._machine.begin_game()
            self._active = plugin
            self._active_index = index
            self._grid = GridModel(descriptor.grid_width, descriptor.grid_height)
            try:
                plugin.on_new_game()
                unpainted = self._grid.unpainted()
                if unpainted:
                    raise ContractViolationError(
                        f"{descriptor.name} left {len(unpainted)} squares unpainted after a new game"
                    )
            except Exception:
                self._discard_game()
                raise
            self._machine.game_ready()
            logger.info("Started %s (plugin %d)", descriptor.name, index)

    def play_move(self, x: int, y: int) -> bool:
        """Play one coordinate. Returns False when the move was ignored."""
        with self._lock:
            plugin = self._active
            if plugin is None or self.terminal:
                logger.debug("Ignoring move (%d, %d): no game in progress", x, y)
                return False
            if not self._grid.in_bounds(x, y):
                logger.debug("Ignoring move (%d, %d): outside the grid", x, y)
                return False

            try:
                return self._advance(plugin, x, y)
            except Exception:
                self._discard_game()
                raise

    def _advance(self, plugin: GamePlugin, x: int, y: int) -> bool:
        if self.state == SessionState.AWAITING_MOVE and not self._turn_opened:
            plugin.on_new_move()
            self._turn_opened = True

        if not plugin.is_move_valid(x, y):
            logger.debug("Ignoring move (%d, %d): rejected by %s", x, y, plugin.get_game_name())
            return False

        plugin.on_move_played(x, y)
        self._moves_selected += 1

        if not plugin.is_move_over():
            self._machine.coordinate_played()
            return True

        self._machine.resolve_turn()
        self._reset_turn()
        if plugin.is_game_over():
            self._machine.finish()
            logger.info("Game over in %s", plugin.get_game_name())
        else:
            self._machine.next_turn()
        return True

    def close(self) -> None:
        with self._lock:
            if self._active is None:
                return
            self._close_active()
            self._machine.close()

    def render_snapshot(self) -> SessionView:
        with self._lock:
            plugin = self._active
            if plugin is None:
                return SessionView()

            game_over = self.terminal
            return SessionView(
                plugin_name=self.registry.descriptor(self._active_index).name,
                width=self._grid.width,
                height=self._grid.height,
                cells=self._grid.rows(),
                footer=self._grid.footer,
                current_player=plugin.current_player(),
                game_over=game_over,
                game_over_message=plugin.get_game_over_message() if game_over else None,
            )
