from __future__ import annotations

import pytest

from grid_games.protocol.errors import IncompleteGameError
from grid_games.registry import PluginRegistry


class RecordingPlugin:
    """Scriptable plugin that records every contract call it receives.

    A turn takes `picks_per_turn` coordinates and the game ends after
    `turns_to_win` turns. Squares listed in `blocked` are never valid.
    """

    def __init__(self, name="Recorder", width=3, height=2, picks_per_turn=1, turns_to_win=2, blocked=()):
        self.name = name
        self.width = width
        self.height = height
        self.picks_per_turn = picks_per_turn
        self.turns_to_win = turns_to_win
        self.blocked = set(blocked)
        self.calls = []
        self.framework = None
        self.picks = 0
        self.turns = 0
        self.paint_on_new_game = True

    def get_game_name(self):
        return self.name

    def get_grid_width(self):
        return self.width

    def get_grid_height(self):
        return self.height

    def on_register(self, framework):
        self.calls.append("on_register")
        self.framework = framework

    def on_new_game(self):
        self.calls.append("on_new_game")
        self.picks = 0
        self.turns = 0
        if self.paint_on_new_game:
            for y in range(self.height):
                for x in range(self.width):
                    self.framework.set_square(x, y, ".")
        self.framework.set_footer_text("new game")

    def on_new_move(self):
        self.calls.append("on_new_move")
        self.picks = 0

    def is_move_valid(self, x, y):
        self.calls.append(("is_move_valid", x, y))
        return (x, y) not in self.blocked

    def is_move_over(self):
        return self.picks >= self.picks_per_turn

    def on_move_played(self, x, y):
        self.calls.append(("on_move_played", x, y))
        self.picks += 1
        self.framework.set_square(x, y, "X")
        if self.picks >= self.picks_per_turn:
            self.turns += 1
        self.framework.set_footer_text(f"turn {self.turns}")

    def is_game_over(self):
        return self.turns >= self.turns_to_win

    def get_game_over_message(self):
        if not self.is_game_over():
            raise IncompleteGameError("game still running")
        return "done"

    def on_game_closed(self):
        self.calls.append("on_game_closed")

    def current_player(self):
        return f"P{self.turns % 2 + 1}"


@pytest.fixture
def recorder():
    return RecordingPlugin()


def make_registry(*plugins):
    registry = PluginRegistry()
    for plugin in plugins:
        registry.register(plugin)
    return registry
