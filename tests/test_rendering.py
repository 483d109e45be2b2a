from __future__ import annotations

from grid_games.protocol.models import SessionView
from grid_games.runtime.rendering import NO_GAME_TEXT, render_text


def test_empty_session_text():
    assert render_text(SessionView()) == NO_GAME_TEXT


def test_running_game_text():
    view = SessionView(
        plugin_name="Memory",
        width=2,
        height=1,
        cells=[["?", "Dog"]],
        footer="Select second card.",
        current_player="2",
    )
    assert render_text(view) == "Memory\n? | Dog\nSelect second card.\nCurrent player: 2"


def test_finished_game_text():
    view = SessionView(
        plugin_name="Rocks Paper Scissors",
        width=3,
        height=1,
        cells=[["Rock", "Paper", "Scissors"]],
        footer="You played Rock, the computer played Rock.",
        current_player="Human",
        game_over=True,
        game_over_message="The game ended in a tie.",
    )
    assert render_text(view).splitlines()[-1] == "The game ended in a tie."
