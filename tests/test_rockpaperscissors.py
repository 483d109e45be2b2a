from __future__ import annotations

import random

import pytest

from conftest import make_registry
from grid_games.plugins.rockpaperscissors.game import (
    COMPUTER_WON_MSG,
    GAME_START_FOOTER,
    GAME_TIED_MSG,
    PLAYER_WON_MSG,
    Hand,
    Plugin,
    Result,
    winner,
)
from grid_games.protocol.errors import IncompleteGameError
from grid_games.runtime.session import GameSession


def start(opponent_hand):
    plugin = Plugin(opponent=lambda: opponent_hand)
    session = GameSession(make_registry(plugin))
    session.select_plugin(0)
    return plugin, session


@pytest.mark.parametrize(
    "hand, opponent, expected",
    [
        (Hand.ROCK, Hand.SCISSORS, Result.WIN),
        (Hand.ROCK, Hand.PAPER, Result.LOSE),
        (Hand.PAPER, Hand.ROCK, Result.WIN),
        (Hand.SCISSORS, Hand.PAPER, Result.WIN),
        (Hand.SCISSORS, Hand.ROCK, Result.LOSE),
        (Hand.PAPER, Hand.PAPER, Result.TIE),
    ],
)
def test_winner(hand, opponent, expected):
    assert winner(hand, opponent) == expected


def test_new_game_paints_hands():
    plugin, session = start(Hand.ROCK)
    view = session.render_snapshot()

    assert view.cells == [["Rock", "Paper", "Scissors"]]
    assert view.footer == GAME_START_FOOTER
    assert view.current_player == "Human"
    assert plugin.is_game_over() is False


def test_rock_beats_scissors():
    plugin, session = start(Hand.SCISSORS)
    session.play_move(0, 0)

    view = session.render_snapshot()
    assert view.game_over is True
    assert view.game_over_message == PLAYER_WON_MSG
    assert view.footer == "You played Rock, the computer played Scissors."
    assert plugin.state.result == Result.WIN


def test_rock_against_rock_ties():
    _, session = start(Hand.ROCK)
    session.play_move(0, 0)
    assert session.render_snapshot().game_over_message == GAME_TIED_MSG


def test_scissors_against_rock_loses():
    _, session = start(Hand.ROCK)
    session.play_move(2, 0)
    assert session.render_snapshot().game_over_message == COMPUTER_WON_MSG


def test_repeated_rock_after_new_game_keeps_winning():
    _, session = start(Hand.SCISSORS)
    for _ in range(3):
        session.select_plugin(0)
        assert session.render_snapshot().game_over is False
        session.play_move(0, 0)
        assert session.render_snapshot().game_over_message == PLAYER_WON_MSG


def test_game_over_message_requires_finished_game():
    plugin, _ = start(Hand.ROCK)
    with pytest.raises(IncompleteGameError):
        plugin.get_game_over_message()


def test_seeded_random_opponent_is_reproducible():
    first = Plugin(rng=random.Random(7))
    second = Plugin(rng=random.Random(7))
    assert [first._random_hand() for _ in range(10)] == [second._random_hand() for _ in range(10)]
