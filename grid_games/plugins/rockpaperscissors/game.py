"""Rock Paper Scissors against a computer opponent."""

from __future__ import annotations

import random
from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Callable, Optional

from grid_games.plugins.base import GameFramework
from grid_games.protocol.errors import IncompleteGameError


GAME_NAME = "Rocks Paper Scissors"
WIDTH = 3
HEIGHT = 1

GAME_START_FOOTER = "You are playing Rocks Paper Scissors with a computer!"
HANDS_PLAYED_FOOTER = "You played {hand}, the computer played {opponent}."
PLAYER_WON_MSG = "You won!"
COMPUTER_WON_MSG = "The computer won!"
GAME_TIED_MSG = "The game ended in a tie."
PLAYER_LABEL = "Human"


class Hand(IntEnum):
    ROCK = 0
    PAPER = 1
    SCISSORS = 2

    @property
    def label(self) -> str:
        return self.name.capitalize()


class Result(Enum):
    WIN = "win"
    LOSE = "lose"
    TIE = "tie"


def winner(hand: Hand, opponent: Hand) -> Result:
    """Result of `hand` played against `opponent`; each hand loses to the next one."""
    if hand == opponent:
        return Result.TIE
    if (hand + 1) % len(Hand) == opponent:
        return Result.LOSE
    return Result.WIN


def game_over_message(result: Result) -> str:
    return {
        Result.WIN: PLAYER_WON_MSG,
        Result.LOSE: COMPUTER_WON_MSG,
        Result.TIE: GAME_TIED_MSG,
    }[result]


@dataclass
class RockPaperScissorsState:
    hand: Optional[Hand] = None
    opponent_hand: Optional[Hand] = None
    result: Optional[Result] = None


class Plugin:
    """One pick ends the turn and the game.

    `opponent` chooses the computer's hand; by default it draws uniformly from
    `rng`.
    """

    def __init__(
        self,
        opponent: Optional[Callable[[], Hand]] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        self._rng = rng or random.Random()
        self._opponent = opponent or self._random_hand
        self._framework: Optional[GameFramework] = None
        self.state = RockPaperScissorsState()

    def _random_hand(self) -> Hand:
        return self._rng.choice(list(Hand))

    def get_game_name(self) -> str:
        return GAME_NAME

    def get_grid_width(self) -> int:
        return WIDTH

    def get_grid_height(self) -> int:
        return HEIGHT

    def on_register(self, framework: GameFramework) -> None:
        self._framework = framework

    def on_new_game(self) -> None:
        self.state = RockPaperScissorsState()
        self._framework.set_footer_text(GAME_START_FOOTER)
        for hand in Hand:
            self._framework.set_square(hand.value, 0, hand.label)

    def on_new_move(self) -> None:
        pass

    def is_move_valid(self, x: int, y: int) -> bool:
        return True

    def is_move_over(self) -> bool:
        return self.state.result is not None

    def on_move_played(self, x: int, y: int) -> None:
        hand = Hand(x)
        opponent = Hand(self._opponent())
        self.state = RockPaperScissorsState(
            hand=hand,
            opponent_hand=opponent,
            result=winner(hand, opponent),
        )
        self._framework.set_footer_text(
            HANDS_PLAYED_FOOTER.format(hand=hand.label, opponent=opponent.label)
        )

    def is_game_over(self) -> bool:
        return self.state.result is not None

    def get_game_over_message(self) -> str:
        if self.state.result is None:
            raise IncompleteGameError("Called get_game_over_message with incomplete game")
        return game_over_message(self.state.result)

    def on_game_closed(self) -> None:
        pass

    def current_player(self) -> str:
        return PLAYER_LABEL
