"""Memory matching for several players taking turns on one board."""

from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import Callable, List, MutableSequence, Optional, Sequence

from grid_games.plugins.base import GameFramework
from grid_games.protocol.errors import ContractViolationError, IncompleteGameError


GAME_NAME = "Memory"
WIDTH = 4
HEIGHT = 4
NUMBER_OF_PLAYERS = 2
WORDS = ("Apple", "Boat", "Car", "Dog", "Eagle", "Fish", "Giraffe", "Helicopter")

UNKNOWN_SQUARE_STRING = "?"
BLANK_SQUARE_STRING = ""
SELECT_FIRST_CARD_MSG = "Select first card."
SELECT_SECOND_CARD_MSG = "Select second card."
MATCH_FOUND_MSG = "You found a match!  Select first card."
NOT_A_MATCH_MSG = "That was not a match.  Select first card."
PLAYER_WON_MSG = "Player {} won!"
PLAYERS_TIED_MSG = "Players {} tied."


class MemoryGame:
    """Board rules: every item appears twice, players take turns picking pairs.

    Positions are 0-indexed. A matched pair is removed from the board and the
    current player scores and keeps playing; a mismatch passes the turn to the
    next player.
    """

    def __init__(
        self,
        number_of_players: int,
        items: Sequence[str],
        shuffle: Callable[[MutableSequence[Optional[str]]], None],
    ):
        if number_of_players < 1:
            raise ValueError(f"Number of players must be positive: {number_of_players}")
        board: List[Optional[str]] = list(items) + list(items)
        shuffle(board)
        self._board = board
        self.number_of_players = number_of_players
        self._scores = [0] * number_of_players
        self.current_player = 0

    @property
    def size(self) -> int:
        return len(self._board)

    def item_at(self, index: int) -> Optional[str]:
        return self._board[index]

    def has_item_at(self, index: int) -> bool:
        return 0 <= index < len(self._board) and self._board[index] is not None

    def score_for_player(self, player: int) -> int:
        return self._scores[player]

    def is_over(self) -> bool:
        return all(item is None for item in self._board)

    def leaders(self) -> List[int]:
        """Players holding the top score; once the game is over these are the winners."""
        top = max(self._scores)
        return [player for player, score in enumerate(self._scores) if score == top]

    def select_match(self, first: int, second: int) -> bool:
        first_item = self._validate_item_at(first)
        second_item = self._validate_item_at(second)
        if first_item != second_item:
            self.current_player = (self.current_player + 1) % self.number_of_players
            return False

        self._board[first] = None
        self._board[second] = None
        self._scores[self.current_player] += 1
        return True

    def _validate_item_at(self, index: int) -> str:
        if not self.has_item_at(index):
            raise ValueError(f"Player selected empty position: {index}")
        return self._board[index]


def tied_players(winners: Sequence[int]) -> str:
    labels = [str(player + 1) for player in winners]
    if len(labels) == 2:
        return f"{labels[0]} and {labels[1]}"
    return ", ".join(labels[:-1]) + f", and {labels[-1]}"


def game_over_message(winners: Sequence[int]) -> str:
    if len(winners) == 1:
        return PLAYER_WON_MSG.format(winners[0] + 1)
    return PLAYERS_TIED_MSG.format(tied_players(winners))


@dataclass
class MemoryState:
    game: MemoryGame
    cards_selected: int = 0
    first_index: Optional[int] = None
    second_index: Optional[int] = None
    match_found: bool = False
    revealed: List[int] = field(default_factory=list)


class Plugin:
    def __init__(
        self,
        width: int = WIDTH,
        height: int = HEIGHT,
        items: Sequence[str] = WORDS,
        number_of_players: int = NUMBER_OF_PLAYERS,
        rng: Optional[random.Random] = None,
        shuffle: Optional[Callable[[MutableSequence[Optional[str]]], None]] = None,
    ) -> None:
        if 2 * len(items) > width * height:
            raise ValueError(f"{len(items)} pairs do not fit on a {width}x{height} grid")
        self._width = width
        self._height = height
        self._items = tuple(items)
        self._number_of_players = number_of_players
        self._rng = rng or random.Random()
        self._shuffle = shuffle or self._rng.shuffle
        self._framework: Optional[GameFramework] = None
        self.state = self._fresh_state()

    def _fresh_state(self) -> MemoryState:
        return MemoryState(game=MemoryGame(self._number_of_players, self._items, self._shuffle))

    def _position(self, x: int, y: int) -> int:
        return y * self._width + x

    def _coordinates(self, position: int):
        y, x = divmod(position, self._width)
        return x, y

    def get_game_name(self) -> str:
        return GAME_NAME

    def get_grid_width(self) -> int:
        return self._width

    def get_grid_height(self) -> int:
        return self._height

    def on_register(self, framework: GameFramework) -> None:
        self._framework = framework

    def on_new_game(self) -> None:
        self.state = self._fresh_state()
        game = self.state.game
        for position in range(self._width * self._height):
            x, y = self._coordinates(position)
            text = UNKNOWN_SQUARE_STRING if game.has_item_at(position) else BLANK_SQUARE_STRING
            self._framework.set_square(x, y, text)
        self._framework.set_footer_text(SELECT_FIRST_CARD_MSG)

    def on_new_move(self) -> None:
        self.state.cards_selected = 0

    def is_move_valid(self, x: int, y: int) -> bool:
        position = self._position(x, y)
        if self.state.cards_selected == 1 and position == self.state.first_index:
            return False
        return self.state.game.has_item_at(position)

    def is_move_over(self) -> bool:
        return self.state.cards_selected > 1

    def _hide_previous_pair(self) -> None:
        # Matched cards are gone from the board; mismatched ones turn face down.
        text = BLANK_SQUARE_STRING if self.state.match_found else UNKNOWN_SQUARE_STRING
        for position in self.state.revealed:
            x, y = self._coordinates(position)
            self._framework.set_square(x, y, text)
        self.state.revealed = []

    def _reveal(self, position: int) -> None:
        x, y = self._coordinates(position)
        self._framework.set_square(x, y, self.state.game.item_at(position))
        self.state.revealed.append(position)

    def on_move_played(self, x: int, y: int) -> None:
        state = self.state
        position = self._position(x, y)

        if state.cards_selected == 0:
            self._hide_previous_pair()
            state.first_index = position
            state.second_index = None
            state.cards_selected = 1
            self._reveal(position)
            self._framework.set_footer_text(SELECT_SECOND_CARD_MSG)
            return

        if state.cards_selected != 1:
            raise ContractViolationError(
                f"Second card played with {state.cards_selected} cards already selected"
            )
        state.cards_selected = 2
        state.second_index = position
        self._reveal(position)
        state.match_found = state.game.select_match(state.first_index, state.second_index)
        self._framework.set_footer_text(MATCH_FOUND_MSG if state.match_found else NOT_A_MATCH_MSG)

    def is_game_over(self) -> bool:
        return self.state.game.is_over()

    def winners(self) -> List[int]:
        if not self.is_game_over():
            raise IncompleteGameError("Called winners with incomplete game")
        return self.state.game.leaders()

    def get_game_over_message(self) -> str:
        return game_over_message(self.winners())

    def on_game_closed(self) -> None:
        pass

    def current_player(self) -> str:
        return str(self.state.game.current_player + 1)
