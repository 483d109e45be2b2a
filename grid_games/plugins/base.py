"""Plugin contract for grid games.

Plugins never touch the grid directly: they receive a `GameFramework` handle
in `on_register` and paint squares and the footer through it. The session
calls the contract methods in a fixed order:

    on_register (once per instance)
    on_new_game
    on_new_move, is_move_valid, on_move_played, is_move_over, is_game_over ...
    on_game_closed

`is_move_valid` must be free of side effects. `get_game_over_message` may only
be called once `is_game_over` is true.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class GameFramework(Protocol):
    def set_square(self, x: int, y: int, text: str) -> None:
        ...

    def set_footer_text(self, text: str) -> None:
        ...


@runtime_checkable
class GamePlugin(Protocol):
    def get_game_name(self) -> str:
        ...

    def get_grid_width(self) -> int:
        ...

    def get_grid_height(self) -> int:
        ...

    def on_register(self, framework: GameFramework) -> None:
        ...

    def on_new_game(self) -> None:
        ...

    def on_new_move(self) -> None:
        ...

    def is_move_valid(self, x: int, y: int) -> bool:
        ...

    def is_move_over(self) -> bool:
        ...

    def on_move_played(self, x: int, y: int) -> None:
        ...

    def is_game_over(self) -> bool:
        ...

    def get_game_over_message(self) -> str:
        ...

    def on_game_closed(self) -> None:
        ...

    def current_player(self) -> str:
        ...
