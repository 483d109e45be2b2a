"""Plain-text rendering of a session view."""

from __future__ import annotations

from typing import List

from grid_games.protocol.models import SessionView


NO_GAME_TEXT = "No game selected."


def _render_board(cells: List[List[str]]) -> str:
    return "\n".join(" | ".join(row) for row in cells)


def render_text(view: SessionView) -> str:
    if view.plugin_name is None:
        return NO_GAME_TEXT

    lines = [view.plugin_name, _render_board(view.cells), view.footer]
    if view.game_over:
        lines.append(view.game_over_message)
    else:
        lines.append(f"Current player: {view.current_player}")
    return "\n".join(lines)
