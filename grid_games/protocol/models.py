
"""Protocol request, response and view models."""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field, PositiveInt, StrictBool, StrictInt, StrictStr


class Request(BaseModel):
    """Incoming dispatcher request."""

    command: StrictStr
    args: Dict[str, Any] = Field(default_factory=dict)

    class Config:
        extra = "forbid"


class Response(BaseModel):
    """Stable response envelope used by the dispatcher and CLI."""

    ok: StrictBool
    code: StrictStr
    message: StrictStr
    data: Dict[str, Any] = Field(default_factory=dict)
    accepted: StrictBool = False
    game_over: StrictBool = False

    class Config:
        extra = "forbid"


class SelectPluginArgs(BaseModel):
    i: StrictInt = Field(ge=0)

    class Config:
        extra = "ignore"


class PlayMoveArgs(BaseModel):
    x: StrictInt
    y: StrictInt

    class Config:
        extra = "ignore"


class PluginDescriptor(BaseModel):
    """Static facts about a plugin, captured once at registration."""

    name: StrictStr
    grid_width: PositiveInt
    grid_height: PositiveInt

    class Config:
        frozen = True


class SessionView(BaseModel):
    """Read-only snapshot of a session for the presentation layer.

    `cells` is row-major: `cells[y][x]`. `game_over_message` is only set once
    the game has ended.
    """

    plugin_name: Optional[StrictStr] = None
    width: StrictInt = 0
    height: StrictInt = 0
    cells: List[List[str]] = Field(default_factory=list)
    footer: str = ""
    current_player: Optional[str] = None
    game_over: StrictBool = False
    game_over_message: Optional[str] = None

    class Config:
        frozen = True

    def cell(self, x: int, y: int) -> str:
        return self.cells[y][x]
