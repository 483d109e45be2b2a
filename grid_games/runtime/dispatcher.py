
"""Request dispatcher sitting between a transport and the game session."""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from pydantic import BaseModel, ValidationError

from grid_games.protocol.commands import STANDARD_COMMANDS
from grid_games.protocol.errors import (
    INVALID_ARGS,
    OK,
    PLUGIN_NOT_FOUND,
    UNKNOWN_COMMAND,
    PluginIndexError,
)
from grid_games.protocol.models import PlayMoveArgs, Request, Response, SelectPluginArgs
from grid_games.protocol.version import PROTOCOL_VERSION
from grid_games.runtime.serialization import state_hash
from grid_games.runtime.session import GameSession


logger = logging.getLogger(__name__)


def _dump(model: BaseModel) -> Dict[str, Any]:
    return model.model_dump() if hasattr(model, "model_dump") else model.dict()


def _validate(model_cls, raw: Any):
    return model_cls.model_validate(raw) if hasattr(model_cls, "model_validate") else model_cls.parse_obj(raw)


class Dispatcher:
    """Maps requests onto `GameSession` operations.

    Contract violations raised by plugins are not converted into responses;
    they reach the caller unchanged.
    """

    def __init__(self, session: GameSession):
        self.session = session

    def _response(
        self,
        *,
        ok: bool,
        code: str,
        message: str,
        data: Optional[Dict[str, Any]] = None,
        accepted: bool = False,
    ) -> Dict[str, Any]:
        response = Response(
            ok=ok,
            code=code,
            message=message,
            data=data or {},
            accepted=accepted,
            game_over=self.session.terminal,
        )
        return _dump(response)

    def _view_data(self) -> Dict[str, Any]:
        return {"view": _dump(self.session.render_snapshot())}

    def _invalid_args(self, exc: ValidationError) -> Dict[str, Any]:
        return self._response(ok=False, code=INVALID_ARGS, message=str(exc))

    def _handle_plugins(self, request: Request) -> Dict[str, Any]:
        plugins = [
            {"index": index, **_dump(descriptor)}
            for index, descriptor in enumerate(self.session.registry.descriptors())
        ]
        return self._response(ok=True, code=OK, message="Plugins listed", data={"plugins": plugins})

    def _handle_plugin(self, request: Request) -> Dict[str, Any]:
        try:
            args = _validate(SelectPluginArgs, request.args)
        except ValidationError as exc:
            return self._invalid_args(exc)
        try:
            self.session.select_plugin(args.i)
        except PluginIndexError as exc:
            return self._response(ok=False, code=PLUGIN_NOT_FOUND, message=str(exc))
        return self._response(ok=True, code=OK, message="Game started", data=self._view_data())

    def _handle_play(self, request: Request) -> Dict[str, Any]:
        try:
            args = _validate(PlayMoveArgs, request.args)
        except ValidationError as exc:
            return self._invalid_args(exc)

        before = state_hash(self._view_data())
        accepted = self.session.play_move(args.x, args.y)
        data = self._view_data()
        logger.debug(
            "play (%d, %d) accepted=%s pre_hash=%s post_hash=%s",
            args.x,
            args.y,
            accepted,
            before,
            state_hash(data),
        )
        if accepted:
            message = "Move played"
        elif not self.session.has_game:
            message = "No game in progress"
        elif self.session.terminal:
            message = "Game is already over"
        else:
            message = "Move ignored"
        return self._response(ok=True, code=OK, message=message, data=data, accepted=accepted)

    def _handle_view(self, request: Request) -> Dict[str, Any]:
        return self._response(ok=True, code=OK, message="View retrieved", data=self._view_data())

    def _handle_close(self, request: Request) -> Dict[str, Any]:
        self.session.close()
        return self._response(ok=True, code=OK, message="Session closed", data=self._view_data())

    def _handle_ping(self, request: Request) -> Dict[str, Any]:
        return self._response(
            ok=True,
            code=OK,
            message="pong",
            data={"protocol_version": PROTOCOL_VERSION},
        )

    def _handle_schema(self, request: Request) -> Dict[str, Any]:
        return self._response(
            ok=True,
            code=OK,
            message="Schema information",
            data={
                "protocol_version": PROTOCOL_VERSION,
                "request_fields": ["command", "args"],
                "response_fields": ["ok", "code", "message", "data", "accepted", "game_over"],
                "standard_commands": STANDARD_COMMANDS,
            },
        )

    def dispatch(self, raw_request: Dict[str, Any]) -> Dict[str, Any]:
        try:
            request = _validate(Request, raw_request)
        except ValidationError as exc:
            return self._invalid_args(exc)

        handlers = {
            "ping": self._handle_ping,
            "schema": self._handle_schema,
            "plugins": self._handle_plugins,
            "plugin": self._handle_plugin,
            "play": self._handle_play,
            "start": self._handle_view,
            "view": self._handle_view,
            "close": self._handle_close,
        }
        handler = handlers.get(request.command)
        if handler is None:
            return self._response(
                ok=False,
                code=UNKNOWN_COMMAND,
                message=f"Unknown command '{request.command}'",
            )
        return handler(request)
