from __future__ import annotations

from enum import Enum

from statemachine import State, StateMachine


class SessionState(str, Enum):
    EMPTY = "empty"
    STARTING = "starting"
    AWAITING_MOVE = "awaiting_move"
    MOVE_IN_PROGRESS = "move_in_progress"
    TURN_RESOLVED = "turn_resolved"
    GAME_OVER = "game_over"


class TurnMachine(StateMachine):
    """Legal session transitions.

    The session decides which event to send from the plugin's answers; the
    machine only guards ordering. `starting` and `turn_resolved` are transient
    and never observed outside a session operation.
    """

    empty = State(SessionState.EMPTY.value, value=SessionState.EMPTY.value, initial=True)
    starting = State(SessionState.STARTING.value, value=SessionState.STARTING.value)
    awaiting_move = State(SessionState.AWAITING_MOVE.value, value=SessionState.AWAITING_MOVE.value)
    move_in_progress = State(
        SessionState.MOVE_IN_PROGRESS.value,
        value=SessionState.MOVE_IN_PROGRESS.value,
    )
    turn_resolved = State(SessionState.TURN_RESOLVED.value, value=SessionState.TURN_RESOLVED.value)
    game_over = State(SessionState.GAME_OVER.value, value=SessionState.GAME_OVER.value)

    begin_game = empty.to(starting)
    game_ready = starting.to(awaiting_move)
    coordinate_played = awaiting_move.to(move_in_progress) | move_in_progress.to(move_in_progress)
    resolve_turn = awaiting_move.to(turn_resolved) | move_in_progress.to(turn_resolved)
    next_turn = turn_resolved.to(awaiting_move)
    finish = turn_resolved.to(game_over)
    close = awaiting_move.to(empty) | move_in_progress.to(empty) | game_over.to(empty)

    @property
    def phase(self) -> SessionState:
        return SessionState(str(self.current_state.value))
