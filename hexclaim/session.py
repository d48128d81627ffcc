from __future__ import annotations

from dataclasses import dataclass

from hexclaim.config import GameConfig
from hexclaim.game import create_game
from hexclaim.game_loop import RoundController
from hexclaim.presenters import EventLog, FanoutPresenter
from hexclaim.websocket_hub import hub


class SessionBusy(ValueError):
    """The running game is mid-resolution and cannot be replaced yet."""


@dataclass(slots=True)
class GameSession:
    config: GameConfig
    controller: RoundController
    history: EventLog


_SESSION: GameSession | None = None
_CONFIG: GameConfig | None = None


async def new_session(config: GameConfig) -> GameSession:
    """Create and start a game, replacing the current one.

    Refused while the current game resolves a click, so its cascade cannot
    publish onto the board after the new game has started.
    """

    global _SESSION
    if _SESSION is not None and _SESSION.controller.game.input_locked:
        raise SessionBusy("Current game is still resolving a move")

    history = EventLog(maxlen=200)
    presenter = FanoutPresenter([history, hub])
    controller = RoundController(
        game=create_game(config),
        presenter=presenter,
        step_delay=config.step_delay,
        max_cascade_flips=config.max_cascade_flips,
    )
    await controller.start()
    _SESSION = GameSession(config=config, controller=controller, history=history)
    return _SESSION


async def init_session(*, config: GameConfig) -> GameSession:
    """Start the first game once; later calls return the running session."""

    global _CONFIG
    _CONFIG = config
    if _SESSION is None:
        return await new_session(config)
    return _SESSION


def get_config() -> GameConfig:
    if _CONFIG is None:
        raise RuntimeError("Session not initialized. Call init_session() at startup.")
    return _CONFIG


def get_session() -> GameSession:
    if _SESSION is None:
        raise RuntimeError("Session not initialized. Call init_session() at startup.")
    return _SESSION


def reset_session_for_tests() -> None:
    global _SESSION, _CONFIG
    _SESSION = None
    _CONFIG = None
