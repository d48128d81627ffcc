from __future__ import annotations

from hexclaim.session import GameSession, get_session


def get_game_session() -> GameSession:
    return get_session()
