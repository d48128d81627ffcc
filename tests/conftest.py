from __future__ import annotations

import pytest

from hexclaim.config import GameConfig
from hexclaim.core.board import Board, build_hex_board
from hexclaim.game import create_game
from hexclaim.game_loop import RoundController
from hexclaim.presenters import EventLog


@pytest.fixture()
def board3() -> Board:
    """3x3 odd-q board, block capacity 1. Centre (1,1) has all 6 neighbours."""

    return build_hex_board(columns=3, rows=3, block_capacity=1)


def _make_controller(
    *,
    columns: int = 3,
    rows: int = 3,
    block_capacity: int = 1,
    presenter: EventLog | None = None,
    step_delay: float = 0.0,
    max_cascade_flips: int | None = None,
) -> RoundController:
    config = GameConfig(columns=columns, rows=rows, block_capacity=block_capacity, step_delay=step_delay)
    return RoundController(
        game=create_game(config),
        presenter=presenter if presenter is not None else EventLog(),
        step_delay=config.step_delay,
        max_cascade_flips=max_cascade_flips,
    )


@pytest.fixture()
def make_controller():
    """Factory for controllers over a fresh game; pacing disabled unless asked for."""

    return _make_controller


@pytest.fixture()
def client(monkeypatch: pytest.MonkeyPatch):
    """FastAPI TestClient over a fresh 3x3 game with pacing disabled."""

    from fastapi.testclient import TestClient

    from hexclaim.main import app
    from hexclaim.session import reset_session_for_tests

    monkeypatch.setenv("HEXCLAIM_COLUMNS", "3")
    monkeypatch.setenv("HEXCLAIM_ROWS", "3")
    monkeypatch.setenv("HEXCLAIM_BLOCK_CAPACITY", "1")
    monkeypatch.setenv("HEXCLAIM_STEP_DELAY", "0")

    reset_session_for_tests()
    with TestClient(app) as c:
        yield c
    reset_session_for_tests()
