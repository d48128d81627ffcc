from __future__ import annotations

import pytest

from hexclaim.core.board import Board, build_hex_board
from hexclaim.core.takeover import CascadeLimitExceeded, TakeoverEngine, majority_owner


def _own(board: Board, player_id: int, *coords: tuple[int, int]) -> None:
    for x, y in coords:
        board.field_at(x, y).owner = player_id


def test_four_of_six_flips_unowned_centre(board3: Board) -> None:
    _own(board3, 0, (1, 0), (0, 1), (2, 1), (0, 2))
    engine = TakeoverEngine(board3)

    flips = engine.evaluate(board3.field_at(1, 1).index)

    assert board3.field_at(1, 1).owner == 0
    assert flips[0].coordinates == (1, 1)
    assert flips[0].previous_owner is None
    assert flips[0].depth == 0


def test_cascade_is_depth_first_in_neighbour_order(board3: Board) -> None:
    _own(board3, 0, (1, 0), (0, 1), (2, 1), (0, 2))
    engine = TakeoverEngine(board3)

    flips = engine.evaluate(board3.field_at(1, 1).index)

    assert [(f.coordinates, f.depth) for f in flips] == [
        ((1, 1), 0),
        ((1, 2), 1),
        ((2, 2), 2),
        ((2, 1), 3),
        ((2, 0), 4),
    ]
    # (0,0) is dominated by player 0 but none of its neighbours flipped, so it was never visited.
    assert board3.field_at(0, 0).owner is None
    assert board3.tally() == {0: 8}


def test_strict_majority_threshold(board3: Board) -> None:
    _own(board3, 0, (1, 0), (0, 1), (2, 1))
    engine = TakeoverEngine(board3)

    assert engine.evaluate(board3.field_at(1, 1).index) == []
    assert board3.field_at(1, 1).owner is None


def test_majority_ignores_unowned_and_other_players(board3: Board) -> None:
    _own(board3, 0, (1, 0), (0, 1))
    _own(board3, 1, (2, 1), (0, 2))
    assert majority_owner(board3, board3.field_at(1, 1)) is None

    _own(board3, 1, (1, 2), (2, 2))
    assert majority_owner(board3, board3.field_at(1, 1)) == 1


def test_protected_field_never_flips(board3: Board) -> None:
    _own(board3, 1, (1, 0), (0, 1), (2, 1), (0, 2), (1, 2), (2, 2))
    centre = board3.field_at(1, 1)
    centre.owner = 0
    centre.protect()

    assert TakeoverEngine(board3).evaluate(centre.index) == []
    assert centre.owner == 0


def test_takes_field_from_other_player(board3: Board) -> None:
    _own(board3, 1, (1, 0), (0, 1), (2, 1), (0, 2), (1, 2))
    centre = board3.field_at(1, 1)
    centre.owner = 0

    flips = TakeoverEngine(board3).evaluate(centre.index)

    assert centre.owner == 1
    assert flips[0].previous_owner == 0


def test_second_evaluate_is_a_no_op(board3: Board) -> None:
    _own(board3, 0, (1, 0), (0, 1), (2, 1), (0, 2))
    engine = TakeoverEngine(board3)
    index = board3.field_at(1, 1).index

    assert engine.evaluate(index)
    before = [f.owner for f in board3.fields]
    assert engine.evaluate(index) == []
    assert [f.owner for f in board3.fields] == before


def test_field_without_neighbours_never_flips() -> None:
    board = build_hex_board(columns=1, rows=1, block_capacity=1)
    assert TakeoverEngine(board).evaluate(0) == []
    assert board[0].owner is None


def test_claim_protects_and_cascades_over_neighbours_only(board3: Board) -> None:
    _own(board3, 0, (1, 0), (0, 1), (2, 1))
    engine = TakeoverEngine(board3)

    flips = list(engine.claim(board3.field_at(0, 2).index, 0))

    claimed = board3.field_at(0, 2)
    assert claimed.owner == 0
    assert claimed.protection == 2
    assert [f.coordinates for f in flips] == [(1, 1), (1, 2), (2, 2)]


def test_claim_with_isolated_neighbours_flips_nothing(board3: Board) -> None:
    engine = TakeoverEngine(board3)

    assert list(engine.claim(board3.field_at(1, 1).index, 0)) == []
    assert board3.field_at(1, 1).protection == 2
    assert board3.tally() == {0: 1}


def test_cascade_limit(board3: Board) -> None:
    _own(board3, 0, (1, 0), (0, 1), (2, 1), (0, 2))
    engine = TakeoverEngine(board3, max_cascade_flips=2)

    with pytest.raises(CascadeLimitExceeded):
        engine.evaluate(board3.field_at(1, 1).index)


def test_cascade_is_lazy(board3: Board) -> None:
    _own(board3, 0, (1, 0), (0, 1), (2, 1), (0, 2))
    engine = TakeoverEngine(board3)

    flips = engine.cascade(board3.field_at(1, 1).index)
    assert board3.field_at(1, 1).owner is None

    first = next(flips)
    assert first.coordinates == (1, 1)
    assert board3.field_at(1, 1).owner == 0
    assert board3.field_at(1, 2).owner is None


def test_default_flip_budget_is_edge_count(board3: Board) -> None:
    assert board3.edge_count() == 16
    assert TakeoverEngine(board3).max_cascade_flips == 16
    assert TakeoverEngine(build_hex_board(columns=1, rows=1, block_capacity=1)).max_cascade_flips == 1
