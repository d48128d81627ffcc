from __future__ import annotations

import logging
from collections import Counter
from dataclasses import dataclass
from typing import Iterable, Iterator

from hexclaim.core.board import Board, Coordinates, Field

logger = logging.getLogger(__name__)


class CascadeLimitExceeded(RuntimeError):
    """A single cascade pass flipped more fields than the engine allows."""


@dataclass(frozen=True, slots=True)
class Flip:
    index: int
    coordinates: Coordinates
    previous_owner: int | None
    owner: int
    # 0 for the field a cascade starts on, +1 per hop.
    depth: int


def majority_owner(board: Board, f: Field) -> int | None:
    """Return the player owning strictly more than half of `f`'s neighbours, if any.

    Unowned neighbours are not counted, but they still count towards the neighbour total.
    """

    counts = Counter(board[n].owner for n in f.neighbours if board[n].owner is not None)
    threshold = len(f.neighbours) // 2
    return next((player_id for player_id, count in counts.items() if count > threshold), None)


class TakeoverEngine:
    """Majority-rule takeover and cascade propagation.

    Synchronous and delay-free: cascades are generators of `Flip`s, each yielded
    after the flip has been applied. Callers that want pacing sleep between items.

    Visiting order is depth-first in stored neighbour order: a neighbour's cascade
    fully completes before the next neighbour is evaluated.
    """

    # Every flip strictly raises the number of edges joining two fields of the same owner,
    # so one cascade pass can never flip more than edge_count() times.
    def __init__(self, board: Board, *, max_cascade_flips: int | None = None) -> None:
        self.board = board
        self.max_cascade_flips = max_cascade_flips if max_cascade_flips is not None else max(board.edge_count(), 1)

    def should_flip(self, f: Field) -> int | None:
        """Return the player `f` would flip to, or None."""

        dominant = majority_owner(self.board, f)
        if dominant is None or not f.is_takeover_allowed or dominant == f.owner:
            return None
        return dominant

    def cascade(self, index: int) -> Iterator[Flip]:
        return self._run([index])

    def cascade_over(self, indices: Iterable[int]) -> Iterator[Flip]:
        """Evaluate each of `indices` in order as part of one cascade pass."""

        return self._run(indices)

    def evaluate(self, index: int) -> list[Flip]:
        return list(self.cascade(index))

    def claim(self, index: int, player_id: int) -> Iterator[Flip]:
        """Directly claim a field and cascade over its neighbours.

        The claimed field gets full protection and is itself exempt from evaluation.
        """

        f = self.board[index]
        f.set_owner(player_id)
        f.protect()
        logger.debug("Field %s claimed by player %s", f.coordinates, player_id)
        return self.cascade_over(f.neighbours)

    def _run(self, roots: Iterable[int]) -> Iterator[Flip]:
        flips = 0
        # Each frame is an iterator over the neighbours still to be evaluated at that depth.
        stack: list[Iterator[int]] = [iter(roots)]
        while stack:
            index = next(stack[-1], None)
            if index is None:
                stack.pop()
                continue

            f = self.board[index]
            dominant = self.should_flip(f)
            if dominant is None:
                continue

            flips += 1
            if flips > self.max_cascade_flips:
                logger.warning("Cascade exceeded %d flips at %s", self.max_cascade_flips, f.coordinates)
                raise CascadeLimitExceeded(f"Cascade exceeded {self.max_cascade_flips} flips")

            previous = f.owner
            f.set_owner(dominant)
            flip = Flip(index=index, coordinates=f.coordinates, previous_owner=previous, owner=dominant, depth=len(stack) - 1)
            logger.debug("Flip %s: %s -> %s (depth %d)", f.coordinates, previous, dominant, flip.depth)
            yield flip
            stack.append(iter(f.neighbours))
