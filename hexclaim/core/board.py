from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from typing import Iterable

Coordinates = tuple[int, int]

# Odd-q layout: odd columns sit half a row lower than even columns.
_ODD_COLUMN_OFFSETS: tuple[Coordinates, ...] = ((0, -1), (-1, 0), (1, 0), (-1, 1), (0, 1), (1, 1))
_EVEN_COLUMN_OFFSETS: tuple[Coordinates, ...] = ((-1, -1), (0, -1), (1, -1), (-1, 0), (1, 0), (0, 1))


@dataclass(frozen=True, slots=True)
class Player:
    id: int
    color: str


@dataclass(slots=True)
class Field:
    """A single claimable cell.

    - `owner` is a player id (None when unclaimed).
    - `protection` > 0 means the field was claimed directly and cannot be taken over yet.
    """

    index: int
    coordinates: Coordinates
    block_capacity: int
    neighbours: tuple[int, ...] = ()
    owner: int | None = None
    protection: int = 0

    @property
    def is_takeover_allowed(self) -> bool:
        return self.protection == 0

    @property
    def active_blocks(self) -> list[bool]:
        """Protection indicator slots; the first `protection` slots are active."""

        return [slot < self.protection for slot in range(self.block_capacity)]

    def set_owner(self, player_id: int) -> None:
        if self.protection > 0:
            raise ValueError(f"Field {self.coordinates} is protected")
        self.owner = player_id

    def protect(self) -> None:
        self.protection = self.block_capacity + 1

    def decay_protection(self) -> None:
        if self.protection > 0:
            self.protection -= 1


@dataclass(slots=True)
class Board:
    """Flat arena of fields. Neighbours are indices into `fields`."""

    columns: int
    rows: int
    block_capacity: int
    fields: list[Field] = field(default_factory=list)
    _by_coordinates: dict[Coordinates, int] = field(default_factory=dict, repr=False)

    def __post_init__(self) -> None:
        self._by_coordinates = {f.coordinates: f.index for f in self.fields}
        validate_adjacency(self.fields)

    def __len__(self) -> int:
        return len(self.fields)

    def __getitem__(self, index: int) -> Field:
        return self.fields[index]

    def find(self, x: int, y: int) -> Field | None:
        idx = self._by_coordinates.get((x, y))
        return None if idx is None else self.fields[idx]

    def field_at(self, x: int, y: int) -> Field:
        found = self.find(x, y)
        if found is None:
            raise ValueError(f"No field at ({x}, {y})")
        return found

    def selectable(self) -> list[Field]:
        return [f for f in self.fields if f.is_takeover_allowed]

    def protected(self) -> list[Field]:
        return [f for f in self.fields if f.protection > 0]

    def edge_count(self) -> int:
        return sum(len(f.neighbours) for f in self.fields) // 2

    def tally(self) -> dict[int, int]:
        """Number of owned fields per player id."""

        return dict(Counter(f.owner for f in self.fields if f.owner is not None))


def validate_adjacency(fields: Iterable[Field]) -> None:
    """Raise ValueError unless every neighbour relation is mutual."""

    by_index = {f.index: f for f in fields}
    for f in by_index.values():
        for n in f.neighbours:
            other = by_index.get(n)
            if other is None:
                raise ValueError(f"Field {f.coordinates} lists unknown neighbour index {n}")
            if f.index not in other.neighbours:
                raise ValueError(f"Asymmetric adjacency between {f.coordinates} and {other.coordinates}")


def neighbour_offsets(x: int) -> tuple[Coordinates, ...]:
    return _ODD_COLUMN_OFFSETS if x % 2 else _EVEN_COLUMN_OFFSETS


def build_hex_board(*, columns: int, rows: int, block_capacity: int) -> Board:
    """Build a `columns x rows` odd-q hex grid.

    Fields are laid out column-major, so index == x * rows + y.
    """

    if columns < 1:
        raise ValueError("Grid needs at least 1 column.")
    if rows < 1:
        raise ValueError("Grid needs at least 1 row.")
    if block_capacity < 0:
        raise ValueError("block_capacity must be >= 0")

    fields: list[Field] = []
    for x in range(columns):
        for y in range(rows):
            fields.append(Field(index=len(fields), coordinates=(x, y), block_capacity=block_capacity))

    def index_of(x: int, y: int) -> int | None:
        if 0 <= x < columns and 0 <= y < rows:
            return x * rows + y
        return None

    for f in fields:
        x, y = f.coordinates
        found = (index_of(x + dx, y + dy) for dx, dy in neighbour_offsets(x))
        f.neighbours = tuple(i for i in found if i is not None)

    return Board(columns=columns, rows=rows, block_capacity=block_capacity, fields=fields)
