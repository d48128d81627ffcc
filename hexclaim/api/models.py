from __future__ import annotations

from pydantic import BaseModel, Field

from hexclaim.game import Game


class GameCreateRequest(BaseModel):
    columns: int | None = Field(None, ge=1, le=64)
    rows: int | None = Field(None, ge=1, le=64)
    block_capacity: int | None = Field(None, ge=0, le=32)


class PlayerView(BaseModel):
    id: int
    color: str


class FieldView(BaseModel):
    x: int
    y: int
    owner: int | None = None
    protection: int = 0
    blocks: list[bool] = Field(default_factory=list)
    selectable: bool = False
    neighbours: list[tuple[int, int]] = Field(default_factory=list)


class BoardSnapshot(BaseModel):
    columns: int
    rows: int
    block_capacity: int
    round: int
    input_locked: bool
    current_player: PlayerView
    players: list[PlayerView]
    fields: list[FieldView]
    # Owned field count per player id.
    tally: dict[int, int] = Field(default_factory=dict)

    @classmethod
    def from_game(cls, game: Game) -> "BoardSnapshot":
        board = game.board
        counts = board.tally()
        return cls(
            columns=board.columns,
            rows=board.rows,
            block_capacity=board.block_capacity,
            round=game.round,
            input_locked=game.input_locked,
            current_player=PlayerView(id=game.current_player.id, color=game.current_player.color),
            players=[PlayerView(id=p.id, color=p.color) for p in game.players],
            fields=[
                FieldView(
                    x=f.coordinates[0],
                    y=f.coordinates[1],
                    owner=f.owner,
                    protection=f.protection,
                    blocks=f.active_blocks,
                    # Nothing is selectable while the board resolves.
                    selectable=f.is_takeover_allowed and not game.input_locked,
                    neighbours=[board[n].coordinates for n in f.neighbours],
                )
                for f in board.fields
            ],
            tally={p.id: counts.get(p.id, 0) for p in game.players},
        )


class ClickResponse(BaseModel):
    accepted: bool
    board: BoardSnapshot
