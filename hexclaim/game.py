from __future__ import annotations

from dataclasses import dataclass

from hexclaim.config import GameConfig
from hexclaim.core.board import Board, Player, build_hex_board


@dataclass(slots=True)
class Game:
    players: list[Player]
    board: Board
    current_player: Player
    input_locked: bool = True
    # Number of round starts so far.
    round: int = 0

    def next_player(self) -> Player:
        return self.players[(self.current_player.id + 1) % len(self.players)]

    def player(self, player_id: int) -> Player:
        return self.players[player_id]


def create_game(config: GameConfig) -> Game:
    """Build the board and roster for a new game.

    `current_player` starts as the last player so that the opening round start
    hands the turn to player 0.
    """

    board = build_hex_board(columns=config.columns, rows=config.rows, block_capacity=config.block_capacity)
    players = [Player(id=p.id, color=p.color) for p in config.players]
    return Game(players=players, board=board, current_player=players[-1])
