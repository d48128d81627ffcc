from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass

from hexclaim.core.board import Field
from hexclaim.fsm import RoundFSM
from hexclaim.game import Game


class ClickRejected(ValueError):
    """Raised by validators; the controller turns it into a silent no-op."""


@dataclass(frozen=True, slots=True)
class ClickContext:
    """Inputs available to validators.

    Keep this small so it can be logged as-is.
    """

    round: int
    player_id: int
    coordinates: tuple[int, int]


class ClickValidator(ABC):
    """A small, composable validation unit for an incoming click."""

    @abstractmethod
    def validate(self, *, ctx: ClickContext, game: Game, fsm: RoundFSM, field: Field) -> None:
        raise NotImplementedError


@dataclass(frozen=True, slots=True)
class InputLockValidator(ClickValidator):
    def validate(self, *, ctx: ClickContext, game: Game, fsm: RoundFSM, field: Field) -> None:
        if game.input_locked or not fsm.accepts_input:
            raise ClickRejected("Input is locked while the board resolves")


@dataclass(frozen=True, slots=True)
class EligibilityValidator(ClickValidator):
    """Protected fields cannot be claimed."""

    def validate(self, *, ctx: ClickContext, game: Game, fsm: RoundFSM, field: Field) -> None:
        if not field.is_takeover_allowed:
            raise ClickRejected(f"Field {ctx.coordinates} is protected for {field.protection} more round(s)")


def default_click_validators() -> list[ClickValidator]:
    return [InputLockValidator(), EligibilityValidator()]


def validate_click(
    *,
    game: Game,
    fsm: RoundFSM,
    field: Field,
    validators: list[ClickValidator] | None = None,
) -> ClickContext:
    ctx = ClickContext(round=game.round, player_id=game.current_player.id, coordinates=field.coordinates)
    for v in validators or default_click_validators():
        v.validate(ctx=ctx, game=game, fsm=fsm, field=field)
    return ctx
