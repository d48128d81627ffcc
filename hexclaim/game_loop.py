from __future__ import annotations

import asyncio
import logging
from typing import Iterator

from hexclaim.core.board import Field
from hexclaim.core.events import BoardEvent, EventType
from hexclaim.core.takeover import CascadeLimitExceeded, Flip, TakeoverEngine
from hexclaim.fsm import RoundFSM
from hexclaim.game import Game
from hexclaim.presenters import Presenter
from hexclaim.turn_processing.validators import ClickRejected, ClickValidator, validate_click

logger = logging.getLogger(__name__)


class RoundController:
    """Drives rounds: accepts clicks, runs paced cascades, decays protection.

    All board mutation happens here or in the TakeoverEngine. The presenter only
    receives events; it never touches the board.
    """

    def __init__(
        self,
        *,
        game: Game,
        presenter: Presenter,
        step_delay: float = 0.0,
        max_cascade_flips: int | None = None,
        validators: list[ClickValidator] | None = None,
    ) -> None:
        self.game = game
        self.presenter = presenter
        self.step_delay = step_delay
        self.validators = validators
        self.engine = TakeoverEngine(game.board, max_cascade_flips=max_cascade_flips)
        self.fsm = RoundFSM(game)

    async def start(self) -> None:
        """Opening round start; hands the turn to the first player."""

        await self.start_round()

    async def on_field_clicked(self, x: int, y: int) -> bool:
        """Only input entry point. Returns False (and changes nothing) if the click is rejected."""

        field = self.game.board.field_at(x, y)
        try:
            ctx = validate_click(game=self.game, fsm=self.fsm, field=field, validators=self.validators)
        except ClickRejected as e:
            logger.debug("Ignoring click on %s: %s", field.coordinates, e)
            return False

        player = self.game.current_player
        logger.info("Round %d: player %d claims %s", ctx.round, player.id, ctx.coordinates)

        await self.end_round()
        try:
            flips = self.engine.claim(field.index, player.id)
            await self._publish_owner(field.coordinates, player.id)
            await self._publish_protection(field)
            await self._play(flips)
        finally:
            await self.start_round()
        return True

    async def end_round(self) -> None:
        self.fsm.click()
        await self._emit(
            "SELECTABLE_CHANGED",
            {"selectable": [], "unselectable": [list(f.coordinates) for f in self.game.board.fields]},
        )
        await self._emit("ACTIVE_PLAYER_CHANGED", {"player_id": None, "color": None})

    async def start_round(self) -> None:
        await self.decay_protection()

        game = self.game
        game.current_player = game.next_player()
        game.round += 1

        selectable = [list(f.coordinates) for f in game.board.fields if f.is_takeover_allowed]
        unselectable = [list(f.coordinates) for f in game.board.fields if not f.is_takeover_allowed]
        await self._emit("SELECTABLE_CHANGED", {"selectable": selectable, "unselectable": unselectable})
        await self._emit(
            "ACTIVE_PLAYER_CHANGED",
            {"player_id": game.current_player.id, "color": game.current_player.color},
        )

        self.fsm.start_round()
        logger.info("Round %d started; player %d to move", game.round, game.current_player.id)

    async def decay_protection(self) -> None:
        """Decrement every protected field once, re-evaluating each as it goes."""

        for field in self.game.board.fields:
            if field.protection <= 0:
                continue
            field.decay_protection()
            await self._publish_protection(field)
            await self._play(self.engine.cascade(field.index))

    async def _play(self, flips: Iterator[Flip]) -> None:
        """Publish a cascade flip by flip.

        A cascade that overruns the flip budget is cut short here so the round still
        finishes and input is unlocked; flips applied before the cut stay on the board.
        """

        try:
            for flip in flips:
                if self.step_delay > 0:
                    await asyncio.sleep(self.step_delay)
                await self._publish_owner(flip.coordinates, flip.owner)
        except CascadeLimitExceeded as e:
            logger.error("Round %d: cascade cut short: %s", self.game.round, e)

    async def _publish_owner(self, coordinates: tuple[int, int], player_id: int) -> None:
        player = self.game.player(player_id)
        await self._emit(
            "OWNER_CHANGED",
            {"coordinates": list(coordinates), "player_id": player.id, "color": player.color},
        )

    async def _publish_protection(self, field: Field) -> None:
        await self._emit(
            "PROTECTION_CHANGED",
            {
                "coordinates": list(field.coordinates),
                "protection": field.protection,
                "blocks": field.active_blocks,
            },
        )

    async def _emit(self, type: EventType, payload: dict[str, object]) -> None:
        await self.presenter.publish(BoardEvent.now(type=type, round=self.game.round, payload=payload))
