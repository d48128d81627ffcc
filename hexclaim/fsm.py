from __future__ import annotations

from statemachine import State, StateMachine

from hexclaim.game import Game


class RoundFSM(StateMachine):
    """FSM wrapper around Game.

    - resolving: cascades and protection decay in progress, input locked.
    - awaiting_input: the current player may click an eligible field.

    A game starts in `resolving`; the opening `start_round` hands the turn to the first player.
    """

    resolving = State("resolving", value="resolving", initial=True)
    awaiting_input = State("awaiting_input", value="awaiting_input")

    click = awaiting_input.to(resolving)
    start_round = resolving.to(awaiting_input)

    def __init__(self, game: Game):
        self.game = game
        super().__init__()

    @property
    def accepts_input(self) -> bool:
        return self.current_state == self.awaiting_input

    def on_enter_resolving(self) -> None:
        self.game.input_locked = True

    def on_enter_awaiting_input(self) -> None:
        self.game.input_locked = False
