"""
Game Loop - The engine facade the presentation layer talks to.

The loop:
1. Player plays, draws or names a color
2. The reducer validates and applies it
3. If control passes, a continuation is scheduled (opponent "thinking")
4. The continuation runs the opponent's turns in a bounded loop
5. Control returns to the player
6. Repeat

Every public call returns a fresh snapshot. Rule violations come back
as data alongside the unchanged snapshot.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from collections import deque
from enum import Enum
from typing import Callable
import logging
import random
import uuid

from ..bots import BotPolicy, UnoBot, get_personality
from ..config import EngineConfig
from ..engine_core.action import Action, ActionResult, ActionType, RuleViolation, ViolationCode
from ..engine_core.action_generator import legal_actions
from ..engine_core.cards import Color
from ..engine_core.deck import setup_game
from ..engine_core.reducer import Reducer
from ..engine_core.snapshot import GameStateSnapshot, build_snapshot
from ..engine_core.state import GameState, GameStatus, Side
from .scheduler import OperationKind, Scheduler

logger = logging.getLogger(__name__)

# Recent engine events kept for clients that want a running log
EVENT_LOG_SIZE = 50


class LoopState(Enum):
    """State of the game loop, from the player's point of view."""
    NO_GAME = "no_game"
    WAITING_PLAYER = "waiting_player"
    WAITING_COLOR = "waiting_color"
    SETTLING_DRAW = "settling_draw"
    OPPONENT_TURN = "opponent_turn"
    GAME_OVER = "game_over"


@dataclass
class TurnResult:
    """
    Result of a player request.

    Contains the snapshot to render and, when the request was rejected,
    the reason.
    """
    success: bool
    snapshot: GameStateSnapshot
    violation: RuleViolation | None = None

    # What happened, in order
    events: list[str] = field(default_factory=list)


class GameLoop:
    """
    The main game driver.

    Usage:
        loop = GameLoop(EngineConfig(seed=7))
        snapshot = loop.new_game()

        result = loop.play(snapshot.legal_card_ids[0])
        if result.violation:
            show(result.violation.reason)

        # later, from the UI's timer
        loop.run_due()
        render(loop.snapshot())
    """

    def __init__(
        self,
        config: EngineConfig | None = None,
        bot: BotPolicy | None = None,
        rng: random.Random | None = None,
        clock: Callable[[], float] | None = None,
    ):
        self.config = config or EngineConfig()
        self.rng = rng or random.Random(self.config.seed)
        self.reducer = Reducer(rng=self.rng)
        self.bot = bot or UnoBot(personality=get_personality(self.config.personality), rng=self.rng)
        self.scheduler = Scheduler(clock)

        self.state: GameState | None = None
        self.generation = 0
        self.events: deque[str] = deque(maxlen=EVENT_LOG_SIZE)
        self.last_opponent_actions: list[Action] = []

    # =========================================================================
    # Player-facing operations
    # =========================================================================

    def new_game(self) -> GameStateSnapshot:
        """
        Start a fresh game.

        Anything still scheduled for the previous game is discarded.
        """
        self.generation += 1
        self.scheduler.reset(self.generation)
        self.state = setup_game(
            self.rng,
            game_id=uuid.uuid4().hex[:12],
            generation=self.generation,
            history_capacity=self.config.history_capacity,
            random_seed=self.config.seed,
        )
        self.events.clear()
        self.last_opponent_actions = []
        self._log_events([self.state.message])
        logger.info("New game %s (generation %d)", self.state.game_id, self.generation)
        return self.snapshot()

    def play(self, card_id: str) -> TurnResult:
        """Play a card from the player's hand."""
        state = self._require_state()
        if self.scheduler.is_busy and state.whose_turn == Side.PLAYER:
            return self._reject(ViolationCode.OPERATION_PENDING, "Wait for the current action to finish")

        result = self._apply(Action.play(Side.PLAYER, card_id))
        if not result.success:
            return self._reject(result.error_code, result.error)

        if result.turn_over:
            self._hand_over()
        return self._accept(result)

    def draw(self) -> TurnResult:
        """
        Draw a card for the player.

        A draw requested while another operation is in flight is a no-op.
        """
        state = self._require_state()
        if self.scheduler.is_busy and state.whose_turn == Side.PLAYER:
            return self._reject(ViolationCode.OPERATION_PENDING, "A draw is already in progress")

        result = self._apply(Action.draw(Side.PLAYER))
        if not result.success:
            return self._reject(result.error_code, result.error)

        if result.turn_over:
            self.scheduler.schedule(
                OperationKind.DRAW_SETTLE, self.config.draw_settle_delay, self._settle_player_draw
            )
        return self._accept(result)

    def select_color(self, color: Color | str) -> TurnResult:
        """Name the color for the wild card the player just played."""
        self._require_state()
        try:
            color = Color(color)
        except ValueError:
            return self._reject(ViolationCode.INVALID_COLOR, f"Unknown color {color!r}")

        result = self._apply(Action.select_color(Side.PLAYER, color))
        if not result.success:
            return self._reject(result.error_code, result.error)

        self._hand_over()
        return self._accept(result)

    def snapshot(self) -> GameStateSnapshot:
        """Current snapshot. Pure: calling it twice gives equal results."""
        state = self._require_state()
        in_flight = self.scheduler.in_flight
        return build_snapshot(state, in_flight.value if in_flight else None)

    @property
    def loop_state(self) -> LoopState:
        if self.state is None:
            return LoopState.NO_GAME
        if self.state.is_over:
            return LoopState.GAME_OVER
        if self.state.status == GameStatus.AWAITING_COLOR_CHOICE:
            return LoopState.WAITING_COLOR
        if self.scheduler.in_flight == OperationKind.DRAW_SETTLE and self.state.whose_turn == Side.PLAYER:
            return LoopState.SETTLING_DRAW
        if self.state.whose_turn == Side.OPPONENT:
            return LoopState.OPPONENT_TURN
        return LoopState.WAITING_PLAYER

    # =========================================================================
    # Continuations
    # =========================================================================

    def run_due(self) -> int:
        """Run continuations whose delay has elapsed."""
        return self.scheduler.run_due()

    def run_pending(self) -> int:
        """Run all pending continuations now, in order."""
        return self.scheduler.run_pending()

    def _hand_over(self):
        """Pass control to the opponent and schedule its turn."""
        result = self._apply(Action.end_turn())
        if result.success and self.state.whose_turn == Side.OPPONENT:
            self.scheduler.schedule(
                OperationKind.TURN_SWITCH, self.config.opponent_think_delay, self._run_opponent_turns
            )

    def _settle_player_draw(self):
        """The player's unplayable draw ends their turn."""
        if self.state.whose_turn == Side.PLAYER and self.state.status == GameStatus.PLAYING:
            self._hand_over()

    def _end_opponent_turn(self):
        """Give control back to the player; a new round starts."""
        if self.state.whose_turn == Side.OPPONENT and self.state.status == GameStatus.PLAYING:
            self._apply(Action.end_turn())

    def _run_opponent_turns(self) -> list[Action]:
        """
        Run the opponent until control returns to the player.

        Skip and reverse give the opponent another turn; the chain is
        capped at config.opponent_chain_limit turns. Returns the actions
        taken, also kept in last_opponent_actions.
        """
        limit = self.config.opponent_chain_limit
        taken: list[Action] = []
        self.last_opponent_actions = taken

        def act(action: Action) -> ActionResult:
            result = self._apply(action)
            if result.success:
                taken.append(action)
            return result

        for turn in range(1, limit + 1):
            if self.state.whose_turn != Side.OPPONENT or self.state.status != GameStatus.PLAYING:
                return taken

            decision = self.bot.select_action(self.state, legal_actions(self.state, Side.OPPONENT))
            logger.debug("Opponent turn %d: %s (%s)", turn, decision.action.describe(), decision.explanation)

            result = act(decision.action)
            if not result.success:
                logger.error("Opponent action %s rejected: %s", decision.action.describe(), result.error)
                break

            if decision.action.action_type == ActionType.DRAW:
                if result.turn_over:
                    # Nothing playable was drawn: the turn ends after a pause
                    self.scheduler.schedule(
                        OperationKind.DRAW_SETTLE, self.config.draw_settle_delay, self._end_opponent_turn
                    )
                    return taken
                # A playable draw is played at once, without a new roll
                result = act(Action.play(Side.OPPONENT, result.drawn_cards[0].card_id))

            if self.state.status == GameStatus.AWAITING_COLOR_CHOICE:
                result = act(Action.select_color(Side.OPPONENT, self.bot.select_color(self.state)))

            if self.state.is_over:
                return taken

            if not result.extra_turn:
                break
        else:
            logger.warning("Opponent chained %d turns, forcing the hand-over", limit)

        self._end_opponent_turn()
        return taken

    # =========================================================================
    # Helpers
    # =========================================================================

    def _apply(self, action: Action) -> ActionResult:
        result = self.reducer.apply(self._require_state(), action)
        if result.success:
            self.state = result.new_state
            self._log_events(result.state_changes)
            if self.state.is_over:
                logger.info("Game %s over, winner: %s", self.state.game_id, self.state.winner.value)
        return result

    def _require_state(self) -> GameState:
        if self.state is None:
            raise RuntimeError("No game in progress, call new_game() first")
        return self.state

    def _log_events(self, changes: list[str]):
        self.events.extend(changes)

    def _accept(self, result: ActionResult) -> TurnResult:
        return TurnResult(success=True, snapshot=self.snapshot(), events=list(result.state_changes))

    def _reject(self, code: ViolationCode, reason: str) -> TurnResult:
        return TurnResult(
            success=False,
            snapshot=self.snapshot(),
            violation=RuleViolation(code=code, reason=reason),
        )
