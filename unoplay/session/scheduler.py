"""
Scheduler - Delayed continuations behind a single in-flight token.

Turn advancement after a draw or a play is paced for presentation:
"apply E after D seconds". Nothing blocks; the owner pumps the queue
with run_due() (respecting the clock) or run_pending() (ignoring it).

At most one continuation is in flight. While it is, new requests to
schedule are rejected, which is what keeps overlapping draws and
turn switches from mutating the game twice.

Every continuation carries the game generation it was scheduled for.
A new game bumps the generation and drops whatever was pending.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Callable
import logging
import time

logger = logging.getLogger(__name__)


class OperationKind(str, Enum):
    """What an in-flight continuation will do."""
    DRAW_SETTLE = "draw_settle"  # an unplayable draw is about to end the turn
    TURN_SWITCH = "turn_switch"  # control is about to move to the other side


@dataclass
class Continuation:
    """A scheduled effect."""
    kind: OperationKind
    generation: int
    due_at: float
    callback: Callable[[], None]


class Scheduler:
    """
    Single-slot continuation queue keyed by game generation.

    Usage:
        scheduler = Scheduler()
        scheduler.schedule(OperationKind.TURN_SWITCH, 1.5, loop._opponent_turn)
        ...
        scheduler.run_due()
    """

    def __init__(self, clock: Callable[[], float] | None = None):
        self.clock = clock or time.monotonic
        self.generation = 0
        self._pending: Continuation | None = None
        # Due time of the continuation being run by run_due, if any
        self._running_due_at: float | None = None

    @property
    def in_flight(self) -> OperationKind | None:
        """Kind of the pending continuation, if any."""
        return self._pending.kind if self._pending else None

    @property
    def is_busy(self) -> bool:
        return self._pending is not None

    @property
    def due_at(self) -> float | None:
        return self._pending.due_at if self._pending else None

    def schedule(self, kind: OperationKind, delay: float, callback: Callable[[], None]) -> bool:
        """
        Schedule callback to run delay seconds from now.

        Scheduled from inside a continuation pumped by run_due, the
        delay counts from when that continuation was due, so a late
        poll catches up on the whole chain.

        Returns False (and schedules nothing) if an operation is
        already in flight.
        """
        if self._pending is not None:
            logger.debug("Rejected %s: %s already in flight", kind.value, self._pending.kind.value)
            return False

        self._pending = Continuation(
            kind=kind,
            generation=self.generation,
            due_at=(self._running_due_at if self._running_due_at is not None else self.clock()) + delay,
            callback=callback,
        )
        return True

    def reset(self, generation: int):
        """Drop the pending continuation and start accepting a new generation."""
        if self._pending is not None:
            logger.debug(
                "Discarding %s from generation %d", self._pending.kind.value, self._pending.generation
            )
        self._pending = None
        self.generation = generation

    def run_due(self) -> int:
        """
        Run continuations whose due time has passed.

        A continuation may schedule the next one; that one runs too if
        it is already due. Returns the number run.
        """
        ran = 0
        while self._pending is not None and self._pending.due_at <= self.clock():
            self._running_due_at = self._pending.due_at
            try:
                ran += self._run_next()
            finally:
                self._running_due_at = None
        return ran

    def run_pending(self) -> int:
        """Run every continuation in order, regardless of the clock."""
        ran = 0
        while self._pending is not None:
            ran += self._run_next()
        return ran

    def _run_next(self) -> int:
        continuation = self._pending
        self._pending = None

        if continuation.generation != self.generation:
            logger.debug(
                "Dropped stale %s from generation %d", continuation.kind.value, continuation.generation
            )
            return 0

        continuation.callback()
        return 1
