"""Cancelable per-match turn timer.

Every restart bumps a generation counter. A firing timer hands its
generation to the expiry callback, which must check is_current() once it
holds the match lock: a move that restarted the timer in the meantime makes
the queued expiry stale.
"""

import asyncio
import logging
from typing import Awaitable, Callable, Optional

from .constants import TURN_TIMER_SECONDS

logger = logging.getLogger(__name__)


class TurnTimer:
    """
    One-shot timer rescheduled after every turn change.

    Args:
        on_expire: Coroutine function called with the firing generation.
        seconds: Delay before expiry.
    """

    def __init__(
        self,
        on_expire: Callable[[int], Awaitable[None]],
        seconds: float = TURN_TIMER_SECONDS,
    ):
        self.on_expire = on_expire
        self.seconds = seconds
        self._generation = 0
        self._handle: Optional[asyncio.TimerHandle] = None
        self._task: Optional[asyncio.Task] = None

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def active(self) -> bool:
        return self._handle is not None

    def is_current(self, generation: int) -> bool:
        return generation == self._generation

    def restart(self) -> int:
        """Cancel any pending expiry and schedule a new one. Must run inside the event loop."""
        self._cancel_handle()
        self._generation += 1
        loop = asyncio.get_running_loop()
        self._handle = loop.call_later(self.seconds, self._fire, self._generation)
        return self._generation

    def cancel(self) -> None:
        """Stop the timer; any expiry already queued becomes stale."""
        self._cancel_handle()
        self._generation += 1

    def _cancel_handle(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

    def _fire(self, generation: int) -> None:
        if not self.is_current(generation):
            return
        self._handle = None
        logger.debug("Turn timer expired (generation %d)", generation)
        self._task = asyncio.get_running_loop().create_task(self.on_expire(generation))
        self._task.add_done_callback(self._log_failure)

    def _log_failure(self, task: asyncio.Task) -> None:
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            logger.error("Turn timer expiry handler failed", exc_info=exc)
