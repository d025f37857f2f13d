"""
Match directory and per-match rooms.

A MatchRoom serializes everything that touches its Match (moves, passes,
deck selections, disconnects and timer expiries) through one asyncio.Lock
and delivers the resulting events to each participant's sender.
"""

import asyncio
import logging
import random
import time
from typing import Any, Awaitable, Callable, Dict, List, Optional, Tuple

from riftclash.core.commands import MoveCommand
from riftclash.core.constants import MATCH_IDLE_TIMEOUT_SECONDS, MatchRules
from riftclash.core.errors import ErrorCode, MatchError, SelectionFailure
from riftclash.core.match import Match, MatchState
from riftclash.core.turn_timer import TurnTimer
from riftclash.core.updates import MatchOver, MatchUpdate

from .deck_source import FetchedDeck, RiotDeckSource

logger = logging.getLogger(__name__)

Sender = Callable[[Dict[str, Any]], Awaitable[None]]


def event(name: str, data: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """Outbound message envelope."""
    return {"event": name, "data": data or {}}


class MatchRoom:
    """One match plus its lock, turn timer and connected senders."""

    def __init__(
        self,
        match: Match,
        deck_source: Optional[RiotDeckSource] = None,
        created_at: float = 0.0,
    ):
        self.match = match
        self.created_at = created_at
        self.deck_source = deck_source
        self.lock = asyncio.Lock()
        self.senders: Dict[str, Sender] = {}
        self.timer = TurnTimer(self._on_timer, match.rules.turn_timer_seconds)
        match.timer = self.timer

    @property
    def match_id(self) -> str:
        return self.match.id

    @property
    def is_empty(self) -> bool:
        return not self.senders

    # Delivery

    async def _send(self, participant_id: str, message: Dict[str, Any]) -> None:
        sender = self.senders.get(participant_id)
        if sender is not None:
            await sender(message)

    async def _broadcast(self, message: Dict[str, Any]) -> None:
        for participant_id in list(self.senders):
            await self._send(participant_id, message)

    async def _send_error(self, participant_id: str, error: MatchError) -> None:
        logger.info("Match %s: rejected %s from %s: %s",
                    self.match_id, type(error).__name__, participant_id, error.message)
        await self._send(participant_id, event("error", error.to_dict()))

    async def _send_over(self, over: MatchOver) -> None:
        await self._broadcast(event("over", over.to_dict()))

    # Operations

    async def join(self, sender: Sender) -> str:
        """
        Add a participant.

        Raises:
            MatchFull: If the match cannot take another participant.
        """
        async with self.lock:
            participant_id = self.match.add_participant()
            self.senders[participant_id] = sender
            await self._send(
                participant_id,
                event("join_ack", {"match_id": self.match_id, "participant_id": participant_id}),
            )
            if self.match.state == MatchState.NOT_STARTED:
                await self._broadcast(event("prep", {"match_id": self.match_id}))
        return participant_id

    async def select(
        self,
        participant_id: str,
        summoner_name: str,
        pairs: Optional[List[Tuple[int, int]]] = None,
        icon_id: Optional[int] = None,
    ) -> None:
        """Attach a deck, fetching it from the deck source when none is given."""
        display_name = summoner_name
        if pairs is None:
            try:
                fetched = await asyncio.to_thread(self._fetch_deck, summoner_name)
            except MatchError as exc:
                async with self.lock:
                    await self._send_error(participant_id, exc)
                return
            pairs, display_name, icon_id = fetched.pairs, fetched.display_name, fetched.icon_id

        async with self.lock:
            if self.match.is_over:
                logger.info("Match %s: dropping late deck for %s", self.match_id, participant_id)
                return
            try:
                inits = self.match.select_deck(participant_id, pairs, display_name, icon_id)
            except MatchError as exc:
                await self._send_error(participant_id, exc)
                return

            await self._send(participant_id, event("select_ack", {"display_name": display_name}))
            if inits:
                for pid, init in inits.items():
                    await self._send(pid, event("init", init.to_dict()))

    def _fetch_deck(self, summoner_name: str) -> FetchedDeck:
        if self.deck_source is None:
            raise SelectionFailure(ErrorCode.DECK_FETCH_FAILED, "Failed to load deck.")
        return self.deck_source.fetch_deck(summoner_name)

    async def move(self, participant_id: str, command: MoveCommand) -> None:
        async with self.lock:
            try:
                result = self.match.apply_move(participant_id, command)
            except MatchError as exc:
                await self._send_error(participant_id, exc)
                return

            opponent = self.match.opponent_of(participant_id)
            await self._send(participant_id, event("update", result.self_update.to_dict()))
            if opponent is not None:
                await self._send(opponent.id, event("update", result.opponent_update.to_dict()))
            if result.over is not None:
                await self._send_over(result.over)

    async def request_pass(self, participant_id: str) -> None:
        async with self.lock:
            try:
                update = self.match.request_pass(participant_id)
            except MatchError as exc:
                await self._send_error(participant_id, exc)
                return
            await self._broadcast_update(update)

    async def disconnect(self, participant_id: str) -> None:
        async with self.lock:
            self.senders.pop(participant_id, None)
            if self.match.is_over:
                return
            over = self.match.disconnect(participant_id)
            await self._send_over(over)

    async def _on_timer(self, generation: int) -> None:
        async with self.lock:
            if not self.timer.is_current(generation) or self.match.state != MatchState.STARTED:
                return
            update = self.match.force_advance()
            logger.info("Match %s: turn timer expired, now turn %d",
                        self.match_id, update.turn_number)
            await self._broadcast_update(update)

    async def _broadcast_update(self, update: MatchUpdate) -> None:
        await self._broadcast(event("update", update.to_dict()))

    def close(self) -> None:
        self.timer.cancel()


class MatchService:
    """In-memory directory of match rooms."""

    def __init__(
        self,
        rules: Optional[MatchRules] = None,
        deck_source: Optional[RiotDeckSource] = None,
        rng: Optional[random.Random] = None,
        idle_timeout: float = MATCH_IDLE_TIMEOUT_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.rules = rules or MatchRules()
        self.deck_source = deck_source
        self.rng = rng
        self.idle_timeout = idle_timeout
        self.clock = clock
        self.rooms: Dict[str, MatchRoom] = {}

    def create_match(self) -> MatchRoom:
        """Create a new empty match, sweeping finished ones first."""
        self.sweep()
        match = Match(rules=self.rules, rng=self.rng)
        while match.id in self.rooms:
            match = Match(rules=self.rules, rng=self.rng)
        room = MatchRoom(match, self.deck_source, created_at=self.clock())
        self.rooms[match.id] = room
        logger.info("Created match %s (%d active)", match.id, len(self.rooms))
        return room

    def get_room(self, match_id: str) -> Optional[MatchRoom]:
        return self.rooms.get(match_id)

    def get_match(self, match_id: str) -> Optional[Match]:
        room = self.rooms.get(match_id)
        return room.match if room else None

    def remove(self, match_id: str) -> bool:
        room = self.rooms.pop(match_id, None)
        if room is None:
            return False
        room.close()
        logger.info("Removed match %s", match_id)
        return True

    def close_all(self) -> int:
        """Cancel every room's timer and forget all matches."""
        count = len(self.rooms)
        for room in self.rooms.values():
            room.close()
        self.rooms.clear()
        return count

    def sweep(self) -> int:
        """
        Remove matches nobody is connected to that are either over or were
        never joined within the idle timeout.
        """
        now = self.clock()
        finished = [
            match_id for match_id, room in self.rooms.items()
            if room.is_empty and (room.match.is_over or self._abandoned(room, now))
        ]
        for match_id in finished:
            self.remove(match_id)
        return len(finished)

    def _abandoned(self, room: MatchRoom, now: float) -> bool:
        return (
            room.match.state == MatchState.WAITING
            and not room.match.participants
            and now - room.created_at >= self.idle_timeout
        )
