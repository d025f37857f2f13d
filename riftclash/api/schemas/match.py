"""
Match API schemas.

Inbound WebSocket messages are an envelope ``{"event": ..., "data": {...}}``;
the data of each event is validated against the matching model below.
"""

from pydantic import BaseModel, Field
from typing import Any, Dict, List, Optional, Tuple
from enum import Enum

from riftclash.combat.location import Location
from riftclash.core.commands import (
    AttackNexus,
    AttackUnit,
    CastAbility,
    MoveCommand,
    MoveUnit,
)


# === HTTP ===


class CreateMatchResponse(BaseModel):
    """Response for match creation."""

    match_id: str


class ParticipantSchema(BaseModel):
    """Public participant info."""

    id: str
    display_name: str = ""
    icon_id: Optional[int] = None
    nexus_health: int
    ready: bool
    connected: bool


class MatchSummarySchema(BaseModel):
    """Lobby-level match status."""

    match_id: str
    state: str
    turn_number: int
    moves_remaining: int
    mover_id: Optional[str] = None
    participant_count: int
    participants: List[ParticipantSchema] = Field(default_factory=list)
    victor_id: Optional[str] = None


# === WebSocket ===


class ClientEvent(str, Enum):
    """Events a client may send."""

    SELECT = "select"
    MOVE = "move"
    PASS = "pass"


class ClientMessage(BaseModel):
    """Inbound message envelope."""

    event: ClientEvent
    data: Dict[str, Any] = Field(default_factory=dict)


class SelectRequest(BaseModel):
    """
    Deck selection.

    Without pairs the deck is fetched for summoner_name; with pairs the
    given (archetype_id, level) pool is used as is.
    """

    summoner_name: str = Field(..., min_length=1)
    pairs: Optional[List[Tuple[int, int]]] = None
    icon_id: Optional[int] = None


class MoveKind(str, Enum):
    """Move command kinds."""

    ATTACK_NEXUS = "attack_nexus"
    ATTACK_UNIT = "attack_unit"
    CAST_ABILITY = "cast_ability"
    MOVE_UNIT = "move_unit"


class MoveRequest(BaseModel):
    """A move as sent over the wire."""

    kind: str
    source_uid: Optional[str] = None
    target_uid: Optional[str] = None
    uid: Optional[str] = None
    target_location: Optional[str] = None

    def to_command(self) -> Optional[MoveCommand]:
        """
        Build the move command.

        Returns:
            The command, or None if the request does not describe one.
        """
        if self.kind == MoveKind.ATTACK_NEXUS and self.source_uid:
            return AttackNexus(source_uid=self.source_uid)
        if self.kind == MoveKind.ATTACK_UNIT and self.source_uid and self.target_uid:
            return AttackUnit(source_uid=self.source_uid, target_uid=self.target_uid)
        if self.kind == MoveKind.CAST_ABILITY and self.source_uid:
            return CastAbility(source_uid=self.source_uid, target_uid=self.target_uid)
        if self.kind == MoveKind.MOVE_UNIT and self.uid and self.target_location:
            try:
                location = Location(self.target_location)
            except ValueError:
                return None
            return MoveUnit(uid=self.uid, target_location=location)
        return None
