"""Match update records.

A MatchUpdate collects what one resolved move (or a forced turn advance)
changed. The match builds one shared record per move and then splits it into
the two per-participant views, so each side only sees its own hand draws.
"""

import copy
from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Optional, Tuple


@dataclass
class MovedRecord:
    uid: str
    location: str


@dataclass
class DamageRecord:
    uid: str
    amount: int
    health: int
    attacker_uid: Optional[str] = None


@dataclass
class HealRecord:
    uid: str
    amount: int
    health: int


@dataclass
class KillRecord:
    uid: str
    owner_id: str
    killer_uid: Optional[str] = None


@dataclass
class StatusChange:
    """A status applied to (applied=True) or removed from a unit."""

    uid: str
    kind: str
    applied: bool
    expires_turn: Optional[int] = None
    value: float = 0.0


@dataclass
class CooldownChange:
    uid: str
    ready_turn: int


@dataclass
class DamageChange:
    uid: str
    damage: int


@dataclass
class MatchUpdate:
    """
    Structured delta emitted after a move or forced advance.

    Attributes:
        turn_number: Turn number after the change.
        mover_id: Participant whose turn it now is.
        moves_remaining: Moves left in the current turn.
        moved: Units that changed location.
        killed: Units that died and went to their fountain.
        damaged: Damage taken by units.
        healed: Health restored to units.
        hand_draws: Units drawn into the recipient's own hand.
        enemy_spawns: Opponent units that entered the field from hand.
        status_changes: Statuses applied or removed.
        cooldown_changes: New ability ready turns.
        damage_changes: New damage stats.
        action_resets: Units allowed to act again this turn.
        nexus_health: Nexus health per participant, when it changed.
    """

    turn_number: int = 0
    mover_id: Optional[str] = None
    moves_remaining: int = 0
    moved: List[MovedRecord] = field(default_factory=list)
    killed: List[KillRecord] = field(default_factory=list)
    damaged: List[DamageRecord] = field(default_factory=list)
    healed: List[HealRecord] = field(default_factory=list)
    hand_draws: List[Dict[str, Any]] = field(default_factory=list)
    enemy_spawns: List[Dict[str, Any]] = field(default_factory=list)
    status_changes: List[StatusChange] = field(default_factory=list)
    cooldown_changes: List[CooldownChange] = field(default_factory=list)
    damage_changes: List[DamageChange] = field(default_factory=list)
    action_resets: List[str] = field(default_factory=list)
    nexus_health: Dict[str, int] = field(default_factory=dict)

    def last_attacker(self, uid: str) -> Optional[str]:
        """Most recent attacker recorded against a unit."""
        for record in reversed(self.damaged):
            if record.uid == uid:
                return record.attacker_uid
        return None

    def split(
        self,
        spawned: Optional[Dict[str, Any]] = None,
        drawn: Optional[Dict[str, Any]] = None,
    ) -> Tuple["MatchUpdate", "MatchUpdate"]:
        """
        Split into (mover view, opponent view).

        Args:
            spawned: Public view of a unit that left the mover's hand.
            drawn: Full view of the mover's replacement draw.

        Returns:
            The mover's update and the opponent's update.
        """
        own = copy.deepcopy(self)
        other = copy.deepcopy(self)

        if drawn is not None:
            own.hand_draws.append(drawn)
        if spawned is not None:
            other.moved = [m for m in other.moved if m.uid != spawned["uid"]]
            other.enemy_spawns.append(spawned)
        return own, other

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class MatchOver:
    """Terminal notification. victor_id is None when nobody won."""

    victor_id: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {"victor_id": self.victor_id}


@dataclass
class MatchInit:
    """Per-participant start-of-match payload."""

    participant_id: str
    hand: List[Dict[str, Any]]
    first_mover_id: str
    nexus_health: int
    opponent_id: str
    opponent_name: str
    opponent_icon: Optional[int]
    turn_number: int
    moves_remaining: int

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class MoveResult:
    """Outcome of a successful move."""

    self_update: MatchUpdate
    opponent_update: MatchUpdate
    over: Optional[MatchOver] = None
