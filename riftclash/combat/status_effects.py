"""Status Effects System for Rift Clash Combat.

Every timed modifier on a unit lives in one map keyed by StatusKind. An
entry is active while the current turn number is <= its expiry turn; reads
after that clear it, so nothing has to count down between turns.

Kinds:
- Crowd control: stun, stasis
- Defensive: invulnerable, damage reduction, shield
- Offensive: damage buff, mark
"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Dict, List, Optional


class StatusKind(Enum):
    """Types of status effects."""

    STUN = auto()  # Cannot act
    INVULNERABLE = auto()  # Cannot be attacked, takes no damage
    STASIS = auto()  # Untargetable and cannot act
    DAMAGE_REDUCTION = auto()  # value: factor 0..1 of incoming damage removed
    SHIELD = auto()  # value: remaining shield points
    DAMAGE_BUFF = auto()  # value: factor added to outgoing damage
    MARK = auto()  # Read by archetype behaviours


# Kinds whose value is a factor; re-applying keeps the larger one
FACTOR_KINDS = (StatusKind.DAMAGE_REDUCTION, StatusKind.DAMAGE_BUFF)


@dataclass
class StatusEntry:
    """
    An active status on a unit.

    Attributes:
        expires_turn: Last turn number on which the status is active.
        value: Kind-specific payload (factor or shield points).
    """

    expires_turn: int
    value: float = 0.0

    def is_active(self, turn: int) -> bool:
        return turn <= self.expires_turn


class UnitStatuses:
    """
    Status map for a single unit.

    All queries take the current turn number and lazily drop expired
    entries.
    """

    def __init__(self):
        self._entries: Dict[StatusKind, StatusEntry] = {}

    def apply(self, kind: StatusKind, expires_turn: int, value: float = 0.0) -> StatusEntry:
        """
        Apply or refresh a status.

        Re-applying keeps the later expiry. Factor kinds keep the larger
        value and shields stack their points.

        Args:
            kind: Status to apply.
            expires_turn: Last turn the status is active.
            value: Payload for value-carrying kinds.

        Returns:
            The resulting entry.
        """
        current = self._entries.get(kind)
        if current is None:
            entry = StatusEntry(expires_turn=expires_turn, value=value)
            self._entries[kind] = entry
            return entry

        current.expires_turn = max(current.expires_turn, expires_turn)
        if kind == StatusKind.SHIELD:
            current.value += value
        elif kind in FACTOR_KINDS:
            current.value = max(current.value, value)
        return current

    def get(self, kind: StatusKind, turn: int) -> Optional[StatusEntry]:
        """Get an active entry, clearing it if it has expired."""
        entry = self._entries.get(kind)
        if entry is None:
            return None
        if not entry.is_active(turn):
            del self._entries[kind]
            return None
        return entry

    def is_active(self, kind: StatusKind, turn: int) -> bool:
        return self.get(kind, turn) is not None

    def value(self, kind: StatusKind, turn: int) -> float:
        entry = self.get(kind, turn)
        return entry.value if entry else 0.0

    def remove(self, kind: StatusKind) -> Optional[StatusEntry]:
        return self._entries.pop(kind, None)

    def expire(self, turn: int) -> List[StatusKind]:
        """
        Drop every entry that has expired.

        Returns:
            Kinds that were cleared.
        """
        expired = [k for k, e in self._entries.items() if not e.is_active(turn)]
        for kind in expired:
            del self._entries[kind]
        return expired

    def absorb(self, amount: int, turn: int) -> int:
        """
        Absorb damage into the shield.

        Args:
            amount: Incoming damage.
            turn: Current turn number.

        Returns:
            Damage left over after the shield.
        """
        shield = self.get(StatusKind.SHIELD, turn)
        if shield is None or amount <= 0:
            return amount

        absorbed = min(int(shield.value), amount)
        shield.value -= absorbed
        if shield.value <= 0:
            del self._entries[StatusKind.SHIELD]
        return amount - absorbed

    # Convenience checks

    def is_stunned(self, turn: int) -> bool:
        return self.is_active(StatusKind.STUN, turn)

    def in_stasis(self, turn: int) -> bool:
        return self.is_active(StatusKind.STASIS, turn)

    def is_invulnerable(self, turn: int) -> bool:
        return self.is_active(StatusKind.INVULNERABLE, turn)

    def prevents_actions(self, turn: int) -> bool:
        """Stun and stasis both stop a unit from acting."""
        return self.is_stunned(turn) or self.in_stasis(turn)

    def active(self, turn: int) -> Dict[StatusKind, StatusEntry]:
        """All active entries after clearing expired ones."""
        self.expire(turn)
        return dict(self._entries)

    def to_dict(self, turn: int) -> Dict[str, dict]:
        return {
            kind.name.lower(): {"expires_turn": entry.expires_turn, "value": entry.value}
            for kind, entry in self.active(turn).items()
        }
