"""Move commands accepted by Match.apply_move."""

from dataclasses import dataclass
from typing import Optional, Union

from riftclash.combat.location import Location


@dataclass(frozen=True)
class AttackNexus:
    source_uid: str


@dataclass(frozen=True)
class AttackUnit:
    source_uid: str
    target_uid: str


@dataclass(frozen=True)
class CastAbility:
    source_uid: str
    target_uid: Optional[str] = None


@dataclass(frozen=True)
class MoveUnit:
    uid: str
    target_location: Location


MoveCommand = Union[AttackNexus, AttackUnit, CastAbility, MoveUnit]
