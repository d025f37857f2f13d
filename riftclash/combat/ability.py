"""Ability System for Rift Clash Combat.

Abilities are pure: an ability's effect reads the match through a query
view and returns an AbilityOutcome listing a cooldown and declarative effect
records. The match pipeline applies those records to state.
"""

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Callable, List, Optional, Union, TYPE_CHECKING

from .status_effects import StatusKind

if TYPE_CHECKING:
    from .location import Location
    from .unit import Unit
    from riftclash.core.match import MatchQuery


class AbilityTargetType(Enum):
    """Types of ability targeting."""

    SELF = auto()  # Targets the caster
    SINGLE_ENEMY_SAME_LANE = auto()
    SINGLE_ENEMY_ANY_LANE = auto()
    SINGLE_ALLY_SAME_LANE = auto()
    SINGLE_ALLY_ANY_LANE = auto()
    AOE_ENEMY_SAME_LANE = auto()  # Every enemy in the caster's lane
    AOE_ENEMY_ANY_LANE = auto()  # Every enemy in the target unit's lane
    AOE_ALLY_SAME_LANE = auto()
    AOE_ALLY_ANY_LANE = auto()
    GLOBAL_ENEMY = auto()  # Every enemy on the field
    GLOBAL_ALLY = auto()  # Every ally on the field

    @property
    def needs_target(self) -> bool:
        """Whether a cast must name a target unit."""
        return self in (
            AbilityTargetType.SINGLE_ENEMY_SAME_LANE,
            AbilityTargetType.SINGLE_ENEMY_ANY_LANE,
            AbilityTargetType.SINGLE_ALLY_SAME_LANE,
            AbilityTargetType.SINGLE_ALLY_ANY_LANE,
            AbilityTargetType.AOE_ENEMY_ANY_LANE,
            AbilityTargetType.AOE_ALLY_ANY_LANE,
        )


# =============================================================================
# EFFECT RECORDS
# =============================================================================


@dataclass
class DamageEffect:
    """Deal damage to a unit through its take_damage hook."""

    target_uid: str
    amount: int


@dataclass
class HealEffect:
    target_uid: str
    amount: int


@dataclass
class StatusEffectApplication:
    """Apply a status through the given expiry turn."""

    target_uid: str
    kind: StatusKind
    expires_turn: int
    value: float = 0.0


@dataclass
class MoveEffect:
    """Relocate a unit to another lane through its set_location hook."""

    target_uid: str
    location: "Location"


@dataclass
class ResetActionEffect:
    """Let a unit act again this turn."""

    target_uid: str


@dataclass
class DamageChangeEffect:
    """Permanently change a unit's damage stat by delta."""

    target_uid: str
    delta: int


@dataclass
class NexusDamageEffect:
    participant_id: str
    amount: int


@dataclass
class CooldownEffect:
    """Set a unit's ability ready turn."""

    target_uid: str
    ready_turn: int


Effect = Union[
    DamageEffect,
    HealEffect,
    StatusEffectApplication,
    MoveEffect,
    ResetActionEffect,
    DamageChangeEffect,
    NexusDamageEffect,
    CooldownEffect,
]


@dataclass
class AbilityOutcome:
    """Result of evaluating an ability effect."""

    cooldown: int
    effects: List[Effect] = field(default_factory=list)


AbilityEffectFn = Callable[["MatchQuery", "Unit", Optional["Unit"]], AbilityOutcome]


@dataclass
class AbilityData:
    """
    Static ability definition.

    Attributes:
        ability_id: Unique identifier.
        name: Display name.
        description: Player-facing text.
        target_type: Target shape the cast must match.
        effect: Pure function producing the outcome of a cast.
    """

    ability_id: str
    name: str
    description: str
    target_type: AbilityTargetType
    effect: AbilityEffectFn

    def to_dict(self) -> dict:
        return {
            "ability_id": self.ability_id,
            "name": self.name,
            "description": self.description,
            "target_type": self.target_type.name.lower(),
        }
