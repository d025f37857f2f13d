"""Combat Unit for Rift Clash.

A unit is one drawn champion: stats derived from its archetype and mastery
level, a location, per-turn action bookkeeping, an ability and a status map.
Archetype-specific combat rules come from the unit's behaviour hooks; any
hook the archetype leaves out falls back to the defaults in resolution.py.
"""

import random
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, TYPE_CHECKING

from riftclash.core.ids import UNIT_ID_LENGTH, generate_id
from riftclash.core.stat_calculator import get_stat_calculator
from riftclash.data.loaders import resolve_archetype
from riftclash.data.models import Archetype

from .ability import AbilityData
from .behaviors import BehaviorHooks, build_hooks
from .champion_abilities import get_ability_for_champion
from .location import Location
from .resolution import (
    default_attack_enemy,
    default_set_location,
    default_take_damage,
    heal,
)
from .status_effects import UnitStatuses

if TYPE_CHECKING:
    from .resolution import CombatContext


@dataclass
class Unit:
    """
    A champion in a match.

    Attributes:
        uid: Unique 8-character id.
        archetype: Static champion data.
        level: Mastery level the deck entry carried.
        owner_id: Owning participant id.
        max_health: Health cap.
        health: Current health, 0..max_health.
        damage: Damage dealt by a basic attack.
        ability: The archetype's ability.
        location: Hand or a lane.
        last_acted_turn: Turn number of the unit's last action.
        ready_turn: Ability is usable once the turn number passes this.
    """

    uid: str
    archetype: Archetype
    level: int
    owner_id: str
    max_health: int
    health: int
    damage: int
    ability: AbilityData
    location: Location = Location.HAND
    last_acted_turn: int = 0
    ready_turn: int = 0
    statuses: UnitStatuses = field(default_factory=UnitStatuses)
    hooks: BehaviorHooks = field(default_factory=BehaviorHooks)

    @property
    def archetype_id(self) -> int:
        return self.archetype.id

    @property
    def key(self) -> str:
        return self.archetype.key

    @property
    def name(self) -> str:
        return self.archetype.name

    @property
    def in_hand(self) -> bool:
        return self.location == Location.HAND

    @property
    def is_alive(self) -> bool:
        return self.health > 0

    # -------------------------------------------------------------------------
    # Turn bookkeeping
    # -------------------------------------------------------------------------

    def has_acted(self, turn: int) -> bool:
        return self.last_acted_turn >= turn

    def mark_acted(self, turn: int) -> None:
        self.last_acted_turn = turn

    def ability_ready(self, turn: int) -> bool:
        return self.ready_turn < turn

    def can_act(self, turn: int) -> bool:
        return not self.statuses.prevents_actions(turn)

    def is_targetable(self, turn: int) -> bool:
        return not self.statuses.in_stasis(turn)

    # -------------------------------------------------------------------------
    # Hooks
    # -------------------------------------------------------------------------

    def attack_enemy(self, ctx: "CombatContext", target: "Unit") -> bool:
        """Attack a unit. Returns whether the target died."""
        hook = self.hooks.attack_enemy or default_attack_enemy
        return hook(ctx, self, target)

    def take_damage(self, ctx: "CombatContext", raw: int, attacker: Optional["Unit"]) -> bool:
        """Take damage. Returns whether this unit died."""
        hook = self.hooks.take_damage or default_take_damage
        return hook(ctx, self, raw, attacker)

    def set_location(self, ctx: "CombatContext", location: Location) -> None:
        hook = self.hooks.set_location or default_set_location
        hook(ctx, self, location)

    def heal(self, ctx: "CombatContext", amount: int) -> int:
        return heal(ctx, self, amount)

    # -------------------------------------------------------------------------
    # Views
    # -------------------------------------------------------------------------

    def to_dict(self, turn: int) -> Dict[str, Any]:
        """Full view sent to the unit's owner and, once on the field, to both sides."""
        return {
            "uid": self.uid,
            "archetype_id": self.archetype_id,
            "key": self.key,
            "name": self.name,
            "level": self.level,
            "owner_id": self.owner_id,
            "health": self.health,
            "max_health": self.max_health,
            "damage": self.damage,
            "location": self.location.value,
            "last_acted_turn": self.last_acted_turn,
            "ready_turn": self.ready_turn,
            "ability": self.ability.to_dict(),
            "statuses": self.statuses.to_dict(turn),
        }


def create_unit(
    archetype_id: int,
    level: int,
    owner_id: str,
    rng: Optional[random.Random] = None,
) -> Unit:
    """
    Materialize a fresh unit in hand.

    Args:
        archetype_id: Champion id from the deck entry.
        level: Mastery level from the deck entry.
        owner_id: Participant that drew the unit.
        rng: Random source for the uid.

    Returns:
        A new Unit at full health.
    """
    archetype = resolve_archetype(archetype_id)
    stats = get_stat_calculator().calculate_stats(archetype, level)

    return Unit(
        uid=generate_id(UNIT_ID_LENGTH, rng),
        archetype=archetype,
        level=level,
        owner_id=owner_id,
        max_health=stats.max_health,
        health=stats.max_health,
        damage=stats.damage,
        ability=get_ability_for_champion(archetype.key),
        hooks=build_hooks(archetype.key),
    )
