"""Combat rules for Rift Clash.

This module provides:
- Lane locations and adjacency
- Units with per-archetype behaviour hooks
- Damage, healing and status resolution
- The champion ability table
"""

# Locations
from .location import Location, LANES, is_adjacent

# Status effects
from .status_effects import StatusKind, StatusEntry, UnitStatuses

# Abilities
from .ability import AbilityTargetType, AbilityData, AbilityOutcome
from .champion_abilities import (
    CHAMPION_ABILITIES,
    DEFAULT_ABILITY,
    get_ability_for_champion,
)

# Resolution
from .resolution import CombatContext

# Units
from .behaviors import BehaviorHooks, build_hooks
from .unit import Unit, create_unit

__all__ = [
    # Locations
    "Location",
    "LANES",
    "is_adjacent",
    # Status effects
    "StatusKind",
    "StatusEntry",
    "UnitStatuses",
    # Abilities
    "AbilityTargetType",
    "AbilityData",
    "AbilityOutcome",
    "CHAMPION_ABILITIES",
    "DEFAULT_ABILITY",
    "get_ability_for_champion",
    # Resolution
    "CombatContext",
    # Units
    "BehaviorHooks",
    "build_hooks",
    "Unit",
    "create_unit",
]
