"""Rift Clash game constants."""

from dataclasses import dataclass
from typing import Final

# =============================================================================
# PARTICIPANTS & NEXUS
# =============================================================================
MAX_PARTICIPANTS: Final[int] = 2

NEXUS_STARTING_HEALTH: Final[int] = 5

# Nexus cannot take damage while turn_number <= this value
NEXUS_INVULNERABLE_UNTIL_TURN: Final[int] = 3

# Fixed nexus decrement per successful AttackNexus
NEXUS_ATTACK_DAMAGE: Final[int] = 1

# =============================================================================
# HAND, FIELD & DECK
# =============================================================================
HAND_SIZE: Final[int] = 5

# Max units a participant may have outside the hand
MAX_FIELD_UNITS: Final[int] = 5

# Smallest pool accepted at deck selection (starting hand + a full field)
MIN_DECK_SIZE: Final[int] = HAND_SIZE + MAX_FIELD_UNITS

# Highest champion mastery level a deck entry may carry
MAX_MASTERY_LEVEL: Final[int] = 7

# Moves resolved before a fountain entry returns to the deck
DEATH_TIMER: Final[int] = 5

# =============================================================================
# TURNS
# =============================================================================
FIRST_TURN_MOVES: Final[int] = 2
MOVES_PER_TURN: Final[int] = 3

TURN_TIMER_SECONDS: Final[float] = 75.0

# Unjoined matches older than this are swept from the directory
MATCH_IDLE_TIMEOUT_SECONDS: Final[float] = 3600.0

# =============================================================================
# ABILITIES
# =============================================================================
DEFAULT_ABILITY_COOLDOWN: Final[int] = 5

# "declared": AOE-any-lane abilities hit the side their target type declares.
# "helper": enemy AOE-any-lane abilities resolve against the caster's allies.
AOE_RESOLUTION_DECLARED: Final[str] = "declared"
AOE_RESOLUTION_HELPER: Final[str] = "helper"


@dataclass(frozen=True)
class MatchRules:
    """Tunable rules for a single match."""

    nexus_starting_health: int = NEXUS_STARTING_HEALTH
    nexus_invulnerable_until_turn: int = NEXUS_INVULNERABLE_UNTIL_TURN
    nexus_attack_damage: int = NEXUS_ATTACK_DAMAGE
    nexus_damage_from_attacker: bool = False
    hand_size: int = HAND_SIZE
    max_field_units: int = MAX_FIELD_UNITS
    min_deck_size: int = MIN_DECK_SIZE
    death_timer: int = DEATH_TIMER
    first_turn_moves: int = FIRST_TURN_MOVES
    moves_per_turn: int = MOVES_PER_TURN
    turn_timer_seconds: float = TURN_TIMER_SECONDS
    aoe_any_lane_resolution: str = AOE_RESOLUTION_DECLARED
