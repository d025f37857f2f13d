"""Stat Calculator for Rift Clash.

Derive unit health and damage from an archetype's champion tags and the
mastery level it was drawn at.
"""

from dataclasses import dataclass
from typing import Dict, Optional, Tuple

from riftclash.data.models.archetype import Archetype, ChampionTag


# (base_health, health_scale, base_damage, damage_scale)
TAG_STATS: Dict[ChampionTag, Tuple[float, float, float, float]] = {
    ChampionTag.ASSASSIN: (30, 1.1, 9, 1.3),
    ChampionTag.FIGHTER: (34, 1.2, 6, 1.3),
    ChampionTag.MAGE: (30, 1.2, 7, 1.25),
    ChampionTag.MARKSMAN: (30, 1.15, 8, 1.35),
    ChampionTag.SUPPORT: (32, 1.2, 4, 1.2),
    ChampionTag.TANK: (38, 1.3, 5, 1.2),
}


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero for positives."""
    return int(value + 0.5) if value >= 0 else -int(-value + 0.5)


@dataclass
class CalculatedStats:
    """Stats for a freshly drawn unit."""

    max_health: int = 0
    damage: int = 0


class StatCalculator:
    """
    Calculate unit stats from:
    - Primary champion tag (scaled by mastery level)
    - Secondary champion tag, averaged with the primary when present
    """

    def calculate_stats(self, archetype: Archetype, level: int) -> CalculatedStats:
        """
        Calculate stats for an archetype at a mastery level.

        Args:
            archetype: The unit's archetype.
            level: Mastery level the deck entry was sourced at.

        Returns:
            CalculatedStats with health and damage.
        """
        return CalculatedStats(
            max_health=self._compute(archetype.primary_tag, archetype.secondary_tag, level, 0),
            damage=self._compute(archetype.primary_tag, archetype.secondary_tag, level, 2),
        )

    def _compute(
        self,
        primary: ChampionTag,
        secondary: Optional[ChampionTag],
        level: int,
        index: int,
    ) -> int:
        base, scale = TAG_STATS[primary][index], TAG_STATS[primary][index + 1]
        value = base * scale ** level
        if secondary is None:
            return round_half_up(value)

        s_base, s_scale = TAG_STATS[secondary][index], TAG_STATS[secondary][index + 1]
        return round_half_up((value + s_base * s_scale ** level) / 2)


_calculator = StatCalculator()


def get_stat_calculator() -> StatCalculator:
    """Get the shared stat calculator."""
    return _calculator
