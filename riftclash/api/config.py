"""
API configuration settings.
"""

from pydantic_settings import BaseSettings
from typing import List, Optional

from riftclash.core import constants
from riftclash.core.constants import MatchRules


class Settings(BaseSettings):
    """API settings."""

    # Server
    HOST: str = "0.0.0.0"
    PORT: int = 8000
    DEBUG: bool = True
    LOG_LEVEL: str = "INFO"

    # CORS
    CORS_ORIGINS: List[str] = ["*"]

    # Match rules
    NEXUS_STARTING_HEALTH: int = constants.NEXUS_STARTING_HEALTH
    NEXUS_INVULNERABLE_UNTIL_TURN: int = constants.NEXUS_INVULNERABLE_UNTIL_TURN
    NEXUS_ATTACK_DAMAGE: int = constants.NEXUS_ATTACK_DAMAGE
    NEXUS_DAMAGE_FROM_ATTACKER: bool = False
    MIN_DECK_SIZE: int = constants.MIN_DECK_SIZE
    DEATH_TIMER: int = constants.DEATH_TIMER
    TURN_TIMER_SECONDS: float = constants.TURN_TIMER_SECONDS
    AOE_ANY_LANE_RESOLUTION: str = constants.AOE_RESOLUTION_DECLARED

    # Match directory
    MATCH_IDLE_TIMEOUT: float = constants.MATCH_IDLE_TIMEOUT_SECONDS

    # Deck source (Riot API)
    RIOT_API_URL: str = "https://na1.api.riotgames.com"
    RIOT_API_KEY: Optional[str] = None
    RIOT_API_TIMEOUT: float = 10.0

    class Config:
        env_file = ".env"

    def match_rules(self) -> MatchRules:
        """Rules for newly created matches."""
        return MatchRules(
            nexus_starting_health=self.NEXUS_STARTING_HEALTH,
            nexus_invulnerable_until_turn=self.NEXUS_INVULNERABLE_UNTIL_TURN,
            nexus_attack_damage=self.NEXUS_ATTACK_DAMAGE,
            nexus_damage_from_attacker=self.NEXUS_DAMAGE_FROM_ATTACKER,
            min_deck_size=self.MIN_DECK_SIZE,
            death_timer=self.DEATH_TIMER,
            turn_timer_seconds=self.TURN_TIMER_SECONDS,
            aoe_any_lane_resolution=self.AOE_ANY_LANE_RESOLUTION,
        )


settings = Settings()
