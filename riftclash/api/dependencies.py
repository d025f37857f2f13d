"""
Dependency injection for API services.
"""

from functools import lru_cache

from .config import settings
from .services.deck_source import RiotDeckSource
from .services.match_service import MatchService


@lru_cache()
def get_deck_source() -> RiotDeckSource:
    """Get RiotDeckSource singleton."""
    return RiotDeckSource(
        base_url=settings.RIOT_API_URL,
        api_key=settings.RIOT_API_KEY,
        timeout=settings.RIOT_API_TIMEOUT,
    )


@lru_cache()
def get_match_service() -> MatchService:
    """Get MatchService singleton."""
    return MatchService(
        rules=settings.match_rules(),
        deck_source=get_deck_source(),
        idle_timeout=settings.MATCH_IDLE_TIMEOUT,
    )
