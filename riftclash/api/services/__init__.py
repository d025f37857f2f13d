"""API services."""

from .deck_source import FetchedDeck, RiotDeckSource
from .match_service import MatchRoom, MatchService

__all__ = [
    "FetchedDeck",
    "RiotDeckSource",
    "MatchRoom",
    "MatchService",
]
