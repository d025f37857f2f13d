# Data Models
from .archetype import Archetype, ChampionTag

__all__ = [
    "Archetype",
    "ChampionTag",
]
