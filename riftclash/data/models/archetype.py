"""Archetype (champion) data model."""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class ChampionTag(str, Enum):
    """Champion class tags used for stat computation."""

    FIGHTER = "Fighter"
    MAGE = "Mage"
    ASSASSIN = "Assassin"
    SUPPORT = "Support"
    MARKSMAN = "Marksman"
    TANK = "Tank"


class Archetype(BaseModel):
    """A champion archetype: fixed combat identity of a unit."""

    id: int = Field(..., description="Champion id as reported by the mastery API")
    key: str = Field(..., description="Unique identifier (lowercase, no spaces)")
    name: str = Field(..., description="Display name")
    tags: list[ChampionTag] = Field(..., min_length=1, max_length=2)

    @property
    def primary_tag(self) -> ChampionTag:
        return self.tags[0]

    @property
    def secondary_tag(self) -> Optional[ChampionTag]:
        return self.tags[1] if len(self.tags) > 1 else None
