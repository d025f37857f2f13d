"""Archetype data loader."""

import json
from functools import lru_cache
from pathlib import Path
from typing import Optional

from ..models.archetype import Archetype, ChampionTag


DATA_DIR = Path(__file__).parent.parent
ARCHETYPES_FILE = DATA_DIR / "archetypes.json"


def _parse_archetype(data: dict) -> Archetype:
    """Parse an archetype from JSON data."""
    return Archetype(
        id=data["id"],
        key=data["key"],
        name=data["name"],
        tags=[ChampionTag(tag) for tag in data["tags"]],
    )


@lru_cache(maxsize=1)
def load_archetypes() -> list[Archetype]:
    """Load all archetypes from the bundled JSON file.

    Returns:
        List of all Archetype objects.
    """
    with open(ARCHETYPES_FILE, "r", encoding="utf-8") as f:
        data = json.load(f)
    return [_parse_archetype(entry) for entry in data["archetypes"]]


@lru_cache(maxsize=1)
def _archetypes_by_id() -> dict[int, Archetype]:
    return {a.id: a for a in load_archetypes()}


def get_archetype_by_id(archetype_id: int) -> Optional[Archetype]:
    """Get an archetype by champion id.

    Args:
        archetype_id: The champion id.

    Returns:
        Archetype if found, None otherwise.
    """
    return _archetypes_by_id().get(archetype_id)


def get_archetype_by_key(key: str) -> Optional[Archetype]:
    """Get an archetype by its key (e.g. "twisted_fate")."""
    normalized = key.lower().replace(" ", "_").replace("'", "")
    for archetype in load_archetypes():
        if archetype.key == normalized:
            return archetype
    return None


def resolve_archetype(archetype_id: int) -> Archetype:
    """Get an archetype, falling back to a generic fighter.

    Mastery data can contain champions released after the catalog was
    written; those still play with default stats and behaviour.
    """
    archetype = get_archetype_by_id(archetype_id)
    if archetype is not None:
        return archetype
    return Archetype(
        id=archetype_id,
        key=f"champion_{archetype_id}",
        name=f"Champion {archetype_id}",
        tags=[ChampionTag.FIGHTER],
    )
