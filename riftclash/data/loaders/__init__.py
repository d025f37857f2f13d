# Data Loaders
from .archetype_loader import (
    load_archetypes,
    get_archetype_by_id,
    get_archetype_by_key,
    resolve_archetype,
)

__all__ = [
    "load_archetypes",
    "get_archetype_by_id",
    "get_archetype_by_key",
    "resolve_archetype",
]
