"""
Static data API routes.
"""

from fastapi import APIRouter, HTTPException
from typing import Optional, List, Dict, Any

from riftclash.combat.champion_abilities import get_ability_for_champion
from riftclash.data.loaders import load_archetypes, get_archetype_by_id

router = APIRouter()


# === Archetypes ===


def _with_ability(archetype) -> Dict[str, Any]:
    data = archetype.model_dump()
    data["ability"] = get_ability_for_champion(archetype.key).to_dict()
    return data


@router.get("/archetypes")
async def get_all_archetypes(tag: Optional[str] = None) -> List[Dict[str, Any]]:
    """Get all archetypes, optionally filtered by class tag."""
    archetypes = load_archetypes()
    if tag is not None:
        archetypes = [a for a in archetypes if tag in a.tags]
    return [_with_ability(a) for a in archetypes]


@router.get("/archetypes/{archetype_id}")
async def get_archetype(archetype_id: int) -> Dict[str, Any]:
    """Get specific archetype by champion id."""
    archetype = get_archetype_by_id(archetype_id)
    if archetype is None:
        raise HTTPException(status_code=404, detail="Archetype not found")
    return _with_ability(archetype)
