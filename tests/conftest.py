"""Shared fixtures for match tests."""

import random

import pytest

from riftclash.combat.location import Location
from riftclash.combat.unit import Unit, create_unit
from riftclash.core.match import Match

GAREN = 86  # Fighter/Tank: 36 health, 6 damage at level 0
ANNIE = 1  # Mage: 30 health, 7 damage at level 0
CORKI = 42  # Marksman: 30 health, 8 damage at level 0


def start_match(rules=None, deck_a=None, deck_b=None, seed=7):
    """
    Build a started match.

    Returns:
        (match, first_joiner_id, second_joiner_id). The second joiner moves
        first.
    """
    match = Match(rules=rules, rng=random.Random(seed))
    first = match.add_participant()
    second = match.add_participant()
    match.select_deck(first, deck_a or [(GAREN, 0)] * 10)
    match.select_deck(second, deck_b or [(GAREN, 0)] * 10)
    return match, first, second


def place(
    match: Match,
    owner_id: str,
    archetype_id: int = GAREN,
    location: Location = Location.LANE_TOP,
    level: int = 0,
) -> Unit:
    """Put a fresh unit straight onto the field."""
    unit = create_unit(archetype_id, level, owner_id, match.rng)
    unit.location = location
    match.units[unit.uid] = unit
    return unit


def clear_hands(match: Match) -> None:
    for participant in match.participants:
        for unit in match.hand_of(participant.id):
            del match.units[unit.uid]


@pytest.fixture
def started():
    """A started match with Garen-only decks."""
    return start_match()
