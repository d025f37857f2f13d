"""Fountain: the respawn queue of a participant's dead champions."""

from dataclasses import dataclass
from typing import List

from .constants import DEATH_TIMER


@dataclass
class FountainEntry:
    archetype_id: int
    level: int
    death_timer: int = DEATH_TIMER


class Fountain:
    """
    Dead champions waiting to return to the deck.

    Timers count resolved moves, not turns.
    """

    def __init__(self):
        self.entries: List[FountainEntry] = []

    def __len__(self) -> int:
        return len(self.entries)

    def push(self, archetype_id: int, level: int, death_timer: int = DEATH_TIMER) -> FountainEntry:
        entry = FountainEntry(archetype_id=archetype_id, level=level, death_timer=death_timer)
        self.entries.append(entry)
        return entry

    def tick(self) -> List[FountainEntry]:
        """
        Decrement every timer by one.

        Returns:
            Entries whose timer reached zero, removed from the fountain.
        """
        returned: List[FountainEntry] = []
        remaining: List[FountainEntry] = []
        for entry in self.entries:
            entry.death_timer -= 1
            if entry.death_timer <= 0:
                returned.append(entry)
            else:
                remaining.append(entry)
        self.entries = remaining
        return returned

    def to_list(self) -> List[dict]:
        return [
            {"archetype_id": e.archetype_id, "level": e.level, "death_timer": e.death_timer}
            for e in self.entries
        ]
