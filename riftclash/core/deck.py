"""Deck: a participant's pool of drawable champions."""

import random
from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence, Tuple

from riftclash.combat.unit import Unit, create_unit

from .constants import MAX_MASTERY_LEVEL, MIN_DECK_SIZE
from .errors import ErrorCode, SelectionFailure


@dataclass(frozen=True)
class DeckEntry:
    archetype_id: int
    level: int


class Deck:
    """
    Bag of (archetype_id, level) entries.

    Draws are uniform at random without replacement; dead champions come
    back through add().
    """

    def __init__(self, entries: Iterable[DeckEntry], rng: Optional[random.Random] = None):
        self._entries: List[DeckEntry] = list(entries)
        self._rng = rng or random.Random()

    @classmethod
    def from_pairs(
        cls,
        pairs: Sequence[Tuple[int, int]],
        min_size: int = MIN_DECK_SIZE,
        rng: Optional[random.Random] = None,
    ) -> "Deck":
        """
        Build a deck from externally supplied pairs.

        Args:
            pairs: (archetype_id, level) pairs.
            min_size: Smallest usable pool.
            rng: Random source for draws.

        Returns:
            A new Deck.

        Raises:
            SelectionFailure: If a pair is malformed, its level is out of range,
                or the pool is too small.
        """
        entries = []
        for pair in pairs:
            invalid = SelectionFailure(ErrorCode.INVALID_DECK, f"Invalid deck entry: {pair!r}")
            try:
                archetype_id, level = int(pair[0]), int(pair[1])
            except (TypeError, ValueError, IndexError) as exc:
                raise invalid from exc
            if archetype_id <= 0 or not 0 <= level <= MAX_MASTERY_LEVEL:
                raise invalid
            entries.append(DeckEntry(archetype_id, level))

        if len(entries) < min_size:
            raise SelectionFailure(
                ErrorCode.DECK_TOO_SMALL,
                f"Deck needs at least {min_size} champions, got {len(entries)}.",
            )
        return cls(entries, rng)

    def __len__(self) -> int:
        return len(self._entries)

    @property
    def entries(self) -> List[DeckEntry]:
        return list(self._entries)

    def draw(self, owner_id: str) -> Optional[Unit]:
        """
        Remove a random entry and materialize it as a unit in hand.

        Returns:
            The new unit, or None if the pool is empty.
        """
        if not self._entries:
            return None
        index = self._rng.randrange(len(self._entries))
        entry = self._entries.pop(index)
        return create_unit(entry.archetype_id, entry.level, owner_id, self._rng)

    def add(self, archetype_id: int, level: int) -> None:
        self._entries.append(DeckEntry(archetype_id, level))
