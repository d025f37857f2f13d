"""Participant: one player's side of a match."""

from dataclasses import dataclass, field
from typing import List, Optional

from riftclash.combat.unit import Unit

from .constants import NEXUS_INVULNERABLE_UNTIL_TURN, NEXUS_STARTING_HEALTH
from .deck import Deck
from .fountain import Fountain, FountainEntry


@dataclass
class Participant:
    """
    A player in a match.

    Attributes:
        id: 6-character participant id.
        nexus_health: Remaining nexus health; 0 loses the match.
        invulnerable_until_turn: Nexus takes no damage through this turn.
        deck: Attached at selection; None until then.
        fountain: Dead champions waiting to return to the deck.
        display_name: Decorative summoner name.
        icon_id: Decorative profile icon id.
        connected: Whether the transport is still attached.
    """

    id: str
    nexus_health: int = NEXUS_STARTING_HEALTH
    invulnerable_until_turn: int = NEXUS_INVULNERABLE_UNTIL_TURN
    deck: Optional[Deck] = None
    fountain: Fountain = field(default_factory=Fountain)
    display_name: str = ""
    icon_id: Optional[int] = None
    connected: bool = True

    @property
    def ready(self) -> bool:
        return self.deck is not None

    def nexus_invulnerable(self, turn: int) -> bool:
        return turn <= self.invulnerable_until_turn

    def damage_nexus(self, amount: int) -> bool:
        """Damage the nexus, clamped at 0. Returns whether it was destroyed."""
        self.nexus_health = max(0, self.nexus_health - max(0, amount))
        return self.nexus_health == 0

    def draw(self) -> Optional[Unit]:
        if self.deck is None:
            return None
        return self.deck.draw(self.id)

    def send_to_fountain(self, unit: Unit, death_timer: int) -> FountainEntry:
        return self.fountain.push(unit.archetype_id, unit.level, death_timer)

    def tick_fountain(self) -> List[FountainEntry]:
        """Tick the fountain and return expired entries to the deck."""
        returned = self.fountain.tick()
        if self.deck is not None:
            for entry in returned:
                self.deck.add(entry.archetype_id, entry.level)
        return returned

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "display_name": self.display_name,
            "icon_id": self.icon_id,
            "nexus_health": self.nexus_health,
            "ready": self.ready,
            "connected": self.connected,
        }
