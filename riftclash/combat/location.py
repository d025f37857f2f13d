"""Board locations and lane adjacency."""

from enum import Enum
from typing import Tuple


class Location(str, Enum):
    """Where a unit sits. Jungles are reserved and cannot be entered."""

    HAND = "hand"
    LANE_TOP = "lane_top"
    LANE_MID = "lane_mid"
    LANE_BOT = "lane_bot"
    JUNGLE_TOP = "jungle_top"
    JUNGLE_BOT = "jungle_bot"

    @property
    def is_lane(self) -> bool:
        return self in LANES

    @property
    def is_jungle(self) -> bool:
        return self in (Location.JUNGLE_TOP, Location.JUNGLE_BOT)


LANES: Tuple[Location, ...] = (Location.LANE_TOP, Location.LANE_MID, Location.LANE_BOT)


def is_adjacent(source: Location, destination: Location) -> bool:
    """
    Check a one-step move.

    The hand reaches every lane; mid is the only lane next to both top
    and bot.
    """
    if source == Location.HAND:
        return True
    return source == Location.LANE_MID or destination == Location.LANE_MID
