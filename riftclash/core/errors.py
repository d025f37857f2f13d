"""Match error taxonomy.

Every error is raised before any state is mutated, so a caught MatchError
always leaves the match exactly as it was.
"""

from enum import Enum
from typing import Any, Dict


class ErrorCode(str, Enum):
    """Machine-readable failure kinds."""

    # Turn and command shape
    NOT_YOUR_TURN = "not_your_turn"
    INVALID_MOVE = "invalid_move"

    # Unit preconditions
    INVALID_SOURCE = "invalid_source"
    INVALID_TARGET = "invalid_target"
    NOT_OWNER = "not_owner"
    OWN_TARGET = "own_target"
    IN_HAND = "in_hand"
    STUNNED = "stunned"
    ALREADY_ACTED = "already_acted"
    ON_COOLDOWN = "on_cooldown"
    DIFFERENT_LANE = "different_lane"
    TARGET_INVULNERABLE = "target_invulnerable"
    TARGET_UNTARGETABLE = "target_untargetable"
    LANE_OCCUPIED = "lane_occupied"
    NEXUS_INVULNERABLE = "nexus_invulnerable"

    # Movement
    SAME_LOCATION = "same_location"
    MOVE_TO_HAND = "move_to_hand"
    JUNGLE = "jungle"
    NOT_ADJACENT = "not_adjacent"
    FIELD_FULL = "field_full"

    # Lifecycle
    MATCH_FULL = "match_full"
    WRONG_STATE = "wrong_state"
    UNKNOWN_PARTICIPANT = "unknown_participant"

    # Selection
    DECK_TOO_SMALL = "deck_too_small"
    INVALID_DECK = "invalid_deck"
    DECK_FETCH_FAILED = "deck_fetch_failed"


class MatchError(Exception):
    """Base class for all match errors."""

    def __init__(self, code: ErrorCode, message: str):
        super().__init__(message)
        self.code = code
        self.message = message

    def to_dict(self) -> Dict[str, Any]:
        return {"code": self.code.value, "message": self.message}


class RuleViolation(MatchError):
    """A move broke a game rule: wrong turn, bad shape, unmet precondition."""


class LifecycleViolation(MatchError):
    """An operation arrived in a match state that does not allow it."""


class MatchFull(LifecycleViolation):
    def __init__(self, message: str = "The game is full."):
        super().__init__(ErrorCode.MATCH_FULL, message)


class SelectionFailure(MatchError):
    """A deck could not be fetched or is unusable."""
