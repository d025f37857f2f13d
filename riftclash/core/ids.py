"""Random identifiers for matches, participants and units."""

import random
import string
from typing import Final, Optional

ID_ALPHABET: Final[str] = string.ascii_letters + string.digits

PARTICIPANT_ID_LENGTH: Final[int] = 6
UNIT_ID_LENGTH: Final[int] = 8
MATCH_ID_LENGTH: Final[int] = 12


def generate_id(length: int, rng: Optional[random.Random] = None) -> str:
    """Generate a random alphanumeric id of the given length."""
    rng = rng or random
    return "".join(rng.choice(ID_ALPHABET) for _ in range(length))
