"""Join code generation."""

import random
from typing import Optional

# Uppercase letters and digits without the look-alikes I, O, 0 and 1
JOIN_CODE_ALPHABET = "ABCDEFGHJKLMNPQRSTUVWXYZ23456789"
JOIN_CODE_LENGTH = 6

_system_random = random.SystemRandom()


def generate_join_code(
    rng: Optional[random.Random] = None,
    length: int = JOIN_CODE_LENGTH,
) -> str:
    """Generate a random join code.

    Characters are drawn independently and with replacement. The code is not
    checked against existing sessions; the table's unique constraint rejects
    duplicates at insert time.
    """
    rng = rng or _system_random
    return "".join(rng.choice(JOIN_CODE_ALPHABET) for _ in range(length))


def is_join_code(value: str) -> bool:
    """True if ``value`` has the shape of a join code."""
    return len(value) == JOIN_CODE_LENGTH and all(c in JOIN_CODE_ALPHABET for c in value)
