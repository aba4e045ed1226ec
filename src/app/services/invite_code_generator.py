"""
Invite Code Generator

Draws candidate invite codes from an injected random source.
"""

import random
from typing import Optional

from src.domain.entities import (
    INVITE_CODE_ALPHABET,
    INVITE_CODE_LENGTH,
    INVITE_CODE_PREFIX,
)


class InviteCodeGenerator:
    """
    Produces PAT-XXXXXX candidates.

    Each character is sampled uniformly, with replacement, from [A-Z0-9].
    Codes are short-lived and shared by hand, so a non-cryptographic
    generator is acceptable.
    """

    def __init__(self, rng: Optional[random.Random] = None):
        self.rng = rng if rng is not None else random.Random()

    def generate(self) -> str:
        suffix = "".join(
            self.rng.choice(INVITE_CODE_ALPHABET) for _ in range(INVITE_CODE_LENGTH)
        )
        return f"{INVITE_CODE_PREFIX}{suffix}"
