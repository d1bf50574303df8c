"""
Per-activation session identity.

One token is generated when the application starts and tags both remote
calls of every conversion made during that run.
"""

import secrets
import string
from typing import Protocol

TOKEN_ALPHABET = string.digits + string.ascii_lowercase
TOKEN_LENGTH = 13


class RandomSource(Protocol):
    """Anything with a ``choice`` method, e.g. ``random.Random``."""

    def choice(self, seq: str) -> str: ...


def generate_session_token(rng: RandomSource | None = None, length: int = TOKEN_LENGTH) -> str:
    """
    Generate an opaque base-36 session token.

    Args:
        rng: Random source; defaults to the system CSPRNG
        length: Number of characters in the token

    Returns:
        Lowercase alphanumeric token string
    """
    if length <= 0:
        raise ValueError("Session token length must be positive")
    source = rng if rng is not None else secrets.SystemRandom()
    return "".join(source.choice(TOKEN_ALPHABET) for _ in range(length))
