"""
Short Code Generator

Produces random candidate codes. Candidates are not checked for uniqueness
here; the mapping store's unique index rejects collisions and the
shortening service draws again.

With 62^8 (about 2.2e14) possible codes, collisions are rare but possible.
"""

import random
import string

from shortener.db.models import SHORT_CODE_LENGTH

ALPHABET = string.digits + string.ascii_lowercase + string.ascii_uppercase

# SystemRandom reads os.urandom and keeps no state between draws
_random = random.SystemRandom()


def generate_short_code(length: int = SHORT_CODE_LENGTH) -> str:
    """
    Draw a code of `length` characters uniformly from ALPHABET.

    Example:
        generate_short_code() -> "aZ3kQ9xB"
    """
    return "".join(_random.choices(ALPHABET, k=length))
