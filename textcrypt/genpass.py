"""
Random password generator.

Used directly by the `genpass` command and, with every character class
enabled, as the key source for BLAKE3 keys.

At least one character of each enabled class is placed in the password,
the rest is drawn from the union of the enabled classes, and the result
is shuffled.
"""

import logging
import random
import secrets
from typing import Optional

from zxcvbn import zxcvbn

from . import config
from .errors import ConfigError

logger = logging.getLogger(__name__)


def process_genpass(length: int = config.DEFAULT_PASSWORD_LENGTH,
                    upper: bool = True,
                    lower: bool = True,
                    number: bool = True,
                    symbol: bool = True,
                    rng: Optional[random.Random] = None) -> str:
    """
    Generate a password of exactly `length` ASCII characters.

    rng defaults to a fresh secrets.SystemRandom (OS entropy). Pass a
    seeded random.Random only in tests.
    """
    if rng is None:
        rng = secrets.SystemRandom()

    classes = [cls for enabled, cls in ((upper,  config.UPPER),
                                        (lower,  config.LOWER),
                                        (number, config.NUMBER),
                                        (symbol, config.SYMBOL)) if enabled]
    if not classes:
        raise ConfigError("At least one character class must be enabled.")
    if not len(classes) <= length <= config.MAX_PASSWORD_LENGTH:
        raise ConfigError(
            f"Password length must be between {len(classes)} and "
            f"{config.MAX_PASSWORD_LENGTH}, got {length}."
        )

    chars = b"".join(classes)
    password = [rng.choice(cls) for cls in classes]
    password += [rng.choice(chars) for _ in range(length - len(password))]
    rng.shuffle(password)

    logger.debug(f"Generated {length}-char password from {len(chars)} symbols")
    return bytes(password).decode("ascii")


def estimate_strength(password: str) -> int:
    """zxcvbn score, 0 (weakest) to 4 (strongest)."""
    # recent zxcvbn releases reject input over 72 characters
    return zxcvbn(password[:72])["score"]
