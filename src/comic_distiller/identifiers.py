"""Unique identifiers for generated documents."""

import logging
import os
import time

logger = logging.getLogger(__name__)


def generate_identifier() -> str:
    """Generate a random version 4 style identifier.

    The result is five hyphen-separated hex groups of 4-2-2-2-6 bytes with
    the version nibble of byte 6 set to 4 and the variant bits of byte 8 set
    to ``10``. When the system randomness source is unavailable, the hex of
    the current time in nanoseconds is returned instead.

    Returns:
        Identifier string such as ``"1b4e28ba-2fa1-41d2-883f-0016d3cca427"``
    """
    try:
        raw = bytearray(os.urandom(16))
    except (NotImplementedError, OSError) as e:
        logger.warning(f"Random source unavailable, using time-based identifier: {e}")
        return f"{time.time_ns():x}"

    raw[6] = (raw[6] & 0x0F) | 0x40
    raw[8] = (raw[8] & 0x3F) | 0x80
    return "-".join(
        raw[start:end].hex()
        for start, end in ((0, 4), (4, 6), (6, 8), (8, 10), (10, 16))
    )
