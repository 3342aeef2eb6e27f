"""Payload decoding for device telemetry topics.

Device payloads are short ASCII decimal strings (``"0"``, ``"1"``,
``"-67"``). Malformed input never propagates: :func:`parse_integer`
substitutes a caller-chosen fallback.
"""

from __future__ import annotations

import logging
import re

from pytics.exceptions import TicsParseError

_LOGGER = logging.getLogger(__name__)

_INTEGER_RE = re.compile(r"[+-]?[0-9]+")
_INT32_MIN = -(2**31)
_INT32_MAX = 2**31 - 1
_MAX_DIGITS = len(str(_INT32_MAX))


def decode_payload(payload: bytes) -> str:
    """Decode raw MQTT bytes into text; undecodable bytes are replaced."""
    return payload.decode("ascii", errors="replace")


def parse_integer_strict(payload: str) -> int:
    """Parse a 32-bit decimal integer, raising :class:`TicsParseError` on failure.

    Surrounding whitespace is tolerated; anything else (decimals, hex,
    embedded spaces, empty input, values outside the signed 32-bit range)
    is rejected.
    """
    text = payload.strip()
    if not _INTEGER_RE.fullmatch(text):
        raise TicsParseError(f"not a decimal integer: {payload!r}", payload=payload)
    if len(text.lstrip("+-").lstrip("0")) > _MAX_DIGITS:
        raise TicsParseError(f"integer out of range: {payload!r}", payload=payload)
    try:
        value = int(text)
    except ValueError as exc:
        raise TicsParseError(f"not a decimal integer: {payload!r}", payload=payload) from exc
    if not _INT32_MIN <= value <= _INT32_MAX:
        raise TicsParseError(f"integer out of range: {payload!r}", payload=payload)
    return value


def parse_integer(payload: str, fallback: int) -> int:
    """Parse a decimal integer, returning *fallback* for malformed input."""
    try:
        return parse_integer_strict(payload)
    except TicsParseError:
        _LOGGER.debug("Malformed payload %r, using fallback %s", payload, fallback)
        return fallback
