"""Hex/UTF-8/JSON decoding of values stored in TZIP-16 metadata big-maps.

Big-map values of type ``bytes`` reach Python as hex strings. Every
function here is strict and raises ``ValueError`` (or a subclass such as
``UnicodeDecodeError`` and ``json.JSONDecodeError``) on malformed input; the
resolver converts these into
[DecodingError][tzmeta.core.exceptions.DecodingError].
"""

from __future__ import annotations

import json
import re
from typing import Any


_HEX_PATTERN = re.compile(r"(?:[0-9a-fA-F]{2})*")


def hex_to_text(value: str) -> str:
    """Decode a hex digit stream into UTF-8 text.

    Args:
        value: Even-length string of hex digits, without ``0x`` prefix or
            separators.

    Returns:
        The decoded text.

    Raises:
        ValueError: If *value* is not a string of hex digit pairs.
        UnicodeDecodeError: If the bytes are not valid UTF-8.
    """
    if not isinstance(value, str):
        raise ValueError(f"Expected hex string, got {type(value).__name__}")
    if _HEX_PATTERN.fullmatch(value) is None:
        raise ValueError("Hex string must contain an even number of hex digits")
    return bytes.fromhex(value).decode("utf-8")


def _reject_constant(name: str) -> Any:
    raise ValueError(f"Invalid JSON constant: {name}")


def parse_json(text: str | bytes) -> Any:
    """Parse a JSON document strictly.

    ``NaN``, ``Infinity`` and ``-Infinity`` are rejected since they are not
    part of RFC 8259.

    Raises:
        json.JSONDecodeError: If the document is malformed.
        ValueError: If the document uses a non-standard constant.
    """
    return json.loads(text, parse_constant=_reject_constant)


def decode_hex_json(value: str) -> Any:
    """Decode a hex-encoded UTF-8 JSON document."""
    return parse_json(hex_to_text(value))
