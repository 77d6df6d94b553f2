"""Tezos address validation.

Addresses are base58check strings: a fixed binary prefix that spells the
human-readable prefix (``tz1``, ``KT1``, ...) followed by a 20-byte hash,
with a 4-byte double-SHA256 checksum appended before encoding.

Examples:
    ```python
    from tzmeta.utils.address import validate_contract_address

    validate_contract_address("KT1XRT495WncnqNmqKn4tkuRiDJzEiR4N2C9")  # None
    validate_contract_address("tz1Ts3m2dXTXB66XN7cg5ALiAvzZY6AxrFd9")
    # 'Only KT contract address allowed'
    ```
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Final

import base58


ADDRESS_PREFIXES: Final = MappingProxyType(
    {
        "tz1": bytes((6, 161, 159)),
        "tz2": bytes((6, 161, 161)),
        "tz3": bytes((6, 161, 164)),
        "tz4": bytes((6, 161, 166)),
        "KT1": bytes((2, 90, 121)),
        "sr1": bytes((6, 124, 117)),
    }
)
"""Binary prefix of each supported address kind, keyed by its encoded prefix."""

_HASH_LENGTH = 20


def is_address_valid(address: str) -> bool:
    """Return True if *address* is a well-formed base58check Tezos address."""
    if not isinstance(address, str):
        return False
    prefix = ADDRESS_PREFIXES.get(address[:3])
    if prefix is None:
        return False
    try:
        decoded = base58.b58decode_check(address)
    except ValueError:
        return False
    return decoded.startswith(prefix) and len(decoded) == len(prefix) + _HASH_LENGTH


def is_kt_address(address: str) -> bool:
    """Return True if *address* names an originated contract (``KT`` prefix)."""
    return isinstance(address, str) and address.startswith("KT")


def validate_contract_address(address: str) -> str | None:
    """Check that *address* is a valid contract address.

    Returns:
        ``None`` when the address is valid, otherwise a short reason:
        ``"Invalid address"`` or ``"Only KT contract address allowed"``.
    """
    if not is_address_valid(address):
        return "Invalid address"
    if not is_kt_address(address):
        return "Only KT contract address allowed"
    return None
