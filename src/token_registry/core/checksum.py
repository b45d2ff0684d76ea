"""EIP-55 address checksum helpers.

EIP-55 encodes a checksum in the letter case of a hex address: the lowercase
hex digits are hashed with keccak-256 and every letter whose matching hash
nibble is >= 8 is uppercased.

Examples:
    >>> compute_checksum("0x5aaeb6053f3e94c9b9a09f33669435e7ef1beaed")
    '0x5aAeb6053F3E94C9b9A09f33669435E7Ef1BeAed'
    >>> is_checksummed("0x5aAeb6053F3E94C9b9A09f33669435E7Ef1BeAed")
    True
"""

from __future__ import annotations

import re
from typing import NamedTuple, Optional

from Crypto.Hash import keccak

from .errors import AddressFormatError, ChecksumMismatchError

ADDRESS_PATTERN = re.compile(r"0x[0-9a-fA-F]{40}")


class ChecksumResult(NamedTuple):
    """Outcome of checking one address string."""

    is_valid: bool
    canonical_form: Optional[str]


def is_address_shaped(address: object) -> bool:
    """Return True if `address` is `0x` followed by 40 hex characters (any case)."""
    return isinstance(address, str) and ADDRESS_PATTERN.fullmatch(address) is not None


def compute_checksum(address: str) -> str:
    """Return the EIP-55 mixed-case form of an address.

    Args:
        address: `0x`-prefixed, 40 hex digit address in any letter case.

    Returns:
        The canonical checksummed address.

    Raises:
        AddressFormatError: If the input does not have the address shape.
    """
    if not is_address_shaped(address):
        raise AddressFormatError(address)

    hex_digits = address[2:].lower()
    digest = keccak.new(digest_bits=256, data=hex_digits.encode("ascii")).hexdigest()

    chars = []
    for char, nibble in zip(hex_digits, digest):
        if char in "abcdef" and int(nibble, 16) >= 8:
            chars.append(char.upper())
        else:
            chars.append(char)
    return "0x" + "".join(chars)


def is_checksummed(address: object) -> bool:
    """Return True iff `address` equals its own EIP-55 form exactly.

    Malformed input yields False rather than an exception.
    """
    if not is_address_shaped(address):
        return False
    return compute_checksum(address) == address


def checksum_result(address: object) -> ChecksumResult:
    """Check an address and return its validity together with the canonical form."""
    if not is_address_shaped(address):
        return ChecksumResult(False, None)
    canonical = compute_checksum(address)
    return ChecksumResult(canonical == address, canonical)


def ensure_checksummed(address: object) -> str:
    """Return `address` unchanged if it is EIP-55 checksummed.

    Raises:
        AddressFormatError: Malformed address shape.
        ChecksumMismatchError: Correct shape, wrong letter case.
    """
    if not is_address_shaped(address):
        raise AddressFormatError(address)
    canonical = compute_checksum(address)
    if canonical != address:
        raise ChecksumMismatchError(address, canonical)
    return address


__all__ = [
    "ADDRESS_PATTERN",
    "ChecksumResult",
    "is_address_shaped",
    "compute_checksum",
    "is_checksummed",
    "checksum_result",
    "ensure_checksummed",
]
