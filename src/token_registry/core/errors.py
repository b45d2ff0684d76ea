"""Exception types raised by the registry validation engine.

The walker catches these at entry boundaries and turns them into
violations, so a single bad entry never aborts a run.
"""

from __future__ import annotations

from typing import Optional

from .enums import RuleId


class RegistryError(Exception):
    """Base class for registry validation failures."""

    rule_id: RuleId = RuleId.IO_ERROR


class AddressFormatError(RegistryError, ValueError):
    """Address is not `0x` followed by exactly 40 hexadecimal characters."""

    rule_id = RuleId.ADDRESS_FORMAT

    def __init__(self, address: object) -> None:
        self.address = address
        super().__init__(
            f"Invalid address {address!r}: expected '0x' followed by 40 hex characters"
        )


class ChecksumMismatchError(RegistryError):
    """Address has a valid shape but is not in its EIP-55 mixed-case form."""

    rule_id = RuleId.CHECKSUM_MISMATCH

    def __init__(self, address: str, canonical: str) -> None:
        self.address = address
        self.canonical = canonical
        super().__init__(
            f"Address {address} is not EIP-55 checksummed (expected {canonical})"
        )


class ParseError(RegistryError):
    """Entry file does not contain valid JSON."""

    rule_id = RuleId.PARSE_ERROR

    def __init__(self, message: str, detail: Optional[str] = None) -> None:
        self.detail = detail
        super().__init__(message)


class RegistryIOError(RegistryError, OSError):
    """Registry directory or file could not be read."""

    rule_id = RuleId.IO_ERROR


__all__ = [
    "RegistryError",
    "AddressFormatError",
    "ChecksumMismatchError",
    "ParseError",
    "RegistryIOError",
]
