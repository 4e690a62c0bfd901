"""Helpers for hex strings as they travel over the wire."""

from web3 import Web3

HEX_PREFIX: str = "0x"


def has_hex_prefix(value: str) -> bool:
    """Check for a leading 0x or 0X marker."""
    return value[:2].lower() == HEX_PREFIX


def prefix_hex(value: str) -> str:
    """Return value with a leading lowercase 0x marker. Idempotent."""
    return HEX_PREFIX + unprefix_hex(value)


def unprefix_hex(value: str) -> str:
    """Return value without its leading 0x marker, if it has one."""
    return value[2:] if has_hex_prefix(value) else value


def unhexint(value: str) -> int:
    """Parse a hex numeral, with or without marker, into an int.

    Raises:
        ValueError: If value is not a hex numeral
    """
    return Web3.to_int(hexstr=prefix_hex(value))
