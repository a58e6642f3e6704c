"""Utility functions for GPv2 settlement encoding."""

from typing import Union

from eth_utils import is_address, to_checksum_address

# Zero address
ZERO_ADDRESS = "0x0000000000000000000000000000000000000000"


def check_uint(value: int, bits: int, name: str) -> int:
    """Check that a value fits an unsigned integer of the given width.

    Args:
        value: Value to check
        bits: Width in bits (e.g., 256)
        name: Field name used in the error message

    Returns:
        The value, unchanged

    Raises:
        ValueError: If the value is negative or too large
    """
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"Invalid {name}: {value!r}. Must be an integer")
    if not 0 <= value < 2**bits:
        raise ValueError(f"Invalid {name}: {value}. Must fit in uint{bits}")
    return value


def normalize_address(address: Union[str, bytes], name: str = "address") -> str:
    """Validate an address and return it checksummed.

    Args:
        address: Hex string or 20 raw bytes
        name: Field name used in the error message

    Raises:
        ValueError: If the address is invalid
    """
    if not is_address(address):
        raise ValueError(f"Invalid {name}: {address!r}")
    return to_checksum_address(address)
