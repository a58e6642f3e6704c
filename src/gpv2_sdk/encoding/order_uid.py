"""Order unique identifiers.

An order UID packs the order digest, the owner address and the order expiry
into 56 bytes: `order_digest(32) || owner(20) || valid_to(4)`. Only the
length is validated here; the pairing of digest and owner is established by
signature recovery.
"""

from dataclasses import dataclass
from typing import Union

from eth_utils import (
    hexstr_if_str,
    is_address,
    to_bytes,
    to_canonical_address,
    to_checksum_address,
)

from .errors import InvalidUidLength

ORDER_DIGEST_LENGTH = 32
ADDRESS_LENGTH = 20
VALID_TO_LENGTH = 4
ORDER_UID_LENGTH = ORDER_DIGEST_LENGTH + ADDRESS_LENGTH + VALID_TO_LENGTH


@dataclass(frozen=True)
class OrderUidParams:
    """Components of an order unique identifier."""

    order_digest: bytes
    """EIP-712 struct hash of the order (32 bytes)."""

    owner: str
    """Checksummed address of the order owner."""

    valid_to: int
    """Order expiry timestamp (uint32)."""


def compute_order_uid(order_digest: bytes, owner: str, valid_to: int) -> bytes:
    """Compute the 56-byte unique identifier of an order.

    Args:
        order_digest: 32-byte order digest
        owner: Address of the order owner
        valid_to: Order expiry timestamp (uint32)

    Returns:
        56-byte order UID

    Raises:
        ValueError: If an input does not fit its fixed width
    """
    if len(order_digest) != ORDER_DIGEST_LENGTH:
        raise ValueError(f"Invalid order digest length: {len(order_digest)}")
    if not is_address(owner):
        raise ValueError(f"Invalid owner: {owner}")
    if not 0 <= valid_to < 2**32:
        raise ValueError(f"Invalid valid_to: {valid_to}")

    return (
        bytes(order_digest)
        + to_canonical_address(owner)
        + valid_to.to_bytes(VALID_TO_LENGTH, "big")
    )


def extract_order_uid_params(order_uid: Union[bytes, str]) -> OrderUidParams:
    """Split an order UID into its components.

    Args:
        order_uid: Order UID as bytes or 0x-prefixed hex string

    Returns:
        Order digest, checksummed owner and expiry

    Raises:
        InvalidUidLength: If the UID is not exactly 56 bytes
    """
    uid = hexstr_if_str(to_bytes, order_uid)
    if len(uid) != ORDER_UID_LENGTH:
        raise InvalidUidLength(f"GPv2: invalid uid length {len(uid)}")

    owner_end = ORDER_DIGEST_LENGTH + ADDRESS_LENGTH
    return OrderUidParams(
        order_digest=uid[:ORDER_DIGEST_LENGTH],
        owner=to_checksum_address(uid[ORDER_DIGEST_LENGTH:owner_end]),
        valid_to=int.from_bytes(uid[owner_end:], "big"),
    )
