"""Order hashing for GPv2 settlements.

The order digest is the EIP-712 struct hash of an order. It identifies the
order independently of its owner and, combined with the domain separator,
forms the digest that owners sign.
"""

from typing import Any, Dict

from eth_abi import encode
from eth_utils import keccak

from .domain import Domain, domain_separator
from .types import ORDER_TYPE_HASH, Order, OrderKind


def order_message_data(order: Order) -> Dict[str, Any]:
    """EIP-712 message data for an order, keyed by schema field names."""
    return {
        "sellToken": order.sell_token,
        "buyToken": order.buy_token,
        "sellAmount": order.sell_amount,
        "buyAmount": order.buy_amount,
        "validTo": order.valid_to,
        "appData": order.app_data,
        "feeAmount": order.fee_amount,
        "kind": OrderKind(order.kind).value,
        "partiallyFillable": order.partially_fillable,
    }


def hash_order_struct(order: Order) -> bytes:
    """Compute the EIP-712 struct hash of an order.

    Args:
        order: Order to hash

    Returns:
        32-byte order digest
    """
    # Equals the `.body` of encode_typed_data for the same order.
    # Types: bytes32, address, address, uint256, uint256, uint32, uint32,
    # uint256, bytes32 (hashed string), bool
    encoded = encode(
        [
            "bytes32",
            "address",
            "address",
            "uint256",
            "uint256",
            "uint32",
            "uint32",
            "uint256",
            "bytes32",
            "bool",
        ],
        [
            ORDER_TYPE_HASH,
            order.sell_token,
            order.buy_token,
            order.sell_amount,
            order.buy_amount,
            order.valid_to,
            order.app_data,
            order.fee_amount,
            keccak(text=OrderKind(order.kind).value),
            order.partially_fillable,
        ],
    )
    return keccak(encoded)


def typed_data_digest(separator: bytes, order_digest: bytes) -> bytes:
    """Combine a domain separator and an order digest into the EIP-712 signing digest."""
    return keccak(b"\x19\x01" + separator + order_digest)


def hash_order(domain: Domain, order: Order) -> bytes:
    """Compute the domain-bound EIP-712 digest of an order.

    Args:
        domain: EIP-712 domain
        order: Order to hash

    Returns:
        32-byte digest signed under the TYPED_DATA scheme
    """
    return typed_data_digest(domain_separator(domain), hash_order_struct(order))
