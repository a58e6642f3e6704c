"""Settlement Types for GPv2 encoding.

Orders, trades and interactions as they are signed, encoded and decoded.
"""

from dataclasses import dataclass
from enum import Enum, IntEnum

from eth_utils import keccak

from .order_uid import compute_order_uid


class OrderKind(str, Enum):
    """Order kind, hashed as its string value."""

    SELL = "sell"
    BUY = "buy"


class SigningScheme(IntEnum):
    """Scheme used to sign an order, encoded as the trade's scheme discriminator."""

    TYPED_DATA = 0
    """EIP-712 typed structured data signature."""

    MESSAGE = 1
    """`eth_sign` personal message signature over the EIP-712 digest."""


@dataclass(frozen=True)
class Order:
    """Trade intent signed by an order owner."""

    sell_token: str
    """Address of the token being sold."""

    buy_token: str
    """Address of the token being bought."""

    sell_amount: int
    """Amount of sell token (uint256)."""

    buy_amount: int
    """Amount of buy token (uint256)."""

    valid_to: int
    """Unix timestamp in seconds until which the order is valid (uint32)."""

    app_data: int
    """Opaque application tag (uint32)."""

    fee_amount: int
    """Fee paid in sell token (uint256)."""

    kind: OrderKind
    """Whether the order is a sell or a buy order."""

    partially_fillable: bool
    """Whether the order may be executed in several settlements."""


@dataclass(frozen=True)
class TradeExecution:
    """Execution parameters attached to an encoded trade."""

    executed_amount: int = 0
    """Executed trade amount (uint256); its meaning depends on the order kind."""

    fee_discount: int = 0
    """Fee discount (uint16)."""


@dataclass(frozen=True)
class Trade:
    """A decoded and authenticated trade."""

    order: Order
    sell_token_index: int
    buy_token_index: int
    executed_amount: int
    fee_discount: int
    signing_scheme: SigningScheme
    signature: bytes
    """Packed `v || r || s` signature (65 bytes)."""

    owner: str
    """Checksummed address recovered from the signature."""

    order_digest: bytes

    @property
    def order_uid(self) -> bytes:
        """Order unique identifier derived from digest, owner and expiry."""
        return compute_order_uid(self.order_digest, self.owner, self.order.valid_to)


@dataclass(frozen=True)
class Interaction:
    """Arbitrary call executed as part of a settlement."""

    target: str
    """Address of the called contract."""

    call_data: bytes = b""
    """Call data, at most 2**24 - 1 bytes."""


# EIP-712 types for orders
ORDER_TYPES = {
    "Order": [
        {"name": "sellToken", "type": "address"},
        {"name": "buyToken", "type": "address"},
        {"name": "sellAmount", "type": "uint256"},
        {"name": "buyAmount", "type": "uint256"},
        {"name": "validTo", "type": "uint32"},
        {"name": "appData", "type": "uint32"},
        {"name": "feeAmount", "type": "uint256"},
        {"name": "kind", "type": "string"},
        {"name": "partiallyFillable", "type": "bool"},
    ],
}

ORDER_TYPE_STRING = (
    "Order("
    + ",".join(f"{field['type']} {field['name']}" for field in ORDER_TYPES["Order"])
    + ")"
)

ORDER_TYPE_HASH = keccak(text=ORDER_TYPE_STRING)
