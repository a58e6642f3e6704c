"""Trade encoding for GPv2 settlements.

Trades are fixed-length records referencing a shared token table by index,
so the number of trades in a blob follows from its length alone.

| Offset | Size | Description        |
| ------ | ---- | ------------------ |
|      0 |    1 | sellTokenIndex     |
|      1 |    1 | buyTokenIndex      |
|      2 |   32 | sellAmount         |
|     34 |   32 | buyAmount          |
|     66 |    4 | validTo            |
|     70 |    4 | appData            |
|     74 |   32 | feeAmount          |
|    106 |    1 | flags              |
|    107 |   32 | executedAmount     |
|    139 |    2 | feeDiscount        |
|    141 |   65 | signature (v, r, s)|

Flags: bit 0 is the order kind (1 = buy), bit 1 is partially fillable and
bits 2-3 hold the signing scheme.
"""

import logging
from typing import List, Optional, Sequence, Union

from eth_utils import to_checksum_address

from .errors import InvalidSignature, InvalidTokenIndex, MalformedTradeData
from .order import hash_order_struct
from .signing import SIGNATURE_LENGTH, SIGNING_SCHEMES, recover_order_signer
from .types import Order, OrderKind, SigningScheme, Trade, TradeExecution
from .utils import check_uint

logger = logging.getLogger(__name__)

TRADE_STRIDE = 206

KIND_BUY_FLAG = 0x01
PARTIALLY_FILLABLE_FLAG = 0x02
SCHEME_SHIFT = 2
SCHEME_MASK = 0x03

_SELL_AMOUNT = 2
_BUY_AMOUNT = 34
_VALID_TO = 66
_APP_DATA = 70
_FEE_AMOUNT = 74
_FLAGS = 106
_EXECUTED_AMOUNT = 107
_FEE_DISCOUNT = 139
_SIGNATURE = 141


def encode_trade(
    sell_token_index: int,
    buy_token_index: int,
    order: Order,
    execution: TradeExecution,
    scheme: SigningScheme,
    signature: bytes,
) -> bytes:
    """Encode a signed order and its execution parameters as a trade record.

    Args:
        sell_token_index: Index of the sell token in the token table
        buy_token_index: Index of the buy token in the token table
        order: Signed order
        execution: Executed amount and fee discount
        scheme: Scheme the order was signed with
        signature: Packed 65-byte signature

    Returns:
        206-byte trade record

    Raises:
        ValueError: If a field does not fit its encoded width
    """
    check_uint(sell_token_index, 8, "sell_token_index")
    check_uint(buy_token_index, 8, "buy_token_index")
    check_uint(order.sell_amount, 256, "sell_amount")
    check_uint(order.buy_amount, 256, "buy_amount")
    check_uint(order.valid_to, 32, "valid_to")
    check_uint(order.app_data, 32, "app_data")
    check_uint(order.fee_amount, 256, "fee_amount")
    check_uint(execution.executed_amount, 256, "executed_amount")
    check_uint(execution.fee_discount, 16, "fee_discount")

    if scheme not in SIGNING_SCHEMES or scheme > SCHEME_MASK:
        raise ValueError(f"Unsupported signing scheme: {scheme!r}")
    if len(signature) != SIGNATURE_LENGTH:
        raise ValueError(
            f"Invalid signature length: {len(signature)}. Must be {SIGNATURE_LENGTH}"
        )

    flags = int(scheme) << SCHEME_SHIFT
    if OrderKind(order.kind) == OrderKind.BUY:
        flags |= KIND_BUY_FLAG
    if order.partially_fillable:
        flags |= PARTIALLY_FILLABLE_FLAG

    return b"".join(
        [
            sell_token_index.to_bytes(1, "big"),
            buy_token_index.to_bytes(1, "big"),
            order.sell_amount.to_bytes(32, "big"),
            order.buy_amount.to_bytes(32, "big"),
            order.valid_to.to_bytes(4, "big"),
            order.app_data.to_bytes(4, "big"),
            order.fee_amount.to_bytes(32, "big"),
            flags.to_bytes(1, "big"),
            execution.executed_amount.to_bytes(32, "big"),
            execution.fee_discount.to_bytes(2, "big"),
            bytes(signature),
        ]
    )


def trade_count(data: Union[bytes, bytearray, memoryview]) -> int:
    """Compute the number of trades in an encoded trade blob.

    Raises:
        MalformedTradeData: If the length is not a positive multiple of the stride
    """
    length = len(data)
    if length == 0 or length % TRADE_STRIDE != 0:
        raise MalformedTradeData(f"GPv2: malformed trade data of length {length}")
    return length // TRADE_STRIDE


def _read_uint(view: memoryview, offset: int, size: int) -> int:
    return int.from_bytes(view[offset : offset + size], "big")


def _token_at(tokens: Sequence[str], index: int, name: str) -> str:
    if index >= len(tokens):
        raise InvalidTokenIndex(
            f"GPv2: {name} index {index} out of range for {len(tokens)} tokens"
        )
    return tokens[index]


def _decode_trade(
    tokens: Sequence[str], view: memoryview, offset: int, separator: bytes
) -> Trade:
    sell_token_index = view[offset]
    buy_token_index = view[offset + 1]
    flags = view[offset + _FLAGS]

    try:
        scheme = SigningScheme((flags >> SCHEME_SHIFT) & SCHEME_MASK)
    except ValueError:
        raise InvalidSignature(
            f"GPv2: unsupported signing scheme in flags {flags:#04x}"
        ) from None

    order = Order(
        sell_token=_token_at(tokens, sell_token_index, "sell token"),
        buy_token=_token_at(tokens, buy_token_index, "buy token"),
        sell_amount=_read_uint(view, offset + _SELL_AMOUNT, 32),
        buy_amount=_read_uint(view, offset + _BUY_AMOUNT, 32),
        valid_to=_read_uint(view, offset + _VALID_TO, 4),
        app_data=_read_uint(view, offset + _APP_DATA, 4),
        fee_amount=_read_uint(view, offset + _FEE_AMOUNT, 32),
        kind=OrderKind.BUY if flags & KIND_BUY_FLAG else OrderKind.SELL,
        partially_fillable=bool(flags & PARTIALLY_FILLABLE_FLAG),
    )

    signature = bytes(view[offset + _SIGNATURE : offset + TRADE_STRIDE])
    order_digest = hash_order_struct(order)
    owner = recover_order_signer(order_digest, separator, scheme, signature)

    return Trade(
        order=order,
        sell_token_index=sell_token_index,
        buy_token_index=buy_token_index,
        executed_amount=_read_uint(view, offset + _EXECUTED_AMOUNT, 32),
        fee_discount=_read_uint(view, offset + _FEE_DISCOUNT, 2),
        signing_scheme=scheme,
        signature=signature,
        owner=owner,
        order_digest=order_digest,
    )


def decode_trade(
    tokens: Sequence[Union[str, bytes]],
    data: Union[bytes, bytearray, memoryview],
    separator: bytes,
    offset: int = 0,
) -> Trade:
    """Decode and authenticate the trade record starting at `offset`.

    Raises:
        MalformedTradeData: If no complete record starts at `offset`
        InvalidTokenIndex: If a token index is outside the token table
        InvalidSignature: If the signature does not recover an owner
    """
    if offset < 0 or offset + TRADE_STRIDE > len(data):
        raise MalformedTradeData(f"GPv2: no trade record at offset {offset}")

    token_table = [to_checksum_address(token) for token in tokens]
    with memoryview(data) as view:
        return _decode_trade(token_table, view, offset, separator)


def decode_trades(
    tokens: Sequence[Union[str, bytes]],
    data: Union[bytes, bytearray, memoryview],
    separator: bytes,
) -> List[Trade]:
    """Decode and authenticate every trade of an encoded trade blob.

    Records are read in place; the only allocations are the decoded trades.

    Args:
        tokens: Token table referenced by the trades
        data: Encoded trades
        separator: Domain separator the orders were signed for

    Returns:
        Trades in encoding order

    Raises:
        MalformedTradeData: If the blob length is not a multiple of the stride
        InvalidTokenIndex: If a token index is outside the token table
        InvalidSignature: If a signature does not recover an owner
    """
    count = trade_count(data)
    token_table = [to_checksum_address(token) for token in tokens]

    trades: List[Optional[Trade]] = [None] * count
    with memoryview(data) as view:
        for index in range(count):
            trades[index] = _decode_trade(
                token_table, view, index * TRADE_STRIDE, separator
            )

    logger.debug("Decoded %d trades against %d tokens", count, len(token_table))
    return trades  # type: ignore[return-value]
