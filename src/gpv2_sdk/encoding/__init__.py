"""GPv2 Settlement Encoding Module.

This module encodes, decodes and authenticates the trades and interactions
of a GPv2 batch settlement.

Key components:
- EIP-712 domain separator and order hashing
- Order unique identifiers (digest, owner, expiry)
- Order signing and owner recovery (EIP-712 and eth_sign)
- Fixed-length trade records referencing a token table
- Back-to-back length-prefixed interaction records

Example usage:
    ```python
    from gpv2_sdk.encoding import (
        Order,
        OrderKind,
        SettlementEncoder,
        SigningScheme,
        create_domain,
        decode_trades,
    )

    domain = create_domain("Gnosis Protocol", "v2", chain_id=1)
    encoder = SettlementEncoder(domain)
    encoder.sign_encode_trade(
        Order(
            sell_token="0x...",
            buy_token="0x...",
            sell_amount=42 * 10**18,
            buy_amount=13 * 10**18,
            valid_to=0xFFFFFFFF,
            app_data=0,
            fee_amount=10**18,
            kind=OrderKind.SELL,
            partially_fillable=False,
        ),
        private_key="0x...",
        scheme=SigningScheme.TYPED_DATA,
    )

    for trade in decode_trades(
        encoder.tokens, encoder.encoded_trades, encoder.domain_separator
    ):
        print(trade.owner, trade.order_uid.hex())
    ```
"""

from .types import (
    Order,
    OrderKind,
    SigningScheme,
    Trade,
    TradeExecution,
    Interaction,
    ORDER_TYPES,
    ORDER_TYPE_STRING,
    ORDER_TYPE_HASH,
)
from .errors import (
    GPv2EncodingError,
    MalformedTradeData,
    InvalidTokenIndex,
    InvalidSignature,
    InvalidInteractionData,
    InteractionCapacityExceeded,
    InvalidUidLength,
)
from .domain import (
    Domain,
    DomainConfig,
    create_domain,
    resolve_domain,
    domain_from_env,
    domain_separator,
)
from .order import hash_order, hash_order_struct, typed_data_digest
from .order_uid import (
    ORDER_UID_LENGTH,
    OrderUidParams,
    compute_order_uid,
    extract_order_uid_params,
)
from .signing import (
    SIGNING_SCHEMES,
    pack_signature,
    unpack_signature,
    sign_order,
    recover_order_signer,
)
from .trades import TRADE_STRIDE, encode_trade, decode_trade, decode_trades, trade_count
from .interactions import MAX_CALL_DATA_LENGTH, encode_interaction, decode_interactions
from .encoder import SettlementEncoder
from .utils import ZERO_ADDRESS

__all__ = [
    # Types
    "Order",
    "OrderKind",
    "OrderUidParams",
    "SigningScheme",
    "Trade",
    "TradeExecution",
    "Interaction",
    "ORDER_TYPES",
    "ORDER_TYPE_STRING",
    "ORDER_TYPE_HASH",
    # Errors
    "GPv2EncodingError",
    "MalformedTradeData",
    "InvalidTokenIndex",
    "InvalidSignature",
    "InvalidInteractionData",
    "InteractionCapacityExceeded",
    "InvalidUidLength",
    # Domain
    "Domain",
    "DomainConfig",
    "create_domain",
    "resolve_domain",
    "domain_from_env",
    "domain_separator",
    # Hashing
    "hash_order",
    "hash_order_struct",
    "typed_data_digest",
    # Order UID
    "ORDER_UID_LENGTH",
    "compute_order_uid",
    "extract_order_uid_params",
    # Signing
    "SIGNING_SCHEMES",
    "pack_signature",
    "unpack_signature",
    "sign_order",
    "recover_order_signer",
    # Trades
    "TRADE_STRIDE",
    "encode_trade",
    "decode_trade",
    "decode_trades",
    "trade_count",
    # Interactions
    "MAX_CALL_DATA_LENGTH",
    "encode_interaction",
    "decode_interactions",
    # Encoder
    "SettlementEncoder",
    # Utils
    "ZERO_ADDRESS",
]
