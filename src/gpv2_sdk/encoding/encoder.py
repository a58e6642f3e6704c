"""Settlement encoder for GPv2.

Accumulates signed trades and interactions into the encoded blobs consumed
by the settlement decoder, collecting the token table as it goes.
"""

from typing import Dict, List, Optional

from .domain import Domain, domain_separator
from .interactions import encode_interaction
from .signing import sign_order
from .trades import encode_trade
from .types import Interaction, Order, SigningScheme, TradeExecution
from .utils import normalize_address

# Token indices are encoded as a single byte
MAX_TOKENS = 256


class SettlementEncoder:
    """Builder for encoded settlement trades and interactions.

    Example:
        ```python
        encoder = SettlementEncoder(create_domain("Gnosis Protocol", "v2", 1))
        encoder.sign_encode_trade(order, private_key, SigningScheme.TYPED_DATA)
        encoder.encode_interaction(Interaction(target="0x...", call_data=b"..."))

        trades = decode_trades(
            encoder.tokens, encoder.encoded_trades, encoder.domain_separator
        )
        ```
    """

    def __init__(self, domain: Domain):
        """Initialize the encoder.

        Args:
            domain: EIP-712 domain orders are signed for
        """
        self.domain = domain
        self.domain_separator = domain_separator(domain)
        self._tokens: List[str] = []
        self._token_indices: Dict[str, int] = {}
        self._trades: List[bytes] = []
        self._interactions: List[bytes] = []

    @property
    def tokens(self) -> List[str]:
        """Token table, in order of first use. Returns a copy."""
        return list(self._tokens)

    @property
    def trade_count(self) -> int:
        return len(self._trades)

    @property
    def encoded_trades(self) -> bytes:
        return b"".join(self._trades)

    @property
    def encoded_interactions(self) -> bytes:
        return b"".join(self._interactions)

    def token_index(self, token: str) -> int:
        """Get the index of a token, adding it to the token table if needed.

        Raises:
            ValueError: If the token is invalid or the table is full
        """
        token = normalize_address(token, "token")
        index = self._token_indices.get(token)
        if index is None:
            if len(self._tokens) >= MAX_TOKENS:
                raise ValueError(f"Too many tokens. Maximum: {MAX_TOKENS}")
            index = len(self._tokens)
            self._tokens.append(token)
            self._token_indices[token] = index
        return index

    def encode_trade(
        self,
        order: Order,
        signature: bytes,
        scheme: SigningScheme,
        execution: Optional[TradeExecution] = None,
    ) -> None:
        """Append a trade for an already signed order.

        Args:
            order: Signed order
            signature: Packed 65-byte signature
            scheme: Scheme the order was signed with
            execution: Execution parameters (default: zero executed amount and discount)
        """
        self._trades.append(
            encode_trade(
                self.token_index(order.sell_token),
                self.token_index(order.buy_token),
                order,
                execution or TradeExecution(),
                scheme,
                signature,
            )
        )

    def sign_encode_trade(
        self,
        order: Order,
        private_key: str,
        scheme: SigningScheme,
        execution: Optional[TradeExecution] = None,
    ) -> bytes:
        """Sign an order with a private key and append it as a trade.

        Returns:
            The packed signature
        """
        signature = sign_order(order, self.domain, scheme, private_key)
        self.encode_trade(order, signature, scheme, execution)
        return signature

    def encode_interaction(self, interaction: Interaction) -> None:
        """Append an interaction."""
        self._interactions.append(encode_interaction(interaction))
