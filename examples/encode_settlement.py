"""Encode and decode a GPv2 settlement.

This example signs two orders, encodes them together with an interaction,
then decodes and authenticates the encoded settlement the way the
settlement contract does.

Prerequisites:
1. pip install gpv2-sdk[examples]
2. Set environment variables (GPV2_DOMAIN_NAME, GPV2_CHAIN_ID,
   GPV2_VERIFYING_CONTRACT, TRADER_PRIVATE_KEY) or a .env file

Usage:
    python encode_settlement.py
"""

import logging
import os
import time

from dotenv import load_dotenv

load_dotenv()


def main():
    # Import here to show what's needed
    from gpv2_sdk.encoding import (
        Interaction,
        Order,
        OrderKind,
        SettlementEncoder,
        SigningScheme,
        TradeExecution,
        decode_interactions,
        decode_trades,
        domain_from_env,
    )

    logging.basicConfig(level=logging.DEBUG)

    # Configuration from environment
    TRADER_PRIVATE_KEY = os.environ.get("TRADER_PRIVATE_KEY")
    if not TRADER_PRIVATE_KEY:
        print("Missing required environment variable: TRADER_PRIVATE_KEY")
        return

    domain = domain_from_env()

    print("=" * 60)
    print("  GPV2 SETTLEMENT ENCODING")
    print("=" * 60)
    print(f"\n[1] Domain: {domain}")

    WETH = "0xC02aaA39b223FE8D0A0e5C4F27eAD9083C756Cc2"
    DAI = "0x6B175474E89094C44Da98b954EedeAC495271d0F"
    valid_to = int(time.time()) + 3600

    encoder = SettlementEncoder(domain)

    print("\n[2] Signing orders...")
    encoder.sign_encode_trade(
        Order(
            sell_token=WETH,
            buy_token=DAI,
            sell_amount=10**18,
            buy_amount=3000 * 10**18,
            valid_to=valid_to,
            app_data=0,
            fee_amount=10**15,
            kind=OrderKind.SELL,
            partially_fillable=False,
        ),
        TRADER_PRIVATE_KEY,
        SigningScheme.TYPED_DATA,
        TradeExecution(executed_amount=0),
    )
    encoder.sign_encode_trade(
        Order(
            sell_token=DAI,
            buy_token=WETH,
            sell_amount=3100 * 10**18,
            buy_amount=10**18,
            valid_to=valid_to,
            app_data=1,
            fee_amount=10**18,
            kind=OrderKind.BUY,
            partially_fillable=True,
        ),
        TRADER_PRIVATE_KEY,
        SigningScheme.MESSAGE,
        TradeExecution(executed_amount=10**18, fee_discount=100),
    )
    encoder.encode_interaction(
        Interaction(target=WETH, call_data=bytes.fromhex("d0e30db0"))  # deposit()
    )

    print(f"    Tokens: {encoder.tokens}")
    print(f"    Trades: {len(encoder.encoded_trades)} bytes")
    print(f"    Interactions: {len(encoder.encoded_interactions)} bytes")

    print("\n[3] Decoding settlement...")
    trades = decode_trades(
        encoder.tokens, encoder.encoded_trades, encoder.domain_separator
    )
    for trade in trades:
        print(f"    {trade.order.kind.value} order by {trade.owner}")
        print(f"      UID: 0x{trade.order_uid.hex()}")

    for interaction in decode_interactions(encoder.encoded_interactions, 1):
        print(f"    Call {interaction.target} with 0x{interaction.call_data.hex()}")


if __name__ == "__main__":
    main()
