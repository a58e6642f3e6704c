"""Order signing and signer recovery for GPv2 settlements.

Each signing scheme maps to a rule deriving the EIP-191 message that is
actually signed from the domain separator and the order digest:

- TYPED_DATA: `0x19 0x01 || domain_separator || order_digest` (EIP-712)
- MESSAGE: `"\\x19Ethereum Signed Message:\\n32" || eip712_digest` (eth_sign)

Signatures are packed as `v(1) || r(32) || s(32)`.
"""

import logging
from typing import Callable, Dict, Tuple

from eth_account import Account
from eth_account.messages import SignableMessage, encode_defunct

from .domain import Domain, domain_separator
from .errors import InvalidSignature
from .order import hash_order_struct, typed_data_digest
from .types import Order, SigningScheme
from .utils import ZERO_ADDRESS

logger = logging.getLogger(__name__)

SIGNATURE_LENGTH = 65
VALID_V = (27, 28)


def _typed_data_message(separator: bytes, order_digest: bytes) -> SignableMessage:
    return SignableMessage(version=b"\x01", header=separator, body=order_digest)


def _eth_sign_message(separator: bytes, order_digest: bytes) -> SignableMessage:
    return encode_defunct(primitive=typed_data_digest(separator, order_digest))


# Digest derivation per signing scheme
SIGNING_SCHEMES: Dict[SigningScheme, Callable[[bytes, bytes], SignableMessage]] = {
    SigningScheme.TYPED_DATA: _typed_data_message,
    SigningScheme.MESSAGE: _eth_sign_message,
}


def signing_message(
    separator: bytes, order_digest: bytes, scheme: SigningScheme
) -> SignableMessage:
    """Build the message signed for an order under a signing scheme.

    Raises:
        InvalidSignature: If the scheme is not supported
    """
    try:
        derive = SIGNING_SCHEMES[scheme]
    except KeyError:
        raise InvalidSignature(f"GPv2: unsupported signing scheme {scheme!r}") from None
    return derive(separator, order_digest)


def pack_signature(v: int, r: int, s: int) -> bytes:
    """Pack signature components as `v || r || s`."""
    return v.to_bytes(1, "big") + r.to_bytes(32, "big") + s.to_bytes(32, "big")


def unpack_signature(signature: bytes) -> Tuple[int, int, int]:
    """Split a packed signature into (v, r, s).

    Raises:
        InvalidSignature: If the signature is not 65 bytes
    """
    if len(signature) != SIGNATURE_LENGTH:
        raise InvalidSignature(f"GPv2: invalid signature length {len(signature)}")
    return (
        signature[0],
        int.from_bytes(signature[1:33], "big"),
        int.from_bytes(signature[33:65], "big"),
    )


def sign_order(
    order: Order,
    domain: Domain,
    scheme: SigningScheme,
    private_key: str,
) -> bytes:
    """Sign an order with a private key.

    Args:
        order: Order to sign
        domain: EIP-712 domain of the settlement contract
        scheme: Signing scheme
        private_key: Private key (hex string with or without 0x prefix)

    Returns:
        Packed 65-byte signature
    """
    message = signing_message(
        domain_separator(domain), hash_order_struct(order), scheme
    )
    account = Account.from_key(private_key)
    signed_message = account.sign_message(message)
    return pack_signature(signed_message.v, signed_message.r, signed_message.s)


def recover_order_signer(
    order_digest: bytes,
    separator: bytes,
    scheme: SigningScheme,
    signature: bytes,
) -> str:
    """Recover the address that signed an order.

    Args:
        order_digest: EIP-712 struct hash of the order
        separator: Domain separator the order was signed for
        scheme: Signing scheme
        signature: Packed 65-byte signature

    Returns:
        Checksummed owner address

    Raises:
        InvalidSignature: If the signature is malformed or recovers no signer
    """
    v, r, s = unpack_signature(signature)
    if v not in VALID_V:
        raise InvalidSignature(f"GPv2: invalid signature v value {v}")

    message = signing_message(separator, order_digest, scheme)
    try:
        owner = Account.recover_message(message, vrs=(v, r, s))
    except Exception as exc:
        logger.debug("Signature recovery failed: %s", exc)
        raise InvalidSignature("GPv2: invalid signature") from exc

    if owner == ZERO_ADDRESS:
        raise InvalidSignature("GPv2: invalid signature")

    return owner
