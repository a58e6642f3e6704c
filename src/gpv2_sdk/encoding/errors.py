"""Errors raised while decoding settlement data.

Every error is a whole-operation failure: callers must reject the entire
batch, there is no partial result.
"""


class GPv2EncodingError(ValueError):
    """Base class for settlement encoding errors."""


class MalformedTradeData(GPv2EncodingError):
    """Raised when a trade blob is not a positive multiple of the record size."""


class InvalidTokenIndex(GPv2EncodingError, IndexError):
    """Raised when a trade references a token outside the token table."""


class InvalidSignature(GPv2EncodingError):
    """Raised when an order signature is malformed or does not recover a signer."""


class InvalidInteractionData(GPv2EncodingError):
    """Raised when an interaction record is truncated."""


class InteractionCapacityExceeded(GPv2EncodingError, IndexError):
    """Raised when more interactions are encoded than the declared count."""


class InvalidUidLength(GPv2EncodingError):
    """Raised when an order UID is not exactly 56 bytes."""
