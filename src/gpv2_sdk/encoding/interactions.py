"""Interaction encoding for GPv2 settlements.

Interactions are packed back to back with no padding:

    target(20) || call data length(3, big-endian) || call data

For example, a call to 0x73c14081446bd1e4eb165250e826e80c5a523783 with
call data 0x000102030405060708090a0b0c0d0e0f is encoded as:

    0x73c14081446bd1e4eb165250e826e80c5a523783 000010 000102030405060708090a0b0c0d0e0f
"""

import logging
from typing import List, Optional, Union

from eth_utils import to_canonical_address, to_checksum_address

from .errors import InteractionCapacityExceeded, InvalidInteractionData
from .types import Interaction

logger = logging.getLogger(__name__)

TARGET_LENGTH = 20
CALL_DATA_LENGTH_SIZE = 3
INTERACTION_HEADER_LENGTH = TARGET_LENGTH + CALL_DATA_LENGTH_SIZE
MAX_CALL_DATA_LENGTH = 2 ** (8 * CALL_DATA_LENGTH_SIZE) - 1


def encode_interaction(interaction: Interaction) -> bytes:
    """Encode an interaction record.

    Raises:
        ValueError: If the call data does not fit the 3-byte length field
    """
    call_data = bytes(interaction.call_data)
    if len(call_data) > MAX_CALL_DATA_LENGTH:
        raise ValueError(
            f"Call data too long: {len(call_data)} bytes. "
            f"Maximum: {MAX_CALL_DATA_LENGTH}"
        )

    return (
        to_canonical_address(interaction.target)
        + len(call_data).to_bytes(CALL_DATA_LENGTH_SIZE, "big")
        + call_data
    )


def decode_interactions(
    data: Union[bytes, bytearray, memoryview], expected_count: int
) -> List[Interaction]:
    """Decode back-to-back interaction records.

    The whole input is parsed; `expected_count` only bounds how many records
    may be produced. Bytes left over after `expected_count` records are parsed
    as another record and therefore fail.

    Args:
        data: Encoded interactions
        expected_count: Capacity of the output

    Returns:
        Interactions in encoding order

    Raises:
        InteractionCapacityExceeded: If more than `expected_count` records are present
        InvalidInteractionData: If a record is truncated
    """
    interactions: List[Optional[Interaction]] = [None] * expected_count
    length = len(data)
    cursor = 0
    index = 0

    with memoryview(data) as view:
        while cursor < length:
            if index >= expected_count:
                raise InteractionCapacityExceeded(
                    f"GPv2: more than {expected_count} interactions encoded"
                )
            if cursor + INTERACTION_HEADER_LENGTH > length:
                raise InvalidInteractionData("GPv2: invalid interaction")

            target = view[cursor : cursor + TARGET_LENGTH]
            call_data_length = int.from_bytes(
                view[cursor + TARGET_LENGTH : cursor + INTERACTION_HEADER_LENGTH],
                "big",
            )
            call_data_start = cursor + INTERACTION_HEADER_LENGTH
            call_data_end = call_data_start + call_data_length
            if call_data_end > length:
                raise InvalidInteractionData("GPv2: invalid interaction")

            interactions[index] = Interaction(
                target=to_checksum_address(bytes(target)),
                call_data=bytes(view[call_data_start:call_data_end]),
            )
            index += 1
            cursor = call_data_end

    del interactions[index:]
    logger.debug("Decoded %d interactions", index)
    return interactions  # type: ignore[return-value]
