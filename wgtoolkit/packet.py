"""Transport packet framing: header layout, padding and queue sizing constants."""

import struct

QUEUE_OUTBOUND_SIZE = 1024
QUEUE_INBOUND_SIZE = 1024
QUEUE_HANDSHAKE_SIZE = 1024
MAX_SEGMENT_SIZE = (1 << 16) - 1  # largest possible UDP datagram
PREALLOCATED_BUFFERS_PER_POOL = 0  # no cap: pools grow without limit

MESSAGE_TRANSPORT_TYPE = 4
PADDING_MULTIPLE = 16

_HEADER = struct.Struct("<IIQ")
TRANSPORT_HEADER_SIZE = _HEADER.size
TRANSPORT_OFFSET_RECEIVER = 4
TRANSPORT_OFFSET_COUNTER = 8
TRANSPORT_OFFSET_CONTENT = TRANSPORT_HEADER_SIZE

_UINT32_MAX = (1 << 32) - 1
_UINT64_MAX = (1 << 64) - 1


def _round_up(size):
    return (size + PADDING_MULTIPLE - 1) & ~(PADDING_MULTIPLE - 1)


def padding_size(packet_size, mtu):
    """Return how many zero bytes to append to a plaintext packet before sealing.

    Packets are padded to a multiple of 16 bytes, but never beyond the MTU.
    An ``mtu`` of zero means the MTU is unknown and only the rounding applies.
    """
    last_unit = packet_size
    if mtu == 0:
        return _round_up(last_unit) - last_unit
    if last_unit > mtu:
        last_unit %= mtu
    padded = min(_round_up(last_unit), mtu)
    return padded - last_unit


def transport_header(receiver, nonce):
    """Build the 16-byte header of a transport message.

    The header holds the message type, the receiver's index and the nonce,
    all little-endian.
    """
    if not 0 <= receiver <= _UINT32_MAX:
        raise ValueError(f"receiver index out of range: {receiver}")
    if not 0 <= nonce <= _UINT64_MAX:
        raise ValueError(f"nonce out of range: {nonce}")
    return _HEADER.pack(MESSAGE_TRANSPORT_TYPE, receiver, nonce)