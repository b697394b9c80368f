"""Sliding-window anti-replay filter for message counters (RFC 6479)."""

BLOCK_BIT_LOG = 6
BLOCK_BITS = 1 << BLOCK_BIT_LOG
RING_BLOCKS = 1 << 7
WINDOW_SIZE = (RING_BLOCKS - 1) * BLOCK_BITS

_BLOCK_MASK = RING_BLOCKS - 1
_BIT_MASK = BLOCK_BITS - 1


class Filter:
    """Rejects replayed counters within a sliding window of seen values.

    A fresh filter is empty and ready to use. Not safe for concurrent use.
    """

    __slots__ = ("_last", "_ring")

    def __init__(self):
        self._last = 0
        self._ring = [0] * RING_BLOCKS

    def reset(self):
        """Return the filter to its empty state."""
        self._last = 0
        self._ring[0] = 0

    def validate_counter(self, counter, limit):
        """Return True if ``counter`` is new and below ``limit``, and record it."""
        if counter >= limit:
            return False
        index_block = counter >> BLOCK_BIT_LOG
        if counter > self._last:
            current = self._last >> BLOCK_BIT_LOG
            diff = min(index_block - current, RING_BLOCKS)
            for i in range(current + 1, current + diff + 1):
                self._ring[i & _BLOCK_MASK] = 0
            self._last = counter
        elif self._last - counter > WINDOW_SIZE:
            return False
        index_block &= _BLOCK_MASK
        bit = 1 << (counter & _BIT_MASK)
        old = self._ring[index_block]
        self._ring[index_block] = old | bit
        return not old & bit