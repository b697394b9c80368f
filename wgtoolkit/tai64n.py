"""TAI64N timestamps with whitened sub-second precision."""

import time
from datetime import datetime, timedelta, timezone

TIMESTAMP_SIZE = 12
_BASE = 0x400000000000000A
_WHITENER_MASK = 0x1000000 - 1
_NANOS_PER_SECOND = 1_000_000_000
_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


class Timestamp(bytes):
    """A 12-byte TAI64N timestamp; byte order equals time order."""

    def __new__(cls, data=bytes(TIMESTAMP_SIZE)):
        if len(data) != TIMESTAMP_SIZE:
            raise ValueError(f"timestamp must be {TIMESTAMP_SIZE} bytes, got {len(data)}")
        return super().__new__(cls, data)

    def after(self, other):
        """Return True if this timestamp is strictly later than ``other``."""
        return bytes(self) > bytes(other)

    def __str__(self):
        secs = (int.from_bytes(self[:8], "big") - _BASE) % (1 << 64)
        if secs >= 1 << 63:
            secs -= 1 << 64
        nanos = int.from_bytes(self[8:], "big")
        extra, nanos = divmod(nanos, _NANOS_PER_SECOND)
        moment = _EPOCH + timedelta(seconds=secs + extra)
        text = (
            f"{moment.year:04d}-{moment.month:02d}-{moment.day:02d} "
            f"{moment.hour:02d}:{moment.minute:02d}:{moment.second:02d}"
        )
        if nanos:
            text += "." + f"{nanos:09d}".rstrip("0")
        return text + " +0000 UTC"

    def __repr__(self):
        return f"Timestamp({bytes(self)!r})"


def stamp(unix_nanos):
    """Build a timestamp from nanoseconds since the Unix epoch."""
    secs, nanos = divmod(unix_nanos, _NANOS_PER_SECOND)
    nanos &= ~_WHITENER_MASK
    return Timestamp(
        ((_BASE + secs) % (1 << 64)).to_bytes(8, "big") + nanos.to_bytes(4, "big")
    )


def now():
    """Return the timestamp for the current time."""
    return stamp(time.time_ns())