"""Building blocks of a userspace WireGuard daemon: replay filter, rate limiter,
TAI64N timestamps, timers, cancellable I/O, packet framing, peer names and the
configuration socket."""

__version__ = "0.1.0"