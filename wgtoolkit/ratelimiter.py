"""Per-address token-bucket rate limiter for handshake messages."""

import ipaddress
import threading
import time

PACKETS_PER_SECOND = 20
PACKETS_BURSTABLE = 5
GARBAGE_COLLECT_NS = 1_000_000_000
PACKET_COST = 1_000_000_000 // PACKETS_PER_SECOND
MAX_TOKENS = PACKET_COST * PACKETS_BURSTABLE

_TICK_SECONDS = 1.0


class _Entry:
    __slots__ = ("lock", "last_time", "tokens")

    def __init__(self, last_time, tokens):
        self.lock = threading.Lock()
        self.last_time = last_time
        self.tokens = tokens


class Ratelimiter:
    """Token-bucket limiter keyed by IP address.

    ``time_now`` returns the current time in nanoseconds; it defaults to a
    monotonic clock. Call :meth:`init` (or use the limiter as a context
    manager) before :meth:`allow`.
    """

    def __init__(self, time_now=None):
        self._lock = threading.RLock()
        self._time_now = time_now or time.monotonic_ns
        self._table = None
        self._stop = None
        self._wake = None

    def _stop_collector(self):
        if self._stop is not None:
            self._stop.set()
            self._wake.set()
            self._stop = None
            self._wake = None

    def close(self):
        """Stop the background garbage collector."""
        with self._lock:
            self._stop_collector()

    def init(self):
        """Reset the table and (re)start the background garbage collector."""
        with self._lock:
            self._stop_collector()
            self._table = {}
            stop = threading.Event()
            wake = threading.Event()
            self._stop = stop
            self._wake = wake
        threading.Thread(target=self._collect, args=(stop, wake), daemon=True).start()

    def _collect(self, stop, wake):
        while True:
            wake.wait()
            if stop.is_set():
                return
            wake.clear()
            while not stop.wait(_TICK_SECONDS):
                if wake.is_set():
                    wake.clear()
                    continue
                if self.cleanup():
                    break
            if stop.is_set():
                return

    def cleanup(self):
        """Drop entries idle for more than a second; return True if the table is empty."""
        with self._lock:
            table = self._table or {}
            for key, entry in list(table.items()):
                with entry.lock:
                    if self._time_now() - entry.last_time > GARBAGE_COLLECT_NS:
                        del table[key]
            return not table

    def allow(self, ip):
        """Return True if a packet from ``ip`` may be processed now."""
        addr = ip if isinstance(ip, (ipaddress.IPv4Address, ipaddress.IPv6Address)) else ipaddress.ip_address(ip)
        with self._lock:
            if self._table is None:
                raise RuntimeError("ratelimiter is not initialised")
            entry = self._table.get(addr)
            if entry is None:
                self._table[addr] = _Entry(self._time_now(), MAX_TOKENS - PACKET_COST)
                if len(self._table) == 1 and self._wake is not None:
                    self._wake.set()
                return True

        with entry.lock:
            now = self._time_now()
            entry.tokens = min(entry.tokens + (now - entry.last_time), MAX_TOKENS)
            entry.last_time = now
            if entry.tokens > PACKET_COST:
                entry.tokens -= PACKET_COST
                return True
            return False

    def __enter__(self):
        self.init()
        return self

    def __exit__(self, *args):
        self.close()