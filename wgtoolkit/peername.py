"""Peer display names and the peer's roaming endpoint slot."""

import base64
import threading

PUBLIC_KEY_SIZE = 32


def peer_name(public_key):
    """Return the short display name of a peer, e.g. ``peer(AAAA…AAAA)``.

    The name shows the first four and the last four significant characters
    of the standard base64 encoding of the 32-byte public key.
    """
    key = bytes(public_key)
    if len(key) != PUBLIC_KEY_SIZE:
        raise ValueError(f"public key must be {PUBLIC_KEY_SIZE} bytes, got {len(key)}")
    encoded = base64.b64encode(key).decode("ascii")
    return f"peer({encoded[0:4]}…{encoded[39:43]})"


class PeerEndpoint:
    """The remote endpoint a peer is reached at.

    The endpoint follows the source of authenticated packets (roaming)
    unless ``disable_roaming`` is set. The source address can be marked for
    clearing; it is then cleared on the endpoint just before the next
    transmission. Endpoints are objects with a ``clear_src()`` method.
    """

    def __init__(self, endpoint=None, disable_roaming=False):
        self._lock = threading.Lock()
        self._value = endpoint
        self._clear_src_on_tx = False
        self.disable_roaming = disable_roaming

    @property
    def value(self):
        """The endpoint currently known for the peer, or None."""
        with self._lock:
            return self._value

    @property
    def clear_src_pending(self):
        """True if the source address will be cleared before the next send."""
        with self._lock:
            return self._clear_src_on_tx

    def set_from_packet(self, endpoint):
        """Adopt the endpoint an authenticated packet came from, unless roaming is disabled."""
        with self._lock:
            if self.disable_roaming:
                return
            self._clear_src_on_tx = False
            self._value = endpoint

    def mark_src_for_clearing(self):
        """Ask for the endpoint's source address to be cleared before the next send."""
        with self._lock:
            if self._value is None:
                return
            self._clear_src_on_tx = True

    def current(self):
        """Return the endpoint to transmit to, clearing its source first if marked.

        Raises LookupError if no endpoint is known.
        """
        with self._lock:
            endpoint = self._value
            if endpoint is None:
                raise LookupError("no known endpoint for peer")
            if self._clear_src_on_tx:
                endpoint.clear_src()
                self._clear_src_on_tx = False
            return endpoint