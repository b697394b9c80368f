import base64
import threading

import pytest

from wgtoolkit.peername import PeerEndpoint, peer_name


class FakeEndpoint:
    def __init__(self, label):
        self.label = label
        self.cleared = 0

    def clear_src(self):
        self.cleared += 1


def test_peer_name_of_zero_key():
    assert peer_name(bytes(32)) == "peer(AAAA…AAAA)"


@pytest.mark.parametrize("seed", [1, 7, 42, 200])
def test_peer_name_matches_base64_prefix_and_suffix(seed):
    key = bytes((seed * i + 3) % 256 for i in range(32))
    name = peer_name(key)
    encoded = base64.b64encode(key).decode()
    assert name.startswith("peer(") and name.endswith(")")
    head, tail = name[5:-1].split("…")
    assert encoded.startswith(head)
    assert encoded.rstrip("=").endswith(tail)
    assert len(head) == 4 and len(tail) == 4


def test_peer_name_accepts_bytearray():
    key = bytearray(range(32))
    assert peer_name(key) == peer_name(bytes(range(32)))


@pytest.mark.parametrize("size", [0, 31, 33])
def test_peer_name_rejects_wrong_length(size):
    with pytest.raises(ValueError):
        peer_name(bytes(size))


def test_current_without_endpoint_raises():
    slot = PeerEndpoint()
    with pytest.raises(LookupError):
        slot.current()


def test_set_from_packet_updates_endpoint():
    slot = PeerEndpoint()
    first = FakeEndpoint("a")
    second = FakeEndpoint("b")
    slot.set_from_packet(first)
    assert slot.current() is first
    slot.set_from_packet(second)
    assert slot.current() is second
    assert slot.value is second


def test_disable_roaming_ignores_packet_source():
    original = FakeEndpoint("fixed")
    slot = PeerEndpoint(original, disable_roaming=True)
    slot.set_from_packet(FakeEndpoint("other"))
    assert slot.current() is original


def test_marked_source_is_cleared_once_before_send():
    endpoint = FakeEndpoint("a")
    slot = PeerEndpoint(endpoint)
    slot.mark_src_for_clearing()
    assert slot.clear_src_pending is True
    assert slot.current() is endpoint
    assert endpoint.cleared == 1
    slot.current()
    assert endpoint.cleared == 1
    assert slot.clear_src_pending is False


def test_mark_without_endpoint_does_nothing():
    slot = PeerEndpoint()
    slot.mark_src_for_clearing()
    assert slot.clear_src_pending is False


def test_new_packet_source_cancels_pending_clear():
    old = FakeEndpoint("old")
    new = FakeEndpoint("new")
    slot = PeerEndpoint(old)
    slot.mark_src_for_clearing()
    slot.set_from_packet(new)
    assert slot.current() is new
    assert new.cleared == 0
    assert old.cleared == 0


def test_concurrent_updates_leave_one_of_the_endpoints():
    slot = PeerEndpoint()
    endpoints = [FakeEndpoint(str(i)) for i in range(8)]
    threads = [threading.Thread(target=slot.set_from_packet, args=(e,)) for e in endpoints]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()
    assert slot.current() in endpoints