import threading
import time

from wgtoolkit.timer import Timer


def _counting_timer():
    fired = threading.Event()
    calls = []

    def expire():
        calls.append(time.monotonic())
        fired.set()

    return Timer(expire), fired, calls


def test_new_timer_is_not_pending():
    timer, _, calls = _counting_timer()
    assert timer.is_pending() is False
    assert calls == []


def test_mod_fires_expiration():
    timer, fired, calls = _counting_timer()
    timer.mod(0.01)
    assert timer.is_pending() is True
    assert fired.wait(2.0)
    time.sleep(0.05)
    assert len(calls) == 1
    assert timer.is_pending() is False


def test_delete_prevents_firing():
    timer, fired, calls = _counting_timer()
    timer.mod(0.05)
    timer.delete()
    assert timer.is_pending() is False
    assert not fired.wait(0.2)
    assert calls == []


def test_remod_replaces_deadline_and_fires_once():
    timer, fired, calls = _counting_timer()
    timer.mod(30)
    timer.mod(0.01)
    assert fired.wait(2.0)
    time.sleep(0.1)
    assert len(calls) == 1


def test_remod_pushes_deadline_out():
    timer, fired, calls = _counting_timer()
    timer.mod(0.05)
    timer.mod(30)
    assert not fired.wait(0.2)
    assert timer.is_pending() is True
    timer.delete()
    assert timer.is_pending() is False


def test_timer_can_be_rearmed_after_firing():
    timer, fired, calls = _counting_timer()
    timer.mod(0)
    assert fired.wait(2.0)
    fired.clear()
    timer.mod(0)
    assert fired.wait(2.0)
    time.sleep(0.05)
    assert len(calls) == 2


def test_delete_sync_waits_for_running_expiration():
    started = threading.Event()
    release = threading.Event()

    def expire():
        started.set()
        release.wait(5.0)

    timer = Timer(expire)
    timer.mod(0)
    assert started.wait(2.0)

    stopper = threading.Thread(target=timer.delete_sync)
    stopper.start()
    stopper.join(0.1)
    assert stopper.is_alive() is True

    release.set()
    stopper.join(2.0)
    assert stopper.is_alive() is False
    assert timer.is_pending() is False


def test_delete_sync_on_idle_timer_returns():
    timer, fired, calls = _counting_timer()
    timer.mod(0.05)
    timer.delete_sync()
    assert not fired.wait(0.2)
    assert calls == []