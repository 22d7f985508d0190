import errno
import threading

import pytest

from rhineutils.loc_timer import LocTimer, TimerState, start_timer


def test_zero_delay_rejected():
    with pytest.raises(ValueError):
        start_timer(0, lambda data, result: None)


def test_missing_callback_rejected():
    with pytest.raises(ValueError):
        start_timer(10, None)


def test_expiry_calls_callback():
    calls = []
    fired = threading.Event()

    def callback(data, result):
        calls.append((data, result))
        fired.set()

    timer = start_timer(20, callback, "payload")
    assert fired.wait(5)
    assert timer.join(5)
    assert calls == [("payload", errno.ETIMEDOUT)]
    assert timer.state is TimerState.DONE
    assert timer.result == errno.ETIMEDOUT


def test_stop_prevents_callback():
    calls = []
    timer = start_timer(10_000, lambda data, result: calls.append(result))
    assert timer.stop() is True
    assert timer.join(5)
    assert calls == []
    assert timer.state in (TimerState.DONE, TimerState.ABORT)
    assert timer.result in (0, -errno.ETIMEDOUT)


def test_stop_before_start_cancels():
    calls = []
    timer = LocTimer(10_000, lambda data, result: calls.append(result))
    assert timer.stop() is True
    assert timer.state is TimerState.ABORT
    timer._start()
    assert timer.join(5)
    assert calls == []
    assert timer.result == -errno.ETIMEDOUT


def test_stop_after_expiry_does_nothing():
    calls = []
    timer = start_timer(10, lambda data, result: calls.append(result))
    assert timer.join(5)
    assert timer.stop() is False
    assert calls == [errno.ETIMEDOUT]
    assert timer.state is TimerState.DONE