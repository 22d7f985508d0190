"""One-shot timers that call back from a background thread unless stopped."""

from __future__ import annotations

import errno
import threading
from enum import IntEnum

from rhineutils.log_util import loc_logger


class TimerState(IntEnum):
    """Life cycle of a timer."""

    READY = 100
    WAITING = 101
    DONE = 102
    ABORT = 103


class LocTimer:
    """A timer that calls callback(user_data, errno.ETIMEDOUT) when it expires.

    The callback is not called if the timer is stopped first. After the
    thread ends, result holds errno.ETIMEDOUT when the timer expired, 0 when
    it was stopped while waiting and -errno.ETIMEDOUT when it was stopped
    before it began to wait.
    """

    def __init__(self, msec, callback, user_data=None):
        if callback is None or msec == 0:
            loc_logger.error("loc_timer: wrong parameters")
            raise ValueError("a callback and a non-zero delay are required")
        if msec < 0:
            raise ValueError("delay must not be negative")
        self.msec = msec
        self.callback = callback
        self.user_data = user_data
        self.state = TimerState.READY
        self.result = None
        self._cond = threading.Condition()
        self._thread = threading.Thread(target=self._run, name="loc_timer", daemon=True)

    def _start(self):
        self._thread.start()
        return self

    def _run(self):
        loc_logger.debug("loc_timer: enter, delay = %d", self.msec)
        result = -errno.ETIMEDOUT
        with self._cond:
            if self.state is TimerState.READY:
                self.state = TimerState.WAITING
                stopped = self._cond.wait_for(
                    lambda: self.state is TimerState.ABORT, self.msec / 1000
                )
                result = 0 if stopped else errno.ETIMEDOUT
                self.state = TimerState.DONE
        self.result = result
        if result == errno.ETIMEDOUT:
            loc_logger.verbose("loc_timer timed out")
            self.callback(self.user_data, result)
        elif result == 0:
            loc_logger.verbose("loc_timer stopped")
        else:
            loc_logger.verbose("loc_timer cancelled")

    def stop(self):
        """Cancel the timer if it has not fired; return whether it was cancelled."""
        with self._cond:
            if self.state in (TimerState.READY, TimerState.WAITING):
                self.state = TimerState.ABORT
                self._cond.notify()
                return True
        return False

    def join(self, timeout=None):
        """Wait for the timer thread to end; return whether it has."""
        self._thread.join(timeout)
        return not self._thread.is_alive()


def start_timer(msec, callback, user_data=None):
    """Create and start a timer of msec milliseconds."""
    return LocTimer(msec, callback, user_data)._start()