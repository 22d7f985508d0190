"""A thread-safe blocking FIFO message queue built on LinkedList."""

from __future__ import annotations

import threading
from enum import IntEnum

from rhineutils.linked_list import LinkedList, LinkedListError, ListStatus
from rhineutils.log_util import loc_logger


class MsgQStatus(IntEnum):
    """Result codes of message queue operations."""

    SUCCESS = 0
    FAILURE_GENERAL = -1
    INVALID_PARAMETER = -2
    INVALID_HANDLE = -3
    UNAVAILABLE_RESOURCE = -4
    INSUFFICIENT_BUFFER = -5


class MsgQError(Exception):
    """Raised when a queue operation fails; carries a MsgQStatus."""

    def __init__(self, status, message=""):
        super().__init__(message or status.name)
        self.status = status


_FROM_LIST_STATUS = {
    ListStatus.SUCCESS: MsgQStatus.SUCCESS,
    ListStatus.INVALID_PARAMETER: MsgQStatus.INVALID_PARAMETER,
    ListStatus.INVALID_HANDLE: MsgQStatus.INVALID_HANDLE,
    ListStatus.UNAVAILABLE_RESOURCE: MsgQStatus.UNAVAILABLE_RESOURCE,
    ListStatus.INSUFFICIENT_BUFFER: MsgQStatus.INSUFFICIENT_BUFFER,
}


def _convert(error):
    status = _FROM_LIST_STATUS.get(error.status, MsgQStatus.FAILURE_GENERAL)
    return MsgQError(status, str(error))


class MessageQueue:
    """Blocking queue: receivers wait until a message arrives or the queue is unblocked.

    Once unblocked, the queue refuses sends and receives until it is closed.
    """

    def __init__(self):
        self._list = LinkedList()
        self._cond = threading.Condition()
        self._unblocked = False
        self._closed = False

    def _check_open(self):
        if self._closed:
            raise MsgQError(MsgQStatus.INVALID_HANDLE, "queue has been closed")

    def send(self, msg, dealloc=None):
        """Queue a message; dealloc is called on it if it is flushed unreceived."""
        self._check_open()
        if msg is None:
            loc_logger.error("send: invalid msg_obj parameter")
            raise MsgQError(MsgQStatus.INVALID_PARAMETER, "message must not be None")
        with self._cond:
            if self._unblocked:
                loc_logger.error("send: message queue has been unblocked")
                raise MsgQError(MsgQStatus.UNAVAILABLE_RESOURCE, "queue has been unblocked")
            try:
                self._list.add(msg, dealloc)
            except LinkedListError as exc:
                raise _convert(exc) from None
            finally:
                self._cond.notify()
        loc_logger.debug("send: finished sending message %r", msg)

    def receive(self):
        """Wait for and return the oldest message."""
        self._check_open()
        with self._cond:
            if self._unblocked:
                loc_logger.error("receive: message queue has been unblocked")
                raise MsgQError(MsgQStatus.UNAVAILABLE_RESOURCE, "queue has been unblocked")
            self._cond.wait_for(lambda: not self._list.is_empty() or self._unblocked)
            try:
                msg = self._list.remove()
            except LinkedListError as exc:
                raise _convert(exc) from None
        loc_logger.debug("receive: received message %r", msg)
        return msg

    def flush(self):
        """Drop all queued messages, releasing those that have a callback."""
        self._check_open()
        with self._cond:
            self._list.flush()
        loc_logger.debug("flush: message queue flushed")

    def unblock(self):
        """Wake every waiter and stop the queue from being used further."""
        self._check_open()
        with self._cond:
            if self._unblocked:
                loc_logger.error("unblock: message queue has been unblocked")
                raise MsgQError(MsgQStatus.UNAVAILABLE_RESOURCE, "queue already unblocked")
            self._unblocked = True
            self._cond.notify_all()
        loc_logger.debug("unblock: message queue unblocked")

    def close(self):
        """Release all queued messages and retire the queue."""
        if self._closed:
            return
        with self._cond:
            self._list.flush()
            self._unblocked = False
            self._closed = True

    def __len__(self):
        with self._cond:
            return len(self._list)

    def __enter__(self):
        return self

    def __exit__(self, *args):
        self.close()
        return False