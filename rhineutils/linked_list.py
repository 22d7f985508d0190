"""A FIFO list: items are added at the head and removed from the tail."""

from __future__ import annotations

from collections import deque
from enum import IntEnum


class ListStatus(IntEnum):
    """Result codes of list operations."""

    SUCCESS = 0
    FAILURE_GENERAL = -1
    INVALID_PARAMETER = -2
    INVALID_HANDLE = -3
    UNAVAILABLE_RESOURCE = -4
    INSUFFICIENT_BUFFER = -5


class LinkedListError(Exception):
    """Raised when a list operation fails; carries a ListStatus."""

    def __init__(self, status, message=""):
        super().__init__(message or status.name)
        self.status = status


class LinkedList:
    """Items with optional release callbacks, newest at the head."""

    def __init__(self):
        self._items = deque()  # head is index 0, tail is the right end

    def add(self, data, dealloc=None):
        """Put data at the head; dealloc is called on it when flushed."""
        if data is None:
            raise LinkedListError(ListStatus.INVALID_PARAMETER, "data must not be None")
        self._items.appendleft((data, dealloc))

    def remove(self):
        """Take the oldest item from the tail and return it."""
        if not self._items:
            raise LinkedListError(ListStatus.UNAVAILABLE_RESOURCE, "list is empty")
        data, _ = self._items.pop()
        return data

    def is_empty(self):
        """Return whether the list holds no items."""
        return not self._items

    def flush(self):
        """Drop every item, calling its release callback if it has one."""
        while self._items:
            data, dealloc = self._items.popleft()
            if dealloc is not None:
                dealloc(data)

    def search(self, equal, key, remove=False, release=False):
        """Find the first item from the head for which equal(key, item) holds.

        With remove, the item is taken out of the list. With release as
        well, its callback is called on it and None is returned instead.
        Returns None when nothing matches.
        """
        if equal is None:
            raise LinkedListError(ListStatus.INVALID_HANDLE, "no comparison given")
        if not self._items:
            raise LinkedListError(ListStatus.UNAVAILABLE_RESOURCE, "list is empty")
        for position, (data, dealloc) in enumerate(self._items):
            if equal(key, data):
                if remove:
                    del self._items[position]
                    if release:
                        if dealloc is not None:
                            dealloc(data)
                        return None
                return data
        return None

    def __len__(self):
        return len(self._items)

    def __iter__(self):
        return (data for data, _ in self._items)