# History.py
"""Bounded, newest-first log of successful calculations."""

from collections import deque, namedtuple

DEFAULT_CAPACITY = 20


class HistoryEntry(namedtuple("HistoryEntry", ["expression", "result"])):
    """One successful evaluation. Immutable."""
    __slots__ = ()

    def __str__(self):
        return f"{self.expression} = {self.result}"


class HistoryLog:
    """Newest entry first; pushing onto a full log drops the oldest one."""

    def __init__(self, capacity=DEFAULT_CAPACITY):
        if capacity < 1:
            raise ValueError(f"History capacity must be at least 1, got {capacity}")
        self._entries = deque(maxlen=capacity)

    @property
    def capacity(self):
        return self._entries.maxlen

    def set_capacity(self, capacity):
        # Shrinking keeps the newest entries
        if capacity < 1:
            raise ValueError(f"History capacity must be at least 1, got {capacity}")
        self._entries = deque(list(self._entries)[:capacity], maxlen=capacity)

    def push(self, entry):
        self._entries.appendleft(entry)

    def entries(self):
        return tuple(self._entries)

    def __getitem__(self, index):
        return self._entries[index]

    def __len__(self):
        return len(self._entries)

    def __iter__(self):
        return iter(tuple(self._entries))

    def __repr__(self):
        return f"HistoryLog({list(self._entries)!r}, capacity={self.capacity})"
