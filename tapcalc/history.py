"""
In-memory calculation history.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class HistoryEntry:
    """One finished calculation"""

    expression: str
    result: str

    def __str__(self):
        return f"{self.expression} = {self.result}"


class HistoryLog:
    """Append-only, insertion-ordered list of history entries"""

    def __init__(self, entries=()):
        self._entries = list(entries)

    def append(self, entry):
        """Add an entry to the end of the log"""
        if not isinstance(entry, HistoryEntry):
            raise TypeError(f"Expected HistoryEntry, got {type(entry).__name__}")
        self._entries.append(entry)

    def clear(self):
        """Remove all entries"""
        self._entries.clear()

    @property
    def entries(self):
        return tuple(self._entries)

    def rows(self):
        """Rendered rows, oldest first"""
        return [str(entry) for entry in self._entries]

    def __iter__(self):
        return iter(tuple(self._entries))

    def __len__(self):
        return len(self._entries)

    def __getitem__(self, index):
        return self._entries[index]

