"""Mapped diagnostic context: per-thread key/value pairs for log patterns."""

from __future__ import annotations

from dataclasses import dataclass, field

MAXLEN_PATH = 1024


@dataclass(frozen=True)
class MdcEntry:
    """One key/value pair, both cut to ``MAXLEN_PATH`` characters."""

    key: str
    value: str

    @property
    def value_len(self) -> int:
        return len(self.value)


@dataclass
class Mdc:
    """A table of diagnostic values keyed by name."""

    _table: dict[str, MdcEntry] = field(default_factory=dict)

    def __len__(self) -> int:
        return len(self._table)

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and key[:MAXLEN_PATH] in self._table

    def put(self, key: str, value: str) -> None:
        """Store ``value`` under ``key``, replacing any earlier value."""
        entry = MdcEntry(key[:MAXLEN_PATH], value[:MAXLEN_PATH])
        self._table[entry.key] = entry

    def get(self, key: str) -> str | None:
        """Return the value under ``key``, or None if there is none."""
        entry = self.get_entry(key)
        return entry.value if entry is not None else None

    def get_entry(self, key: str) -> MdcEntry | None:
        """Return the whole entry under ``key``, or None if there is none."""
        return self._table.get(key[:MAXLEN_PATH])

    def remove(self, key: str) -> None:
        """Drop ``key`` if present."""
        self._table.pop(key[:MAXLEN_PATH], None)

    def clean(self) -> None:
        """Drop every entry."""
        self._table.clear()