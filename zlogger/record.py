"""User-defined outputs, registered by name and referred to by rules with ``$name``."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Optional

MAXLEN_PATH = 1024


@dataclass(frozen=True)
class LogMessage:
    """A formatted log line handed to a user-defined output, with its path."""

    buf: str
    path: str = ""

    def __len__(self) -> int:
        return len(self.buf)


RecordFn = Callable[[LogMessage], Optional[int]]


@dataclass(frozen=True)
class Record:
    """A user-defined output function and the name it is registered under.

    The function returns None or 0 on success; anything else means failure.
    """

    name: str
    output: RecordFn

    def __post_init__(self) -> None:
        if len(self.name) > MAXLEN_PATH:
            raise ValueError(f"name[{self.name}] is too long")
        if not callable(self.output):
            raise TypeError("record output must be callable")


@dataclass
class RecordTable:
    """Records by name; registering a name again replaces the earlier one."""

    _records: dict[str, Record] = field(default_factory=dict)

    def register(self, name: str, output: RecordFn) -> Record:
        """Create and store a record for ``name``."""
        record = Record(name, output)
        self._records[name] = record
        return record

    def get(self, name: str) -> Record | None:
        """Return the record called ``name``, or None."""
        return self._records.get(name)

    def __contains__(self, name: object) -> bool:
        return name in self._records

    def __len__(self) -> int:
        return len(self._records)