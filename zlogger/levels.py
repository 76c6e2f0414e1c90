"""Log levels: parsing of level lines and the 256-slot level table."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterator

MAXLEN_PATH = 1024

LOG_EMERG = 0
LOG_ALERT = 1
LOG_CRIT = 2
LOG_ERR = 3
LOG_WARNING = 4
LOG_NOTICE = 5
LOG_INFO = 6
LOG_DEBUG = 7

_SYSLOG_LEVELS = {
    "LOG_EMERG": LOG_EMERG,
    "LOG_ALERT": LOG_ALERT,
    "LOG_CRIT": LOG_CRIT,
    "LOG_ERR": LOG_ERR,
    "LOG_WARNING": LOG_WARNING,
    "LOG_NOTICE": LOG_NOTICE,
    "LOG_INFO": LOG_INFO,
    "LOG_DEBUG": LOG_DEBUG,
}

UNKNOWN_LEVEL = 254
LEVEL_SLOTS = 256

_DEFAULT_LEVELS = (
    "* = 0, LOG_INFO",
    "DEBUG = 20, LOG_DEBUG",
    "INFO = 40, LOG_INFO",
    "NOTICE = 60, LOG_NOTICE",
    "WARN = 80, LOG_WARNING",
    "ERROR = 100, LOG_ERR",
    "FATAL = 120, LOG_ALERT",
    "UNKNOWN = 254, LOG_ERR",
    "! = 255, LOG_INFO",
)

_LEVEL_LINE = re.compile(r"\s*([^=\s]+)\s*=\s*([+-]?\d+)(?:\s*,\s*(\S+))?")


class LevelError(ValueError):
    """Raised for a malformed level line or an unknown level name."""


@dataclass(frozen=True)
class Level:
    """One named level with its syslog priority."""

    int_level: int
    upper: str
    lower: str
    syslog_level: int

    @property
    def str_len(self) -> int:
        return len(self.upper)


def syslog_level_from_name(name: str) -> int:
    """Map a name such as ``LOG_ERR`` (any case) to its syslog priority."""
    try:
        return _SYSLOG_LEVELS[name.upper()]
    except KeyError:
        raise LevelError(f"wrong syslog level[{name}]") from None


def parse_level(line: str) -> Level:
    """Parse a line of the form ``NAME = number[, LOG_xxx]``."""
    match = _LEVEL_LINE.match(line)
    if not match:
        raise LevelError(f"level[{line}], syntax wrong")
    name, number, syslog_name = match.groups()
    value = int(number)
    if not 0 <= value <= 255:
        raise LevelError(f"l[{value}] not in [0,255], wrong")
    if len(name) > MAXLEN_PATH:
        raise LevelError(f"not enough space for str, str[{name}] > {MAXLEN_PATH}")
    syslog_level = LOG_DEBUG if syslog_name is None else syslog_level_from_name(syslog_name)
    return Level(value, name.upper(), name.lower(), syslog_level)


class LevelList:
    """The table of levels indexed by their numeric value, with defaults set."""

    def __init__(self) -> None:
        self._slots: list[Level | None] = [None] * LEVEL_SLOTS
        for line in _DEFAULT_LEVELS:
            self.set(line)

    def __iter__(self) -> Iterator[Level]:
        return (level for level in self._slots if level is not None)

    def set(self, line: str) -> Level:
        """Parse ``line`` and store the level in its slot, replacing any other."""
        level = parse_level(line)
        self._slots[level.int_level] = level
        return level

    def get(self, level: int) -> Level:
        """Return the level in slot ``level``, or the UNKNOWN level if it is empty."""
        if 0 <= level < LEVEL_SLOTS:
            found = self._slots[level]
            if found is not None:
                return found
        unknown = self._slots[UNKNOWN_LEVEL]
        assert unknown is not None
        return unknown

    def lookup(self, name: str) -> int:
        """Return the numeric value of the level called ``name``, in any case."""
        if not name:
            raise LevelError(f"str is [{name}], can't find level")
        wanted = name.upper()
        for index, level in enumerate(self._slots):
            if level is not None and level.upper == wanted:
                return index
        raise LevelError(f"str[{name}] can't found in level list")