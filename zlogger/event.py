"""The event: everything known about one log call while it is being formatted."""

from __future__ import annotations

import enum
import os
import socket
import threading
import time
from dataclasses import dataclass, field
from typing import Any

_UINT32_MASK = 0xFFFFFFFF


class EventKind(enum.IntEnum):
    """How the user message of an event is produced."""

    FMT = 0
    HEX = 1


@dataclass
class TimeCache:
    """The last formatted time string of one time spec and the second it shows."""

    text: str = ""
    sec: int = 0


@dataclass
class TimeCacheCounter:
    """Hands out time cache slots to time specs while patterns are parsed."""

    count: int = 0

    def allocate(self) -> int:
        """Reserve the next slot and return its index."""
        index = self.count
        self.count += 1
        return index


@dataclass
class Event:
    """One log call, reused by a thread for each call it makes."""

    time_cache_count: int = 0
    host_name: str = field(init=False)
    category_name: str = field(init=False, default="")
    file: str | None = field(init=False, default=None)
    func: str | None = field(init=False, default=None)
    line: int = field(init=False, default=0)
    level: int = field(init=False, default=0)
    kind: EventKind = field(init=False, default=EventKind.FMT)
    str_format: str | None = field(init=False, default=None)
    str_args: tuple[Any, ...] = field(init=False, default=())
    hex_buf: bytes | None = field(init=False, default=None)
    time_sec: int = field(init=False, default=0)
    time_usec: int = field(init=False, default=0)
    time_utc_sec: int = field(init=False, default=0)
    time_utc: time.struct_time | None = field(init=False, default=None)
    time_local_sec: int = field(init=False, default=0)
    time_local: time.struct_time | None = field(init=False, default=None)
    time_caches: list[TimeCache] = field(init=False)
    pid: int = field(init=False, default=0)
    last_pid: int = field(init=False, default=0)
    pid_str: str = field(init=False, default="")
    tid: int = field(init=False)
    tid_str: str = field(init=False)
    tid_hex_str: str = field(init=False)
    ktid: int = field(init=False)
    ktid_str: str = field(init=False)

    def __post_init__(self) -> None:
        if self.time_cache_count < 0:
            raise ValueError(f"time_cache_count[{self.time_cache_count}] must not be negative")
        self.time_caches = [TimeCache() for _ in range(self.time_cache_count)]
        self.host_name = socket.gethostname()
        self.tid = threading.get_ident()
        self.tid_str = str(self.tid)
        self.tid_hex_str = format(self.tid & _UINT32_MASK, "x")
        self.ktid = threading.get_native_id()
        self.ktid_str = str(self.ktid & _UINT32_MASK)

    def _set_common(
        self,
        category_name: str,
        file: str | None,
        func: str | None,
        line: int,
        level: int,
        kind: EventKind,
    ) -> None:
        self.category_name = category_name
        self.file = file
        self.func = func
        self.line = line
        self.level = level
        self.kind = kind
        # pid and time are fetched lazily by the specs that need them
        self.pid = 0
        self.time_sec = 0
        self.time_usec = 0

    def set_fmt(
        self,
        category_name: str,
        file: str | None,
        func: str | None,
        line: int,
        level: int,
        str_format: str | None,
        args: tuple[Any, ...] = (),
    ) -> None:
        """Prepare the event for a printf-style message."""
        self._set_common(category_name, file, func, line, level, EventKind.FMT)
        self.str_format = str_format
        self.str_args = tuple(args)

    def set_hex(
        self,
        category_name: str,
        file: str | None,
        func: str | None,
        line: int,
        level: int,
        hex_buf: bytes | None,
    ) -> None:
        """Prepare the event for a hex dump of ``hex_buf``."""
        self._set_common(category_name, file, func, line, level, EventKind.HEX)
        self.hex_buf = bytes(hex_buf) if hex_buf is not None else None

    @property
    def current_pid(self) -> int:
        """The process id, for comparison with the cached one."""
        return os.getpid()