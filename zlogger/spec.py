"""Pattern specs: the pieces a log pattern is split into, and how each is written."""

from __future__ import annotations

import os
import re
import time
from dataclasses import dataclass, field
from functools import partial
from typing import Callable, Iterator

from .buffer import LogBuffer
from .event import Event, EventKind, TimeCacheCounter
from .levels import LevelList
from .mdc import Mdc

MAXLEN_PATH = 1024

DEFAULT_TIME_FMT = "%Y-%m-%d %H:%M:%S"
FILE_NEWLINE = "\n"

HEX_HEAD = (
    "\n             0  1  2  3  4  5  6  7  8  9  A  B  C  D  E  F    0123456789ABCDEF"
)

_UINT64_MASK = 0xFFFFFFFFFFFFFFFF
_PRINT_FMT = re.compile(r"%([.0-9-]+)")
_PAREN_ARG = re.compile(r"\(([^)]+)\)")
_MDC_ARG = re.compile(r"M\(([^)]+)\)")
_SIGNED_INT = re.compile(r"[+-]?\d+")


class SpecError(ValueError):
    """Raised for a malformed pattern spec or a spec that cannot be written."""


@dataclass
class LogThread:
    """Per-thread state used while writing specs: the event, context and buffers."""

    event: Event
    levels: LevelList = field(default_factory=LevelList)
    mdc: Mdc = field(default_factory=Mdc)
    buf_size_min: int = 1024
    buf_size_max: int = 2 * 1024 * 1024
    truncate_str: str = ""
    msg_buf: LogBuffer = field(init=False, repr=False)
    pre_msg_buf: LogBuffer = field(init=False, repr=False)
    path_buf: LogBuffer = field(init=False, repr=False)
    pre_path_buf: LogBuffer = field(init=False, repr=False)
    archive_path_buf: LogBuffer = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self.msg_buf = LogBuffer(self.buf_size_min, self.buf_size_max, self.truncate_str)
        self.pre_msg_buf = LogBuffer(self.buf_size_min, self.buf_size_max, self.truncate_str)
        self.path_buf = LogBuffer(MAXLEN_PATH + 1, MAXLEN_PATH + 1)
        self.pre_path_buf = LogBuffer(MAXLEN_PATH + 1, MAXLEN_PATH + 1)
        self.archive_path_buf = LogBuffer(MAXLEN_PATH + 1, MAXLEN_PATH + 1)


Writer = Callable[["Spec", LogThread, LogBuffer], bool]


@dataclass
class Spec:
    """One piece of a pattern: literal text or a ``%`` conversion.

    Writing returns True when the target buffer had to truncate the output.
    """

    text: str
    writer: Writer = field(repr=False)
    reformat: bool = False
    time_fmt: str = ""
    time_cache_index: int = 0
    mdc_key: str = ""
    print_fmt: str = ""
    left_adjust: bool = False
    left_fill_zeros: bool = False
    min_width: int = 0
    max_width: int = 0

    def __len__(self) -> int:
        return len(self.text)

    def _gen(self, thread: LogThread, target: LogBuffer, scratch: LogBuffer) -> bool:
        if not self.reformat:
            return self.writer(self, thread, target)
        scratch.restart()
        self.writer(self, thread, scratch)
        return target.adjust_append(
            str(scratch), self.left_adjust, self.left_fill_zeros, self.min_width, self.max_width
        )

    def gen_msg(self, thread: LogThread) -> bool:
        """Write this spec to the thread's message buffer."""
        return self._gen(thread, thread.msg_buf, thread.pre_msg_buf)

    def gen_path(self, thread: LogThread) -> bool:
        """Write this spec to the thread's path buffer."""
        return self._gen(thread, thread.path_buf, thread.pre_path_buf)

    def gen_archive_path(self, thread: LogThread) -> bool:
        """Write this spec to the thread's archive path buffer."""
        return self._gen(thread, thread.archive_path_buf, thread.pre_path_buf)


# --------------------------------------------------------------------------- writers


def _ensure_time(event: Event) -> None:
    if not event.time_sec:
        sec, rem = divmod(time.time_ns(), 1_000_000_000)
        event.time_sec = sec
        event.time_usec = rem // 1000


def _write_time(spec: Spec, thread: LogThread, buf: LogBuffer, utc: bool) -> bool:
    event = thread.event
    _ensure_time(event)
    now = event.time_sec
    if utc:
        if event.time_utc is None or event.time_utc_sec != now:
            event.time_utc = time.gmtime(now)
            event.time_utc_sec = now
        moment = event.time_utc
    else:
        if event.time_local is None or event.time_local_sec != now:
            event.time_local = time.localtime(now)
            event.time_local_sec = now
        moment = event.time_local

    try:
        cache = event.time_caches[spec.time_cache_index]
    except IndexError:
        raise SpecError(
            f"time cache index[{spec.time_cache_index}] out of range[{len(event.time_caches)}]"
        ) from None
    if cache.sec != now:
        cache.text = time.strftime(spec.time_fmt, moment)
        cache.sec = now
    return buf.append(cache.text)


def _write_time_utc(spec: Spec, thread: LogThread, buf: LogBuffer) -> bool:
    return _write_time(spec, thread, buf, True)


def _write_time_local(spec: Spec, thread: LogThread, buf: LogBuffer) -> bool:
    return _write_time(spec, thread, buf, False)


def _write_ms(spec: Spec, thread: LogThread, buf: LogBuffer) -> bool:
    _ensure_time(thread.event)
    return buf.append_dec(thread.event.time_usec // 1000, 3)


def _write_us(spec: Spec, thread: LogThread, buf: LogBuffer) -> bool:
    _ensure_time(thread.event)
    return buf.append_dec(thread.event.time_usec, 6)


def _write_mdc(spec: Spec, thread: LogThread, buf: LogBuffer) -> bool:
    entry = thread.mdc.get_entry(spec.mdc_key)
    if entry is None:
        return False
    return buf.append(entry.value)


def _write_str(spec: Spec, thread: LogThread, buf: LogBuffer) -> bool:
    return buf.append(spec.text)


def _write_category(spec: Spec, thread: LogThread, buf: LogBuffer) -> bool:
    return buf.append(thread.event.category_name)


def _write_srcfile(spec: Spec, thread: LogThread, buf: LogBuffer) -> bool:
    file = thread.event.file
    return buf.append("(file=null)" if file is None else file)


def _write_srcfile_neat(spec: Spec, thread: LogThread, buf: LogBuffer) -> bool:
    file = thread.event.file
    if file is None:
        return buf.append("(file=null)")
    return buf.append(file.rpartition("/")[2])


def _write_srcline(spec: Spec, thread: LogThread, buf: LogBuffer) -> bool:
    return buf.append_dec(thread.event.line & _UINT64_MASK, 0)


def _write_srcfunc(spec: Spec, thread: LogThread, buf: LogBuffer) -> bool:
    event = thread.event
    if event.file is None or event.func is None:
        return buf.append("(func=null)")
    return buf.append(event.func)


def _write_hostname(spec: Spec, thread: LogThread, buf: LogBuffer) -> bool:
    return buf.append(thread.event.host_name)


def _write_newline(spec: Spec, thread: LogThread, buf: LogBuffer) -> bool:
    return buf.append(FILE_NEWLINE)


def _write_cr(spec: Spec, thread: LogThread, buf: LogBuffer) -> bool:
    return buf.append("\r")


def _write_percent(spec: Spec, thread: LogThread, buf: LogBuffer) -> bool:
    return buf.append("%")


def _write_pid(spec: Spec, thread: LogThread, buf: LogBuffer) -> bool:
    event = thread.event
    if not event.pid:
        event.pid = os.getpid()
        if event.pid != event.last_pid:
            event.last_pid = event.pid
            event.pid_str = str(event.pid)
    return buf.append(event.pid_str)


def _write_tid_hex(spec: Spec, thread: LogThread, buf: LogBuffer) -> bool:
    return buf.append(thread.event.tid_hex_str)


def _write_tid_long(spec: Spec, thread: LogThread, buf: LogBuffer) -> bool:
    return buf.append(thread.event.tid_str)


def _write_ktid(spec: Spec, thread: LogThread, buf: LogBuffer) -> bool:
    return buf.append(thread.event.ktid_str)


def _write_level_lowercase(spec: Spec, thread: LogThread, buf: LogBuffer) -> bool:
    return buf.append(thread.levels.get(thread.event.level).lower)


def _write_level_uppercase(spec: Spec, thread: LogThread, buf: LogBuffer) -> bool:
    return buf.append(thread.levels.get(thread.event.level).upper)


def _hex_dump_steps(buf: LogBuffer, data: bytes) -> Iterator[Callable[[], bool]]:
    yield partial(buf.append, HEX_HEAD)
    line = 0
    while True:
        chunk = data[line * 16 : line * 16 + 16]
        blanks = 16 - len(chunk)
        yield partial(buf.append, "\n")
        yield partial(buf.append_dec, line + 1, 10)
        yield partial(buf.append, "   ")
        for byte in chunk:
            yield partial(buf.append_hex, byte, 2)
            yield partial(buf.append, " ")
        for _ in range(blanks):
            yield partial(buf.append, "   ")
        yield partial(buf.append, "  ")
        for byte in chunk:
            yield partial(buf.append, chr(byte) if 32 <= byte <= 126 else ".")
        for _ in range(blanks):
            yield partial(buf.append, " ")
        if line * 16 + 16 >= len(data):
            return
        line += 1


def _write_usrmsg(spec: Spec, thread: LogThread, buf: LogBuffer) -> bool:
    event = thread.event
    if event.kind == EventKind.FMT:
        if event.str_format is None:
            return buf.append("format=(null)")
        try:
            return buf.printf(event.str_format, *event.str_args)
        except (TypeError, ValueError) as exc:
            raise SpecError(f"format[{event.str_format}] fail: {exc}") from exc
    if event.kind == EventKind.HEX:
        if event.hex_buf is None:
            return buf.append("buf=(null)")
        # stop at the first write that had to truncate
        return any(step() for step in _hex_dump_steps(buf, event.hex_buf))
    return False


_SINGLE_CHAR_WRITERS: dict[str, Writer] = {
    "c": _write_category,
    "F": _write_srcfile,
    "f": _write_srcfile_neat,
    "H": _write_hostname,
    "k": _write_ktid,
    "L": _write_srcline,
    "m": _write_usrmsg,
    "n": _write_newline,
    "r": _write_cr,
    "p": _write_pid,
    "U": _write_srcfunc,
    "v": _write_level_lowercase,
    "V": _write_level_uppercase,
    "t": _write_tid_hex,
    "T": _write_tid_long,
    "%": _write_percent,
}


# --------------------------------------------------------------------------- parsing


def _leading_int(text: str) -> int:
    match = _SIGNED_INT.match(text)
    return max(int(match.group()), 0) if match else 0


def _parse_print_fmt(print_fmt: str) -> tuple[bool, bool, int, int]:
    """Split ``-12.35`` style flags into (left_adjust, zero_fill, min_width, max_width)."""
    rest = print_fmt
    left_adjust = False
    zero_fill = False
    if rest.startswith("-"):
        left_adjust = True
        rest = rest[1:]
    elif rest.startswith("0"):
        zero_fill = True
    min_width = _leading_int(rest)
    dot = rest.find(".")
    max_width = _leading_int(rest[dot + 1 :]) if dot >= 0 else 0
    return left_adjust, zero_fill, min_width, max_width


def _char(pattern: str, index: int) -> str:
    return pattern[index] if 0 <= index < len(pattern) else ""


def parse_spec(pattern: str, pos: int, counter: TimeCacheCounter) -> tuple[Spec, int]:
    """Parse the spec starting at ``pattern[pos]``; return it and the position after it."""
    if not 0 <= pos < len(pattern):
        raise SpecError(f"position[{pos}] outside pattern[{pattern}]")

    if pattern[pos] != "%":
        end = pattern.find("%", pos)
        if end < 0:
            end = len(pattern)
        return Spec(pattern[pos:end], _write_str), end

    options: dict[str, object] = {}
    match = _PRINT_FMT.match(pattern, pos)
    if match:
        left_adjust, zero_fill, min_width, max_width = _parse_print_fmt(match.group(1))
        options.update(
            reformat=True,
            print_fmt=match.group(1),
            left_adjust=left_adjust,
            left_fill_zeros=zero_fill,
            min_width=min_width,
            max_width=max_width,
        )
        p = match.end()
    else:
        p = pos + 1

    ch = _char(pattern, p)

    if ch in ("d", "g"):
        if _char(pattern, p + 1) != "(":
            time_fmt = DEFAULT_TIME_FMT
            p += 1
        elif pattern.startswith("d()", p):
            time_fmt = DEFAULT_TIME_FMT
            p += 3
        else:
            paren = _PAREN_ARG.match(pattern, p + 1)
            if not paren:
                raise SpecError(f"in string[{pattern[pos:]}] can't find match ')'")
            time_fmt = paren.group(1)
            p = paren.end()
        writer = _write_time_utc if ch == "g" else _write_time_local
        spec = Spec(
            pattern[pos:p],
            writer,
            time_fmt=time_fmt,
            time_cache_index=counter.allocate(),
            **options,  # type: ignore[arg-type]
        )
        return spec, p

    if ch == "M":
        mdc = _MDC_ARG.match(pattern, p)
        if mdc:
            key = mdc.group(1)
            p = mdc.end()
        elif pattern.startswith("M()", p):
            key = ""
            p += 3
        else:
            raise SpecError(f"in string[{pattern[pos:]}] can't find match ')'")
        return Spec(pattern[pos:p], _write_mdc, mdc_key=key, **options), p  # type: ignore[arg-type]

    if pattern.startswith("ms", p):
        return Spec(pattern[pos : p + 2], _write_ms, **options), p + 2  # type: ignore[arg-type]
    if pattern.startswith("us", p):
        return Spec(pattern[pos : p + 2], _write_us, **options), p + 2  # type: ignore[arg-type]

    end = p + 1
    if ch in ("D", "G"):
        writer = _write_time_utc if ch == "G" else _write_time_local
        spec = Spec(
            pattern[pos:end],
            writer,
            time_fmt=DEFAULT_TIME_FMT,
            time_cache_index=counter.allocate(),
            **options,  # type: ignore[arg-type]
        )
        return spec, end

    writer = _SINGLE_CHAR_WRITERS.get(ch) if ch else None
    if writer is None:
        raise SpecError(f"str[{pattern[pos:]}] in wrong format, p[{ch}]")
    return Spec(pattern[pos:end], writer, **options), end  # type: ignore[arg-type]