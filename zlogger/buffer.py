"""Growable text buffer that assembles one log line at a time."""

from __future__ import annotations

MAXLEN_PATH = 1024

_UINT32_MASK = 0xFFFFFFFF


class BufferConfigError(ValueError):
    """Raised when a buffer is created with inconsistent limits."""


class LogBuffer:
    """A text buffer with a minimum size, an optional maximum and truncation marking.

    The buffer starts at ``size_min`` and grows on demand. With ``size_max``
    of zero it grows without limit. When a write would exceed ``size_max``,
    the text is cut to fit and the tail is overwritten with ``truncate_str``.
    As with a C string buffer, one slot of ``size_real`` is reserved, so the
    usable length is ``size_real - 1``.

    Every writing method returns ``True`` when the written text was truncated
    and ``False`` when it was written whole.
    """

    def __init__(self, size_min: int, size_max: int = 0, truncate_str: str | None = None) -> None:
        if size_min <= 0:
            raise BufferConfigError("buf_size_min == 0, not allowed")
        if size_max < 0:
            raise BufferConfigError(f"buf_size_max[{size_max}] must not be negative")
        if size_max != 0 and size_max < size_min:
            raise BufferConfigError(
                f"buf_size_max[{size_max}] < buf_size_min[{size_min}] && buf_size_max != 0"
            )
        truncate_str = truncate_str or ""
        if len(truncate_str) > MAXLEN_PATH:
            raise BufferConfigError(f"truncate_str[{truncate_str}] overflow")

        self.size_min = size_min
        self.size_max = size_max
        self.size_real = size_min
        self.truncate_str = truncate_str
        self._text = ""

    def __repr__(self) -> str:
        return (
            f"LogBuffer(size_min={self.size_min}, size_max={self.size_max}, "
            f"size_real={self.size_real}, len={len(self._text)})"
        )

    def __len__(self) -> int:
        return len(self._text)

    def __str__(self) -> str:
        return self._text

    def restart(self) -> None:
        """Drop the contents, keeping the current capacity."""
        self._text = ""

    @property
    def _space_left(self) -> int:
        return self.size_real - 1 - len(self._text)

    def _resize(self, increment: int) -> bool:
        """Grow by at least ``increment``; return True if the limit was hit."""
        if self.size_max != 0 and self.size_real >= self.size_max:
            return True
        if self.size_max == 0:
            self.size_real += int(1.5 * increment)
            return False
        if self.size_real + increment <= self.size_max:
            self.size_real += increment
            return False
        self.size_real = self.size_max
        return True

    def _mark_truncated(self) -> None:
        marker = self.truncate_str
        if not marker:
            return
        keep = max(len(self._text) - len(marker), 0)
        overwrite = len(self._text) - keep
        self._text = self._text[:keep] + marker[:overwrite]

    def _ensure_room(self, needed: int) -> bool:
        """Make room for ``needed`` characters; return True if it cannot fit."""
        if needed > self._space_left:
            return self._resize(needed - self._space_left)
        return False

    def printf(self, fmt: str, *args: object) -> bool:
        """Append ``fmt % args``."""
        return self.append(fmt % args)

    def append(self, text: str) -> bool:
        """Append ``text`` as is."""
        if self._ensure_room(len(text)):
            self._text += text[: self._space_left]
            self._mark_truncated()
            return True
        self._text += text
        return False

    def adjust_append(
        self,
        text: str,
        left_adjust: bool,
        zero_pad: bool,
        in_width: int,
        out_width: int,
    ) -> bool:
        """Append ``text`` padded to ``in_width`` and cut to ``out_width``.

        A width of zero means no padding or no cut respectively. Padding goes
        on the right when ``left_adjust`` is set, otherwise on the left, with
        zeros instead of spaces when ``zero_pad`` is set.
        """
        if out_width == 0 or len(text) < out_width:
            source_len = len(text)
        else:
            source_len = out_width

        if in_width == 0 or source_len >= in_width:
            append_len = source_len
            space_len = 0
        else:
            append_len = in_width
            space_len = in_width - source_len

        pad = "0" if zero_pad else " "
        truncated = False
        if append_len > self._space_left and self._resize(append_len - self._space_left):
            truncated = True
            append_len = self._space_left
            if left_adjust:
                if source_len < append_len:
                    space_len = append_len - source_len
                else:
                    source_len = append_len
                    space_len = 0
            else:
                if space_len < append_len:
                    source_len = append_len - space_len
                else:
                    space_len = append_len
                    source_len = 0

        if left_adjust:
            piece = text[:source_len] + " " * space_len
        else:
            piece = pad * space_len + text[:source_len]
        self._text += piece

        if truncated:
            self._mark_truncated()
        return truncated

    def _append_number(self, digits: str, width: int) -> bool:
        num_len = len(digits)
        if width > num_len:
            zero_len = width - num_len
            out_len = width
        else:
            zero_len = 0
            out_len = num_len

        if self._ensure_room(out_len):
            len_left = self._space_left
            if len_left <= zero_len:
                zero_len = len_left
                num_len = 0
            else:
                num_len = len_left - zero_len
            self._text += "0" * zero_len + digits[:num_len]
            self._mark_truncated()
            return True

        self._text += "0" * zero_len + digits
        return False

    def append_dec(self, value: int, width: int) -> bool:
        """Append a non-negative integer in decimal, zero-padded to ``width``."""
        if value < 0:
            raise ValueError(f"value[{value}] must not be negative")
        return self._append_number(str(value), width)

    def append_hex(self, value: int, width: int) -> bool:
        """Append a 32-bit unsigned integer in lower-case hex, zero-padded to ``width``."""
        if value < 0:
            raise ValueError(f"value[{value}] must not be negative")
        return self._append_number(format(value & _UINT32_MASK, "x"), width)