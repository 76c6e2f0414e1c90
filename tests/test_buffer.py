import pytest

from zlogger.buffer import BufferConfigError, LogBuffer, MAXLEN_PATH


def test_zero_min_size_rejected():
    with pytest.raises(BufferConfigError):
        LogBuffer(0, 0)


def test_max_smaller_than_min_rejected():
    with pytest.raises(BufferConfigError):
        LogBuffer(16, 8)


def test_truncate_str_too_long_rejected():
    with pytest.raises(BufferConfigError):
        LogBuffer(16, 0, "x" * (MAXLEN_PATH + 1))


def test_new_buffer_is_empty_at_min_size():
    buf = LogBuffer(32, 64)
    assert len(buf) == 0
    assert str(buf) == ""
    assert buf.size_real == 32


def test_append_fits():
    buf = LogBuffer(16, 16)
    assert buf.append("hello") is False
    assert str(buf) == "hello"
    assert len(buf) == 5


def test_append_grows_when_unlimited():
    buf = LogBuffer(4, 0)
    text = "abcdefghijklmnop"
    assert buf.append(text) is False
    assert str(buf) == text
    assert buf.size_real > len(text)


def test_append_truncates_at_limit():
    buf = LogBuffer(8, 8)
    text = "abcdefghij"
    assert buf.append(text) is True
    assert len(buf) == 7
    assert str(buf) == text[:7]


def test_append_truncates_with_marker():
    buf = LogBuffer(8, 8, "..")
    assert buf.append("abcdefghij") is True
    assert str(buf) == "abcde.."


def test_truncate_marker_longer_than_content():
    buf = LogBuffer(4, 4, "XXXXXXXX")
    assert buf.append("abcdef") is True
    assert str(buf) == "XXX"


def test_partial_growth_up_to_max():
    buf = LogBuffer(4, 10)
    assert buf.append("z" * 20) is True
    assert buf.size_real == 10
    assert len(buf) == 9
    assert buf.append("more") is True
    assert len(buf) == 9


def test_growth_within_limit_not_truncated():
    buf = LogBuffer(4, 100)
    assert buf.append("abcdefgh") is False
    assert str(buf) == "abcdefgh"
    assert buf.size_real <= 100


def test_restart_keeps_capacity():
    buf = LogBuffer(4, 0)
    buf.append("a long line of text")
    size = buf.size_real
    buf.restart()
    assert len(buf) == 0
    assert buf.size_real == size
    buf.append("b")
    assert str(buf) == "b"


def test_printf_formats():
    buf = LogBuffer(8, 0)
    assert buf.printf("%s=%d", "key", 3) is False
    assert str(buf) == "key=3"


def test_printf_truncates_like_append():
    buf = LogBuffer(6, 6)
    assert buf.printf("%s", "abcdefgh") is True
    assert str(buf) == "abcde"


def test_append_dec_zero_padding():
    buf = LogBuffer(16, 0)
    assert buf.append_dec(42, 5) is False
    assert str(buf) == "00042"


def test_append_dec_wider_than_width():
    buf = LogBuffer(16, 0)
    buf.append_dec(123456, 3)
    assert str(buf) == str(123456)


def test_append_dec_zero_value():
    buf = LogBuffer(16, 0)
    buf.append_dec(0, 0)
    assert str(buf) == "0"


def test_append_dec_large_value():
    buf = LogBuffer(4, 0)
    value = 2**64 - 1
    assert buf.append_dec(value, 0) is False
    assert str(buf) == str(value)


def test_append_dec_truncated():
    buf = LogBuffer(4, 4)
    assert buf.append_dec(12345, 0) is True
    assert str(buf) == str(12345)[:3]


def test_append_dec_truncated_inside_padding():
    buf = LogBuffer(4, 4)
    assert buf.append_dec(7, 10) is True
    assert str(buf) == "000"


def test_append_dec_negative_rejected():
    buf = LogBuffer(16, 0)
    with pytest.raises(ValueError):
        buf.append_dec(-1, 0)


def test_append_hex_lowercase_padded():
    buf = LogBuffer(16, 0)
    buf.append_hex(255, 2)
    buf.append(" ")
    buf.append_hex(10, 2)
    assert str(buf) == "ff 0a"


def test_append_hex_matches_format():
    buf = LogBuffer(4, 0)
    buf.append_hex(0xDEADBEEF, 0)
    assert str(buf) == format(0xDEADBEEF, "x")


def test_adjust_append_left():
    buf = LogBuffer(16, 0)
    assert buf.adjust_append("ab", True, False, 5, 0) is False
    assert str(buf) == "ab   "


def test_adjust_append_right_spaces():
    buf = LogBuffer(16, 0)
    buf.adjust_append("ab", False, False, 5, 0)
    assert str(buf) == "   ab"


def test_adjust_append_right_zero_pad():
    buf = LogBuffer(16, 0)
    buf.adjust_append("ab", False, True, 5, 0)
    assert str(buf) == "000ab"


def test_adjust_append_left_ignores_zero_pad():
    buf = LogBuffer(16, 0)
    buf.adjust_append("ab", True, True, 4, 0)
    assert str(buf) == "ab  "


def test_adjust_append_cut_to_out_width():
    buf = LogBuffer(16, 0)
    buf.adjust_append("abcdef", False, False, 0, 2)
    assert str(buf) == "ab"


def test_adjust_append_no_widths_is_plain_append():
    buf = LogBuffer(4, 0)
    text = "plain text here"
    buf.adjust_append(text, False, False, 0, 0)
    assert str(buf) == text


def test_adjust_append_truncated_left():
    buf = LogBuffer(4, 4)
    assert buf.adjust_append("abcdef", True, False, 10, 0) is True
    assert str(buf) == "abc"


def test_adjust_append_truncated_right_in_padding():
    buf = LogBuffer(4, 4)
    assert buf.adjust_append("ab", False, True, 10, 0) is True
    assert str(buf) == "000"


def test_adjust_append_truncated_with_marker():
    buf = LogBuffer(6, 6, "!")
    assert buf.adjust_append("abcdefgh", True, False, 0, 0) is True
    assert str(buf) == "abcd!"
    assert len(buf) == buf.size_max - 1