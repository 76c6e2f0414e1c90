import pytest

from zlogger.mdc import MAXLEN_PATH, Mdc, MdcEntry


def test_put_and_get():
    mdc = Mdc()
    mdc.put("user", "alice")
    assert mdc.get("user") == "alice"


def test_missing_key_gives_none():
    mdc = Mdc()
    assert mdc.get("nothing") is None
    assert mdc.get_entry("nothing") is None


def test_put_replaces_value():
    mdc = Mdc()
    mdc.put("k", "first")
    mdc.put("k", "second")
    assert mdc.get("k") == "second"
    assert len(mdc) == 1


def test_get_entry_carries_length():
    mdc = Mdc()
    mdc.put("k", "hello")
    entry = mdc.get_entry("k")
    assert entry == MdcEntry("k", "hello")
    assert entry.value_len == len("hello")


def test_remove():
    mdc = Mdc()
    mdc.put("a", "1")
    mdc.put("b", "2")
    mdc.remove("a")
    assert mdc.get("a") is None
    assert mdc.get("b") == "2"


def test_remove_missing_is_harmless():
    mdc = Mdc()
    mdc.put("a", "1")
    mdc.remove("zzz")
    assert len(mdc) == 1


def test_clean_empties_table():
    mdc = Mdc()
    mdc.put("a", "1")
    mdc.put("b", "2")
    mdc.clean()
    assert len(mdc) == 0
    assert "a" not in mdc


@pytest.mark.parametrize("size", [MAXLEN_PATH - 1, MAXLEN_PATH, MAXLEN_PATH + 500])
def test_long_values_are_cut(size):
    mdc = Mdc()
    mdc.put("k", "v" * size)
    assert len(mdc.get("k")) == min(size, MAXLEN_PATH)


def test_long_keys_are_cut_consistently():
    mdc = Mdc()
    key = "k" * (MAXLEN_PATH + 10)
    mdc.put(key, "x")
    assert mdc.get(key) == "x"
    assert mdc.get(key[:MAXLEN_PATH]) == "x"