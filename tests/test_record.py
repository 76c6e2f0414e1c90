import pytest

from zlogger.record import MAXLEN_PATH, LogMessage, Record, RecordTable


def test_register_and_get():
    seen = []
    table = RecordTable()
    record = table.register("mine", seen.append)
    assert table.get("mine") is record
    assert "mine" in table
    assert len(table) == 1
    record.output(LogMessage("hello", "p"))
    assert seen == [LogMessage("hello", "p")]


def test_get_missing():
    table = RecordTable()
    assert table.get("none") is None
    assert "none" not in table


def test_register_replaces():
    table = RecordTable()
    table.register("r", lambda msg: 0)
    second = table.register("r", lambda msg: 1)
    assert table.get("r") is second
    assert len(table) == 1


def test_name_too_long():
    with pytest.raises(ValueError):
        Record("n" * (MAXLEN_PATH + 1), lambda msg: 0)


def test_name_at_limit_accepted():
    record = Record("n" * MAXLEN_PATH, lambda msg: 0)
    assert len(record.name) == MAXLEN_PATH


def test_output_must_be_callable():
    table = RecordTable()
    with pytest.raises(TypeError):
        table.register("bad", "not callable")
    assert len(table) == 0


def test_message_length_and_default_path():
    msg = LogMessage("abc")
    assert len(msg) == len("abc")
    assert msg.path == ""