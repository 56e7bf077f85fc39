import logging

from neovide.from_value import (
    parse_bool,
    parse_f32,
    parse_i32,
    parse_string,
    parse_u32,
    parse_u64,
)

U64_MAX = (1 << 64) - 1
I64_MAX = (1 << 63) - 1


def test_parse_from_value_f32():
    v0 = 0.0
    v0 = parse_f32(v0, 1.0)
    assert v0 == 1.0
    v0 = parse_f32(v0, -1)
    assert v0 == -1.0
    v0 = parse_f32(v0, U64_MAX)
    assert v0 == float(U64_MAX)

    v0 = parse_f32(v0, "asd")
    assert v0 == float(U64_MAX)


def test_parse_from_value_u64():
    v0 = 0
    v0 = parse_u64(v0, U64_MAX)
    assert v0 == U64_MAX

    v0 = parse_u64(v0, -1)
    assert v0 == U64_MAX


def test_parse_from_value_u32():
    v0 = 0
    v0 = parse_u32(v0, U64_MAX)
    assert v0 == 0xFFFFFFFF

    v0 = parse_u32(v0, -1)
    assert v0 == 0xFFFFFFFF


def test_parse_from_value_i32():
    v0 = 0
    v0 = parse_i32(v0, I64_MAX)
    assert v0 == -1

    v0 = parse_i32(v0, -1)
    assert v0 == -1


def test_parse_from_value_string():
    v0 = "foo"
    v0 = parse_string(v0, "bar")
    assert v0 == "bar"

    v0 = parse_string(v0, -1)
    assert v0 == "bar"


def test_parse_from_value_bool():
    v0 = False
    v0 = parse_bool(v0, True)
    assert v0 is True
    v0 = parse_bool(v0, 0)
    assert v0 is False
    v0 = parse_bool(v0, 1)
    assert v0 is True

    v0 = parse_bool(v0, -1)
    assert v0 is True


def test_bool_is_not_taken_as_integer():
    assert parse_u64(7, True) == 7
    assert parse_i32(7, False) == 7
    assert parse_f32(2.0, True) == 2.0


def test_out_of_range_integers_are_rejected():
    assert parse_u64(3, U64_MAX + 1) == 3
    assert parse_i32(3, I64_MAX + 1) == 3


def test_mismatch_logs_error(caplog):
    with caplog.at_level(logging.ERROR):
        assert parse_string("keep", 5) == "keep"
    assert "Setting expected a string" in caplog.text