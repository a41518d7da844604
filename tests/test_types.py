import pytest

from minisql.config import FIELD_NULL_LEN, VARCHAR_MAX_LEN
from minisql.types import (
    CmpBool,
    Field,
    TypeId,
    get_cmp_bool,
    get_type_size,
    type_for,
)


@pytest.mark.parametrize("value", [0, 1, -1, 500, 2**31 - 1, -(2**31)])
def test_int_round_trip(value):
    field = Field(TypeId.INT, value)
    data = field.serialize()
    assert len(data) == field.serialized_size() == get_type_size(TypeId.INT)
    decoded, consumed = Field.deserialize(data, TypeId.INT, False)
    assert consumed == len(data)
    assert decoded == field
    assert decoded.compare_equals(field) == CmpBool.TRUE


def test_int_size_is_four():
    assert get_type_size(TypeId.INT) == 4


def test_char_size_is_zero():
    assert get_type_size(TypeId.CHAR) == 0


def test_unknown_type_size_raises():
    with pytest.raises(ValueError):
        get_type_size(TypeId.INVALID)


def test_float_round_trip():
    field = Field(TypeId.FLOAT, 2.33)
    decoded, consumed = Field.deserialize(field.serialize(), TypeId.FLOAT, False)
    assert consumed == field.serialized_size()
    assert decoded.compare_equals(Field(TypeId.FLOAT, 2.33)) == CmpBool.TRUE


def test_char_round_trip_minisql():
    field = Field(TypeId.CHAR, "minisql")
    data = field.serialize()
    decoded, consumed = Field.deserialize(data + b"trailing", TypeId.CHAR, False)
    assert consumed == len(data) == field.serialized_size()
    assert decoded == field
    assert decoded.length == len("minisql")
    assert str(decoded) == "minisql"


def test_char_wire_format():
    assert Field(TypeId.CHAR, "aaa").serialize() == b"\x03\x00\x00\x00aaa"


@pytest.mark.parametrize("type_id", [TypeId.INT, TypeId.FLOAT, TypeId.CHAR])
def test_null_field_takes_no_bytes(type_id):
    field = Field(type_id)
    assert field.is_null
    assert field.serialize() == b""
    assert field.serialized_size() == 0
    decoded, consumed = Field.deserialize(b"\xff\xff\xff\xff", type_id, True)
    assert consumed == 0
    assert decoded.is_null
    assert decoded.type_id == type_id


def test_null_char_length():
    assert Field(TypeId.CHAR).length == FIELD_NULL_LEN


def test_length_of_int_raises():
    with pytest.raises(TypeError):
        Field(TypeId.INT, 3).length


def test_int_comparisons():
    small, big = Field(TypeId.INT, 1), Field(TypeId.INT, 500)
    assert small.compare_less_than(big) == CmpBool.TRUE
    assert big.compare_less_than(big) == CmpBool.FALSE
    assert big.compare_less_than_equals(big) == CmpBool.TRUE
    assert big.compare_greater_than(small) == CmpBool.TRUE
    assert small.compare_greater_than_equals(big) == CmpBool.FALSE
    assert small.compare_not_equals(big) == CmpBool.TRUE
    assert small.compare_equals(big) == CmpBool.FALSE


def test_char_comparisons_follow_bytes_then_length():
    assert Field(TypeId.CHAR, "abc").compare_less_than(Field(TypeId.CHAR, "abd")) == CmpBool.TRUE
    assert Field(TypeId.CHAR, "ab").compare_less_than(Field(TypeId.CHAR, "abc")) == CmpBool.TRUE
    assert Field(TypeId.CHAR, "abc").compare_equals(Field(TypeId.CHAR, b"abc")) == CmpBool.TRUE
    assert Field(TypeId.CHAR, "minisql").compare_equals(Field(TypeId.CHAR, "aaa")) == CmpBool.FALSE


def test_null_comparison_is_null():
    null = Field(TypeId.INT)
    one = Field(TypeId.INT, 1)
    assert null.compare_equals(one) == CmpBool.NULL
    assert one.compare_less_than(null) == CmpBool.NULL


def test_mismatched_types_not_comparable():
    with pytest.raises(TypeError):
        Field(TypeId.INT, 1).compare_equals(Field(TypeId.FLOAT, 1.0))


def test_compare_with_operator_string():
    left, right = Field(TypeId.INT, 3), Field(TypeId.INT, 7)
    assert type_for(TypeId.INT).compare(left, right, "<") == CmpBool.TRUE
    assert type_for(TypeId.INT).compare(left, right, "<>") == CmpBool.TRUE
    assert type_for(TypeId.INT).compare(left, right, ">=") == CmpBool.FALSE


def test_unknown_operator_raises():
    with pytest.raises(ValueError):
        type_for(TypeId.INT).compare(Field(TypeId.INT, 1), Field(TypeId.INT, 1), "~")


def test_int_out_of_range_raises():
    with pytest.raises(ValueError):
        Field(TypeId.INT, 2**31)


def test_char_too_long_raises():
    with pytest.raises(ValueError):
        Field(TypeId.CHAR, "x" * VARCHAR_MAX_LEN)


def test_invalid_type_has_no_implementation():
    with pytest.raises(ValueError):
        type_for(TypeId.INVALID)


def test_truncated_data_raises():
    with pytest.raises(ValueError):
        Field.deserialize(b"\x01\x00", TypeId.INT, False)
    with pytest.raises(ValueError):
        Field.deserialize(b"\x09\x00\x00\x00ab", TypeId.CHAR, False)


def test_string_forms():
    assert str(Field(TypeId.INT, 42)) == "42"
    assert str(Field(TypeId.CHAR)) == "NULL"
    assert str(Field(TypeId.FLOAT, 2.5)) == "2.500000"


def test_get_cmp_bool():
    assert get_cmp_bool(True) == CmpBool.TRUE
    assert get_cmp_bool(False) == CmpBool.FALSE


def test_check_comparable():
    assert Field(TypeId.INT, 1).check_comparable(Field(TypeId.INT))
    assert not Field(TypeId.INT, 1).check_comparable(Field(TypeId.CHAR, "a"))