import pytest

from minisql.config import DBError, DbErr


def test_error_carries_code_and_message():
    err = DBError(DbErr.TABLE_NOT_EXIST, "no table t1")
    assert err.code is DbErr.TABLE_NOT_EXIST
    assert err.message == "no table t1"
    assert str(err) == "no table t1"


def test_error_default_message_is_code_name():
    err = DBError(DbErr.KEY_NOT_FOUND)
    assert err.message == DbErr.KEY_NOT_FOUND.name
    assert str(err) == "KEY_NOT_FOUND"


def test_error_accepts_plain_integer_code():
    err = DBError(int(DbErr.INDEX_NOT_FOUND), "missing")
    assert err.code is DbErr.INDEX_NOT_FOUND


def test_error_rejects_unknown_code():
    with pytest.raises(ValueError):
        DBError(999, "bad")


def test_error_is_raised_and_caught():
    err = DBError(DbErr.COLUMN_NAME_NOT_EXIST, "no column x")
    assert isinstance(err, Exception)
    with pytest.raises(DBError) as info:
        raise err
    assert info.value is err
    assert info.value.code is DbErr.COLUMN_NAME_NOT_EXIST
    assert info.value.message == "no column x"


def test_codes_round_trip_through_values():
    for code in DbErr:
        assert DbErr(int(code)) is code
    assert DbErr.SUCCESS == 0