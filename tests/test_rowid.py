import pytest

from minisql.config import INVALID_PAGE_ID
from minisql.rowid import INVALID_ROWID, RowId


@pytest.mark.parametrize(
    "rid",
    [RowId(0, 0), RowId(1000, 7), RowId(-1, 0), RowId(2**31 - 1, 2**32 - 1), RowId(-(2**31), 5)],
)
def test_round_trip_through_int(rid):
    assert RowId.from_int(rid.to_int()) == rid
    assert int(rid) == rid.to_int()


def test_small_value_is_slot_of_page_zero():
    rid = RowId.from_int(500)
    assert rid.page_id == 0
    assert rid.slot_num == 500


def test_page_id_occupies_high_half():
    assert int(RowId(1, 0)) == 1 << 32
    assert RowId.from_int(1 << 32) == RowId(1, 0)


def test_default_is_invalid():
    assert RowId() == INVALID_ROWID
    assert INVALID_ROWID.page_id == INVALID_PAGE_ID
    assert INVALID_ROWID.slot_num == 0


def test_equal_ids_hash_alike():
    table = {RowId(1000, 3): "row"}
    assert table[RowId.from_int(RowId(1000, 3).to_int())] == "row"
    assert RowId(1000, 3) != RowId(1000, 4)


@pytest.mark.parametrize("page_id, slot", [(0, -1), (0, 2**32), (2**31, 0), (-(2**31) - 1, 0)])
def test_out_of_range_parts_rejected(page_id, slot):
    with pytest.raises(ValueError):
        RowId(page_id, slot)


def test_out_of_range_packed_value_rejected():
    with pytest.raises(ValueError):
        RowId.from_int(1 << 63)