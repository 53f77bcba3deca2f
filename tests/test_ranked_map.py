import io

import pytest

from searchcore.ranked_map import RankedMap


def _round_trip(ranked):
    buffer = io.BytesIO()
    ranked.write_to_bin(buffer)
    buffer.seek(0)
    return RankedMap.read_from_bin(buffer)


def test_insert_get_and_remove():
    ranked = RankedMap()
    ranked.insert(7, 3, 42)
    assert ranked.get(7, 3) == 42
    assert len(ranked) == 1

    ranked.remove(7, 3)
    assert ranked.get(7, 3) is None
    assert len(ranked) == 0


def test_insert_replaces_existing_value():
    ranked = RankedMap()
    ranked.insert(1, 1, 10)
    ranked.insert(1, 1, 2.5)
    assert ranked.get(1, 1) == 2.5
    assert len(ranked) == 1


def test_remove_missing_entry_leaves_map_unchanged():
    ranked = RankedMap()
    ranked.insert(1, 2, 3)
    ranked.remove(9, 9)
    assert len(ranked) == 1
    assert ranked.get(1, 2) == 3


def test_empty_map_is_falsy():
    assert not RankedMap()


def test_round_trip_keeps_values_and_kinds():
    ranked = RankedMap()
    ranked.insert(1, 0, 12)
    ranked.insert(2, 5, -8)
    ranked.insert(3, 1, 44.506)

    restored = _round_trip(ranked)

    assert restored == ranked
    assert isinstance(restored.get(1, 0), int)
    assert isinstance(restored.get(2, 5), int)
    assert isinstance(restored.get(3, 1), float)


def test_empty_map_round_trip():
    buffer = io.BytesIO()
    RankedMap().write_to_bin(buffer)
    assert buffer.getvalue() == b"\x00" * 8
    buffer.seek(0)
    assert len(RankedMap.read_from_bin(buffer)) == 0


def test_truncated_data_is_rejected():
    ranked = RankedMap()
    ranked.insert(1, 0, 12)
    buffer = io.BytesIO()
    ranked.write_to_bin(buffer)
    truncated = io.BytesIO(buffer.getvalue()[:-1])
    with pytest.raises(ValueError):
        RankedMap.read_from_bin(truncated)


def test_unknown_tag_is_rejected():
    ranked = RankedMap()
    ranked.insert(1, 0, 12)
    buffer = io.BytesIO()
    ranked.write_to_bin(buffer)
    data = bytearray(buffer.getvalue())
    data[18] = 0xFF
    with pytest.raises(ValueError):
        RankedMap.read_from_bin(io.BytesIO(bytes(data)))


def test_non_numbers_are_rejected():
    ranked = RankedMap()
    with pytest.raises(TypeError):
        ranked.insert(1, 0, "12")
    with pytest.raises(TypeError):
        ranked.insert(1, 0, True)