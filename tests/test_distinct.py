from pageql.core.distinct import DistinctResolver
from tests.fakes import Row, UnhashableRow


def test_disabled_distinct_is_a_no_op():
    rows = [Row(1), Row(1), Row(2)]
    out = DistinctResolver().apply(rows, False)
    assert out is rows
    assert [r.id for r in out] == [1, 1, 2]


def test_enabled_distinct_removes_duplicates_keeping_first_order():
    rows = [Row(2), Row(1), Row(2), Row(3), Row(1)]
    out = DistinctResolver().apply(rows, True)
    assert [r.id for r in out] == [2, 1, 3]
    assert len(out) <= len(rows)
    for i, a in enumerate(out):
        for b in out[i + 1:]:
            assert a != b


def test_unhashable_rows_use_equality():
    rows = [UnhashableRow(1), UnhashableRow(1), UnhashableRow(2)]
    out = DistinctResolver().apply(rows, True)
    assert [r.id for r in out] == [1, 2]


def test_identity_dedupe_for_plain_objects():
    a, b = object(), object()
    assert DistinctResolver().apply([a, b, a, a], True) == [a, b]


def test_empty_page():
    assert DistinctResolver().apply([], True) == []


def test_mixed_hashable_and_unhashable_rows():
    rows = [UnhashableRow(1), Row(1), Row(2), UnhashableRow(2), Row(3)]
    out = DistinctResolver().apply(rows, True)
    assert [r.id for r in out] == [1, 2, 3]
    assert type(out[0]) is UnhashableRow
