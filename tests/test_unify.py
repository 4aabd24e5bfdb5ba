from j2c.etl.transform.flatten import flatten_record
from j2c.etl.transform.unify import build_table, unify


def _rows(records):
    rows = []
    for record in records:
        rows.extend(flatten_record(record))
    return rows


def test_schema_union_first_seen_order():
    records = [
        {"id": 1, "name": "Alice", "role": "Admin"},
        {"id": 2, "name": "Bob", "department": "Sales"},
        {"id": 3, "name": "Charlie", "role": "User", "department": "IT"},
    ]
    table = build_table(_rows(records))
    assert table.columns == ["id", "name", "role", "department"]
    assert table.rows[1]["role"] == ""
    assert table.rows[0]["department"] == ""
    assert table.rows[2] == {
        "id": "3",
        "name": "Charlie",
        "role": "User",
        "department": "IT",
    }


def test_every_row_has_every_column_in_schema_order():
    records = [{"b": 1}, {"a": {"x": 1}}, {"c": None, "b": 2}]
    table = build_table(_rows(records))
    assert table.columns == ["b", "a.x", "c"]
    for row in table.rows:
        assert list(row) == table.columns


def test_unify_is_idempotent():
    rows = _rows([{"z": 1, "y": {"k": 2}}, {"a": 3, "z": 4}])
    assert unify(rows) == unify(rows) == ["z", "y.k", "a"]


def test_unify_skips_blank_keys():
    assert unify([{"": "x", " ": "y", "a": "1"}]) == ["a"]


def test_unify_empty_input():
    assert unify([]) == []
    table = build_table([])
    assert table.columns == [] and table.rows == []


def test_row_values_follow_columns():
    table = build_table([{"a": "1"}, {"b": "2"}])
    assert table.row_values() == [["1", ""], ["", "2"]]
    assert table.row_count == 2
    assert table.column_count == 2
