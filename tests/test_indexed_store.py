"""Tests for sqlitecollections.indexed — the persistent list."""

from __future__ import annotations

import pytest

from sqlitecollections import IndexedStore, UnsupportedOperationError


@pytest.fixture()
def db_path(tmp_path):
    """Return a database path inside a temporary directory."""
    return str(tmp_path / "list.db")


@pytest.fixture()
def store(db_path):
    with IndexedStore.open_read_write(db_path) as s:
        yield s


# --- Append and positional access ---


def test_add_assigns_sequential_indices(store):
    assert store.add("v1") == 0
    assert store.add("v2") == 1
    assert store.index_of("v2") == 1
    assert store.get(0) == "v1"
    assert store[1] == "v2"


def test_append_and_extend(store):
    store.append("a")
    store.extend(["b", None, "c"])
    assert list(store) == ["a", "b", None, "c"]
    assert len(store) == 4


def test_get_missing_index_returns_none(store):
    store.add("only")
    assert store.get(5) is None


def test_set_replaces_existing_position(store):
    store.add("a")
    store.add("b")
    store.set(0, "A")
    assert list(store.iterate()) == ["A", "b"]
    assert store.count() == 2


def test_set_beyond_end_creates_sparse_position(store):
    store.add("a")
    store.set(9, "j")
    assert store.count() == 2
    assert store.get(9) == "j"
    assert store.get(5) is None
    assert list(store.entries()) == [(0, "a"), (9, "j")]
    # Appends land after the highest position.
    assert store.add("k") == 10


def test_stored_null_and_gap_look_the_same(store):
    store.add(None)
    assert store.get(0) is None
    assert store.get(1) is None
    assert store.count() == 1


def test_insert_is_unsupported(store):
    store.add("a")
    with pytest.raises(UnsupportedOperationError):
        store.insert(0, "b")
    with pytest.raises(NotImplementedError):
        store.insert(0, "b")
    assert list(store) == ["a"]


# --- Removal ---


def test_remove_at_leaves_gap(store):
    """Positions after a removed element are not renumbered."""
    store.add("v1")
    store.add("v2")
    assert store.remove_at(0) is True
    assert store.count() == 1
    assert store.get(0) is None
    assert store.get(1) == "v2"
    assert store.index_of("v2") == 1


def test_remove_at_missing_returns_false(store):
    store.add("a")
    assert store.remove_at(3) is False
    assert store.count() == 1


def test_del_removes_position(store):
    store.add("a")
    store.add("b")
    del store[1]
    assert list(store) == ["a"]


def test_append_after_removal_uses_next_position(store):
    store.add("a")
    store.add("b")
    store.remove_at(0)
    assert store.add("c") == 2


def test_remove_deletes_first_match_only(store):
    store.extend(["x", "y", "x"])
    assert store.remove("x") is True
    assert list(store.entries()) == [(1, "y"), (2, "x")]


def test_remove_absent_value_returns_false(store):
    store.add("a")
    assert store.remove("b") is False
    assert store.count() == 1


def test_remove_null_value(store):
    store.extend(["a", None])
    assert store.remove(None) is True
    assert list(store) == ["a"]


def test_remove_all_deletes_every_match(store):
    store.extend(["x", "y", "x", "x"])
    assert store.remove_all("x") == 3
    assert list(store) == ["y"]
    assert store.remove_all("x") == 0


def test_clear_empties_and_restarts_positions(store):
    store.extend(["a", "b"])
    store.clear()
    assert store.count() == 0
    assert list(store.iterate()) == []
    assert store.add("c") == 0


# --- Search ---


def test_index_of_absent_returns_minus_one(store):
    store.add("a")
    assert store.index_of("b") == -1


def test_index_of_returns_first_match(store):
    store.extend(["a", "b", "a"])
    assert store.index_of("a") == 0


def test_contains(store):
    store.extend(["a", None])
    assert store.contains("a") is True
    assert "a" in store
    assert None in store
    assert "b" not in store


# --- Validation ---


@pytest.mark.parametrize("index", [-1, -10])
def test_negative_index_raises_index_error(store, index):
    with pytest.raises(IndexError):
        store.get(index)
    with pytest.raises(IndexError):
        store.set(index, "x")
    with pytest.raises(IndexError):
        store.remove_at(index)


@pytest.mark.parametrize("index", ["0", 1.0, True, slice(0, 1)])
def test_non_integer_index_raises_type_error(store, index):
    with pytest.raises(TypeError):
        store.get(index)


def test_non_text_values_rejected(store):
    with pytest.raises(TypeError):
        store.add(3)
    with pytest.raises(TypeError):
        store.extend(["ok", 4])
    assert store.count() == 0


# --- Compaction ---


def test_compact_renumbers_densely_in_order(store):
    store.extend(["a", "b", "c", "d"])
    store.remove_at(0)
    store.remove_at(2)
    store.set(10, "k")

    assert store.compact() == 3

    assert list(store.entries()) == [(0, "b"), (1, "d"), (2, "k")]
    assert store.add("e") == 3


def test_compact_empty_store(store):
    assert store.compact() == 0
    assert store.count() == 0


# --- Persistence ---


def test_positions_survive_reopen(db_path):
    with IndexedStore.open_read_write(db_path) as store:
        store.extend(["a", "b", "c"])
        store.remove_at(1)

    with IndexedStore.open_read_write(db_path) as store:
        assert list(store.entries()) == [(0, "a"), (2, "c")]


def test_custom_table_name(db_path):
    with IndexedStore.open_read_write(db_path, "queue") as store:
        store.add("job")
        assert store.table_name == "queue"
    with IndexedStore.open_read_write(db_path) as default:
        assert default.count() == 0


# --- Range limits ---


@pytest.mark.parametrize("index", [2**63 - 1, 2**63, 2**70])
def test_get_beyond_rowid_range_returns_none(store, index):
    store.add("a")
    assert store.get(index) is None


@pytest.mark.parametrize("index", [2**63 - 1, 2**70])
def test_mutations_beyond_rowid_range_raise_index_error(store, index):
    with pytest.raises(IndexError):
        store.set(index, "x")
    with pytest.raises(IndexError):
        store.remove_at(index)
    assert store.count() == 0


def test_largest_index_is_addressable(store):
    store.set(2**63 - 2, "last")
    assert store.get(2**63 - 2) == "last"
