"""Unit tests for the index hash table.

Why: The table is the only mutable state in the library. Consumers index
weight vectors with its output, so a slot that moves, a readonly call that
stores, or a counter that drifts corrupts learning without any error.

Testing strategy:
- Slot assignment: dense, first-seen order, stable
- Readonly: never mutates, even for unseen keys
- Overflow: hashed collisions, exact counter, one-time report
- State handoff: state_dict / from_state_dict reproduce lookups
"""

import json
import logging

import pytest

from tilecoder import IndexHashTable, InvalidCapacityError, hash_coords
from tilecoder.hashing import CoordinateHash


class TestConstruction:
    """Tests for table creation."""

    def test_empty_table(self) -> None:
        table = IndexHashTable(16)
        assert table.size == 16
        assert table.count == 0
        assert table.overflow_count == 0
        assert not table.is_full
        assert len(table) == 0

    @pytest.mark.parametrize("size", [0, -1, 2.5, "8", None, True])
    def test_invalid_size(self, size: object) -> None:
        """Non-positive and non-int sizes are rejected, never clamped."""
        with pytest.raises(InvalidCapacityError):
            IndexHashTable(size)  # type: ignore[arg-type]

    def test_invalid_capacity_is_value_error(self) -> None:
        with pytest.raises(ValueError, match="positive integer"):
            IndexHashTable(0)

    def test_repr(self) -> None:
        assert repr(IndexHashTable(8)) == "IndexHashTable(size=8, count=0, overflow_count=0)"


class TestSlotAssignment:
    """Tests for the not-full state."""

    def test_indices_assigned_in_order(self, table: IndexHashTable) -> None:
        """Each new key gets the count measured just before the call."""
        for i in range(10):
            before = table.count
            assert table.upsert((i, i * 2)) == before
            assert table.count == before + 1

    def test_known_key_stable(self, table: IndexHashTable) -> None:
        first = table.upsert((3, 1))
        table.upsert((4, 1))
        assert table.upsert((3, 1)) == first
        assert table.lookup((3, 1)) == first
        assert table.count == 2

    def test_key_equality_is_structural(self, table: IndexHashTable) -> None:
        """Order matters; equal tuples are one key."""
        a = table.upsert((1, 2, 3))
        b = table.upsert((3, 2, 1))
        assert a != b
        assert table.upsert(tuple([1, 2, 3])) == a

    def test_bijection_until_full(self, small_table: IndexHashTable) -> None:
        indices = [small_table.upsert((0, i)) for i in range(4)]
        assert indices == [0, 1, 2, 3]
        assert small_table.is_full
        assert small_table.overflow_count == 0

    def test_get_index_and_contains(self, table: IndexHashTable) -> None:
        table.upsert((0, 5))
        assert (0, 5) in table
        assert table.get_index((0, 5)) == 0
        assert table.get_index((0, 6)) is None
        assert (0, 6) not in table


class TestReadonly:
    """Tests for readonly resolution."""

    def test_unseen_key_does_not_mutate(self, table: IndexHashTable) -> None:
        table.upsert((0, 0))
        for i in range(1, 20):
            table.lookup((0, i))
        assert table.count == 1
        assert table.overflow_count == 0
        assert (0, 1) not in table

    def test_unseen_key_returns_hashed_index(self, table: IndexHashTable) -> None:
        key = (2, 7, 11)
        assert table.resolve(key, readonly=True) == hash_coords(key) % table.size

    def test_readonly_does_not_change_assignment_order(self) -> None:
        """Readonly calls between upserts leave later slots unchanged."""
        plain = IndexHashTable(32)
        mixed = IndexHashTable(32)
        keys = [(0, i) for i in range(10)]

        for key in keys:
            mixed.lookup((9, key[1]))
            assert mixed.upsert(key) == plain.upsert(key)

    def test_readonly_on_full_table_does_not_count(
        self, full_table: tuple[IndexHashTable, list[tuple[int, ...]]]
    ) -> None:
        table, _ = full_table
        table.lookup((1, 99))
        assert table.overflow_count == 0


class TestOverflow:
    """Tests for the full state."""

    def test_overflow_collides_with_existing_slot(
        self, full_table: tuple[IndexHashTable, list[tuple[int, ...]]]
    ) -> None:
        """One more distinct key gets an occupied index, not a new one."""
        table, keys = full_table
        occupied = {table.get_index(key) for key in keys}

        index = table.upsert((1, 1000))

        assert table.overflow_count == 1
        assert table.count == 4
        assert 0 <= index < 4
        assert index in occupied
        assert index == hash_coords((1, 1000)) % 4
        assert (1, 1000) not in table

    def test_overflow_counter_exact(
        self, full_table: tuple[IndexHashTable, list[tuple[int, ...]]]
    ) -> None:
        """Every refused key counts, including repeats of the same key."""
        table, _ = full_table
        for i in range(5):
            table.upsert((2, i))
        table.upsert((2, 0))
        assert table.overflow_count == 6

    def test_known_keys_resolve_after_full(
        self, full_table: tuple[IndexHashTable, list[tuple[int, ...]]]
    ) -> None:
        table, keys = full_table
        table.upsert((5, 5))
        assert [table.upsert(key) for key in keys] == [0, 1, 2, 3]
        assert table.overflow_count == 1

    def test_first_overflow_logs_once(
        self,
        full_table: tuple[IndexHashTable, list[tuple[int, ...]]],
        caplog: pytest.LogCaptureFixture,
    ) -> None:
        table, _ = full_table
        with caplog.at_level(logging.WARNING, logger="tilecoder.tiling.iht"):
            table.upsert((1, 1))
            table.upsert((1, 2))
            table.upsert((1, 3))

        warnings = [r for r in caplog.records if r.levelno == logging.WARNING]
        assert len(warnings) == 1
        assert "full" in warnings[0].getMessage()

    def test_warning_can_be_disabled(self, caplog: pytest.LogCaptureFixture) -> None:
        table = IndexHashTable(1, warn_on_full=False)
        table.upsert((0,))
        with caplog.at_level(logging.WARNING, logger="tilecoder.tiling.iht"):
            table.upsert((1,))
        assert caplog.records == []
        assert table.overflow_count == 1

    def test_on_full_observer_called_once(self) -> None:
        calls: list[IndexHashTable] = []
        table = IndexHashTable(2, on_full=calls.append)
        for i in range(6):
            table.upsert((0, i))
        assert calls == [table]
        assert table.overflow_count == 4

    def test_custom_hasher_used_for_overflow(self) -> None:
        hasher = CoordinateHash(seed=11)
        table = IndexHashTable(3, hasher=hasher, warn_on_full=False)
        for i in range(3):
            table.upsert((0, i))
        assert table.upsert((4, 4)) == hasher((4, 4)) % 3


class TestStateDict:
    """Tests for handing a table's state to the host and back."""

    def test_round_trip_reproduces_lookups(self, table: IndexHashTable) -> None:
        keys = [(t, t + 3, 1) for t in range(12)]
        indices = [table.upsert(key) for key in keys]

        restored = IndexHashTable.from_state_dict(table.state_dict())

        assert restored.size == table.size
        assert restored.count == table.count
        assert [restored.lookup(key) for key in keys] == indices
        assert restored.upsert((99, 99)) == table.upsert((99, 99))

    def test_overflow_count_restored(
        self, full_table: tuple[IndexHashTable, list[tuple[int, ...]]]
    ) -> None:
        table, _ = full_table
        table.upsert((3, 3))
        table.upsert((3, 4))

        restored = IndexHashTable.from_state_dict(table.state_dict())
        assert restored.overflow_count == 2
        assert restored.is_full

    def test_state_is_a_copy(self, table: IndexHashTable) -> None:
        table.upsert((0, 1))
        state = table.state_dict()
        table.upsert((0, 2))
        assert state["count"] == 1
        assert len(state["mapping"]) == 1

    def test_insertion_order_irrelevant(self) -> None:
        state = {
            "size": 8,
            "count": 3,
            "overflow_count": 0,
            "mapping": {(0, 9): 2, (0, 7): 0, (0, 8): 1},
        }
        restored = IndexHashTable.from_state_dict(state)
        assert restored.lookup((0, 7)) == 0
        assert restored.upsert((1, 1)) == 3

    def test_json_pairs_accepted(self, table: IndexHashTable) -> None:
        """Keys serialized as lists come back as tuples."""
        table.upsert((0, 4, 2))
        table.upsert((1, 4, 2))
        state = table.state_dict()
        payload = json.dumps({**state, "mapping": [[list(k), v] for k, v in state["mapping"].items()]})

        restored = IndexHashTable.from_state_dict(json.loads(payload))
        assert restored.lookup((1, 4, 2)) == 1

    def test_missing_keys_rejected(self) -> None:
        with pytest.raises(ValueError, match="missing"):
            IndexHashTable.from_state_dict({"size": 4})

    def test_duplicate_indices_rejected(self) -> None:
        state = {"size": 4, "count": 2, "overflow_count": 0, "mapping": {(0,): 0, (1,): 0}}
        with pytest.raises(ValueError, match="Stored indices"):
            IndexHashTable.from_state_dict(state)

    def test_count_mismatch_rejected(self) -> None:
        state = {"size": 4, "count": 3, "overflow_count": 0, "mapping": {(0,): 0}}
        with pytest.raises(ValueError, match="count"):
            IndexHashTable.from_state_dict(state)

    def test_overflow_before_full_rejected(self) -> None:
        state = {"size": 4, "count": 1, "overflow_count": 2, "mapping": {(0,): 0}}
        with pytest.raises(ValueError, match="overflow_count"):
            IndexHashTable.from_state_dict(state)

    @pytest.mark.parametrize(
        "state",
        [
            {"size": 4, "count": 2, "overflow_count": 0, "mapping": {(0,): 0, (1,): 1.7}},
            {"size": 4, "count": 1, "overflow_count": 0, "mapping": {(0,): True}},
            {"size": 4, "count": "1", "overflow_count": 0, "mapping": {(0,): 0}},
            {"size": 4, "count": 1, "overflow_count": 0.0, "mapping": {(0,): 0}},
        ],
    )
    def test_non_integer_values_rejected(self, state: dict) -> None:
        """Indices and counters must be integers, never truncated or compared as strings."""
        with pytest.raises(ValueError, match="must be an integer"):
            IndexHashTable.from_state_dict(state)

    def test_invalid_size_rejected(self) -> None:
        state = {"size": 0, "count": 0, "overflow_count": 0, "mapping": {}}
        with pytest.raises(InvalidCapacityError):
            IndexHashTable.from_state_dict(state)
