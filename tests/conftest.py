"""Pytest configuration and shared fixtures.

Why: Most tests need a fresh index hash table, and the overflow tests need
one that is already exactly full, so those live here.
"""

import pytest

from tilecoder import IndexHashTable, make_index_hash_table


@pytest.fixture
def table() -> IndexHashTable:
    """Empty table large enough that nothing overflows."""
    return make_index_hash_table(1024)


@pytest.fixture
def small_table() -> IndexHashTable:
    """Empty table that fills after four keys."""
    return IndexHashTable(4)


@pytest.fixture
def full_table() -> tuple[IndexHashTable, list[tuple[int, ...]]]:
    """Table of size 4 holding exactly four keys, plus those keys in order."""
    table = IndexHashTable(4)
    keys = [(0, i) for i in range(table.size)]
    for key in keys:
        table.upsert(key)
    return table, keys
