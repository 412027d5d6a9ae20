import copy
import logging
import random

import pytest

from hashdict import HashTable, KeyNotFound, LengthMismatch
from hashdict.config import MIN_CAPACITY


def _is_power_of_two(n):
    return n >= 1 and n & (n - 1) == 0


# ----------------------------
# Construction
# ----------------------------

def test_new_table_is_empty_at_min_capacity():
    t = HashTable()
    assert t.size() == 0
    assert t.capacity() == MIN_CAPACITY == 16
    assert t.empty()
    assert t.load_factor() == 0.0
    assert len(t) == 0
    assert not t


def test_parallel_sequences_length_mismatch():
    with pytest.raises(LengthMismatch):
        HashTable(["a", "b"], ["x"])
    # Still a ValueError for callers using builtin exception types.
    with pytest.raises(ValueError):
        HashTable(keys=["a"])


def test_parallel_sequences_last_value_wins():
    t = HashTable(["a", "b", "a"], [1, 2, 3])
    assert t.size() == 2
    assert t.at("a") == 3
    assert t.at("b") == 2


def test_parallel_sequences_accept_iterables():
    t = HashTable(iter(range(5)), (v * 10 for v in range(5)))
    assert t.size() == 5
    assert t.at(4) == 40


# ----------------------------
# Insert / erase
# ----------------------------

def test_insert_is_insert_if_absent():
    t = HashTable()
    assert t.insert("a", 1) is True
    assert t.insert("a", 2) is False
    assert t.at("a") == 1
    assert t.size() == 1


def test_twelve_keys_fit_then_thirteenth_doubles_capacity():
    t = HashTable()
    for i in range(12):
        t.insert(f"k{i}", i)
    assert t.capacity() == 16
    assert t.size() == 12

    t.insert("k12", 12)
    assert t.capacity() == 32
    assert t.size() == 13
    for i in range(13):
        assert t.at(f"k{i}") == i


def test_shrink_from_thirteen_down_to_seven():
    t = HashTable([f"k{i}" for i in range(13)], list(range(13)))
    assert t.capacity() == 32

    for i in range(12, 7, -1):
        t.erase(f"k{i}")
    # 8 / 32 == 1/4 is not below the lower bound.
    assert t.size() == 8
    assert t.capacity() == 32

    t.erase("k7")
    assert t.size() == 7
    assert t.capacity() == 16
    for i in range(7):
        assert t.at(f"k{i}") == i


def test_erase_absent_key_changes_nothing():
    t = HashTable(["a"], [1])
    assert t.erase("missing") is False
    assert t.size() == 1
    assert t.capacity() == 16


def test_erasing_everything_shrinks_to_one_bucket_and_regrows():
    t = HashTable()
    t.insert("a", 1)
    assert t.erase("a") is True
    assert t.capacity() == 1
    assert t.empty()

    t.insert("a", 1)
    assert t.capacity() == 2
    t.insert("b", 2)
    assert t.capacity() == 4
    t.insert("c", 3)
    assert t.capacity() == 4
    assert sorted(t.keys()) == ["a", "b", "c"]


def test_random_operations_keep_size_and_load_factor_invariants():
    rng = random.Random(1234)
    t = HashTable()
    reference = {}
    for _ in range(3000):
        k = rng.randint(0, 300)
        if rng.random() < 0.55:
            assert t.insert(k, k * 2) is (k not in reference)
            reference.setdefault(k, k * 2)
            assert t.load_factor() <= 0.75
        else:
            removed = t.erase(k)
            assert removed is (k in reference)
            reference.pop(k, None)
            if removed:
                assert t.capacity() == 1 or t.load_factor() >= 0.25
        assert _is_power_of_two(t.capacity())
        assert t.size() == len(reference)

    assert sum(1 for k in range(301) if t.contains_key(k)) == t.size()
    for k, v in reference.items():
        assert t.at(k) == v


def test_resize_is_logged(caplog):
    caplog.set_level(logging.DEBUG, logger="hashdict.datastructures.hash_table")
    t = HashTable()
    for i in range(13):
        t.insert(i, i)
    assert any("16 -> 32" in r.getMessage() for r in caplog.records)


# ----------------------------
# Lookup
# ----------------------------

def test_at_missing_key_raises_key_not_found():
    t = HashTable()
    with pytest.raises(KeyNotFound) as exc:
        t.at("nope")
    assert exc.value.key == "nope"
    with pytest.raises(KeyError):
        t.at("nope")


def test_at_returns_mutable_value_in_place():
    t = HashTable()
    t.insert("a", [])
    t.at("a").append(1)
    assert t.at("a") == [1]


def test_index_auto_vivifies_with_default_factory():
    t = HashTable(default_factory=list)
    t["a"].append(1)
    t["a"].append(2)
    assert t.at("a") == [1, 2]
    assert t.size() == 1


def test_index_without_default_factory_does_not_insert():
    t = HashTable()
    with pytest.raises(KeyNotFound):
        t["missing"]
    assert t.size() == 0


def test_auto_vivify_can_trigger_growth():
    t = HashTable(default_factory=int)
    for i in range(12):
        t.insert(i, i)
    assert t[100] == 0
    assert t.capacity() == 32
    assert t.at(100) == 0


def test_assignment_overwrites_and_last_write_is_visible():
    t = HashTable()
    t["a"] = 1
    t["a"] = 2
    t["b"] = 3
    assert t["a"] == 2
    assert t.at("b") == 3
    assert t.size() == 2


def test_get_and_contains_never_insert():
    t = HashTable(default_factory=int)
    assert t.get("x") is None
    assert t.get("x", 5) == 5
    assert "x" not in t
    assert not t.contains_key("x")
    assert t.size() == 0


def test_del_missing_key_raises():
    t = HashTable(["a"], [1])
    del t["a"]
    assert "a" not in t
    with pytest.raises(KeyNotFound):
        del t["a"]


# ----------------------------
# Diagnostics
# ----------------------------

def test_bucket_index_is_hash_masked_by_capacity():
    t = HashTable()
    t.insert(37, "v")
    assert t.bucket_index(37) == 37 & 15 == 5
    for i in range(100, 113):
        t.insert(i, i)
    assert t.capacity() == 32
    assert t.bucket_index(37) == 37 & 31


def test_negative_hashes_map_into_range():
    t = HashTable(hash_func=lambda k: -1)
    t.insert("a", 1)
    assert t.bucket_index("a") == 15


def test_colliding_keys_share_a_bucket():
    t = HashTable(hash_func=lambda k: 0)
    for k in "abcde":
        t.insert(k, k)
    assert t.bucket_size("c") == 5
    assert t.bucket_index("c") == 0
    assert t.erase("c") is True
    assert t.bucket_size("a") == 4
    assert [k for k, _ in t.items()] == ["a", "b", "d", "e"]


def test_bucket_accessors_raise_for_missing_key():
    t = HashTable()
    with pytest.raises(KeyNotFound):
        t.bucket_size("x")
    with pytest.raises(KeyNotFound):
        t.bucket_index("x")


def test_clear_keeps_capacity():
    t = HashTable(range(13), range(13))
    assert t.capacity() == 32
    t.clear()
    assert t.size() == 0
    assert t.empty()
    assert t.capacity() == 32
    assert not t.contains_key(3)


# ----------------------------
# Equality / copy / assign
# ----------------------------

def test_equality_ignores_order_and_capacity():
    big = HashTable(range(13), range(13))
    for k in range(12, 7, -1):
        big.erase(k)
    small = HashTable(reversed(range(8)), reversed(range(8)))
    assert big.capacity() == 32
    assert small.capacity() == 16
    assert big == small
    assert not (big != small)


def test_inequality():
    a = HashTable(["x", "y"], [1, 2])
    assert a != HashTable(["x", "y"], [1, 3])
    assert a != HashTable(["x"], [1])
    assert a != HashTable(["x", "z"], [1, 2])
    assert a != {"x": 1, "y": 2}


def test_tables_are_unhashable():
    with pytest.raises(TypeError):
        hash(HashTable())


def test_copy_is_independent_of_original():
    original = HashTable(["a", "b"], [1, 2])
    clone = original.copy()
    assert clone == original
    assert clone.capacity() == original.capacity()

    clone.insert("c", 3)
    clone.erase("a")
    clone["b"] = 20
    assert original.size() == 2
    assert original.at("a") == 1
    assert original.at("b") == 2
    assert not original.contains_key("c")

    original["a"] = 100
    assert not clone.contains_key("a")

    assert copy.copy(original) == original


def test_copy_does_not_share_mutable_values():
    original = HashTable(["a"], [[1]])
    clone = original.copy()
    clone.at("a").append(2)
    assert original.at("a") == [1]
    assert clone.at("a") == [1, 2]

    original.at("a").append(3)
    assert clone.at("a") == [1, 2]


def test_assign_does_not_share_mutable_values():
    src = HashTable(["k"], [[1]], default_factory=list)
    dst = HashTable(default_factory=list)
    dst.assign(src)
    dst["k"].append(99)
    assert src.at("k") == [1]
    assert dst.at("k") == [1, 99]


def test_assign_replaces_contents_and_capacity():
    source = HashTable(range(13), range(13))
    target = HashTable(["z"], ["old"])
    target.assign(source)
    assert target == source
    assert target.capacity() == 32
    assert not target.contains_key("z")

    target.erase(0)
    assert source.contains_key(0)

    source.assign(source)
    assert source.size() == 13


def test_keys_values_items():
    t = HashTable(["a", "b", "c"], [1, 2, 3])
    assert sorted(t.keys()) == ["a", "b", "c"]
    assert sorted(t.values()) == [1, 2, 3]
    assert sorted(t.items()) == [("a", 1), ("b", 2), ("c", 3)]
    assert sorted(t) == ["a", "b", "c"]
