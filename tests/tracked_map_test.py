import random

import pytest

from hashmaps.growable_map import GrowableHashMap
from hashmaps.linear_map import LinearMap
from hashmaps.tracked_map import TrackedHashMap

BOTH_POLICIES = pytest.mark.parametrize("recount", [False, True], ids=["carry", "recount"])


def count_size_calls(monkeypatch):
    """Patch LinearMap.size to count how often buckets are measured."""
    calls = {"n": 0}
    original = LinearMap.size

    def counting(self):
        calls["n"] += 1
        return original(self)

    monkeypatch.setattr(LinearMap, "size", counting)
    return calls


@BOTH_POLICIES
def test_concrete_growth_scenario(recount):
    m = TrackedHashMap(num_buckets=2, factor=1.0, recount_on_rehash=recount)
    m.put(1, "a")
    m.put(2, "b")
    assert m.bucket_count == 2
    m.put(3, "c")
    assert m.bucket_count == 4
    assert m.size() == 3
    m.put(4, "d")
    assert m.bucket_count == 4
    m.put(5, "e")
    assert m.bucket_count == 8
    assert m.size() == 5
    assert m.get(3) == "c"
    assert m.recount() == 5


def test_new_key_adds_one_overwrite_adds_zero():
    m = TrackedHashMap()
    assert m.put("a", 1) is None
    assert m.size() == 1
    assert m.put("a", 2) == 1
    assert m.size() == 1
    m.put("b", 3)
    assert m.size() == 2


def test_remove_present_subtracts_one_absent_zero():
    m = TrackedHashMap()
    m.put("a", 1)
    m.put("b", 2)
    assert m.remove("zzz") is None
    assert m.size() == 2
    assert m.remove("a") == 1
    assert m.size() == 1
    assert m.remove("a") is None
    assert m.size() == 1


def test_round_trip_and_stored_none():
    m = TrackedHashMap()
    m.put("k", "v")
    assert m.get("k") == "v"
    m.put("n", None)
    assert m.contains("n")
    assert m.get("n", "default") is None
    assert m.size() == 2


def test_none_is_an_ordinary_key():
    m = TrackedHashMap()
    m.put(None, 1)
    assert m.get(None) == 1
    assert m.size() == 1
    assert m.remove(None) == 1
    assert m.size() == 0


def test_unhashable_key_leaves_map_untouched():
    m = TrackedHashMap()
    m.put("a", 1)
    with pytest.raises(TypeError):
        m.put(["not", "hashable"], 2)
    assert m.size() == 1
    assert m.recount() == 1


def test_clear_empties():
    m = TrackedHashMap()
    for i in range(50):
        m.put(i, i)
    m.clear()
    assert m.size() == 0
    assert m.recount() == 0
    for i in range(50):
        assert m.get(i) is None
        assert not m.contains(i)
    m.put(1, "again")
    assert m.size() == 1


@BOTH_POLICIES
def test_rehash_preserves_content_and_size(recount):
    m = TrackedHashMap(num_buckets=2, recount_on_rehash=recount)
    expected = {}
    for i in range(100):
        m.put(i, i * 10)
        expected[i] = i * 10
        for k, v in expected.items():
            assert m.get(k) == v
        assert m.size() == len(expected)
    assert m.bucket_count >= 100


@BOTH_POLICIES
def test_size_matches_model_over_random_operations(recount):
    rng = random.Random(1234)
    m = TrackedHashMap(num_buckets=2, factor=0.75, recount_on_rehash=recount)
    model = {}
    for _ in range(3000):
        key = rng.randrange(200)
        op = rng.random()
        if op < 0.55:
            value = rng.random()
            assert m.put(key, value) == model.get(key)
            model[key] = value
        elif op < 0.95:
            assert m.remove(key) == model.pop(key, None)
        else:
            m.clear()
            model.clear()
        assert m.size() == len(model)
        assert m.size() == m.recount()
    assert dict(m.items()) == model


def test_update_accepts_mapping_and_pairs():
    m = TrackedHashMap()
    m.update({"a": 1, "b": 2})
    m.update([("b", 3), ("c", 4)])
    assert m.size() == 3
    assert dict(m.items()) == {"a": 1, "b": 3, "c": 4}


def test_iteration_visits_each_entry_once():
    m = TrackedHashMap()
    for i in range(40):
        m.put(i, -i)
    for i in range(0, 40, 3):
        m.remove(i)
    keys = list(m)
    assert len(keys) == len(set(keys)) == m.size()
    assert sorted(m.values()) == sorted(-k for k in keys)
    assert 1 in m
    assert 3 not in m


def test_load_factor_is_bounded():
    m = TrackedHashMap(factor=1.5)
    for i in range(500):
        m.put(i, i)
        assert m.load_factor() <= m.factor


def test_put_measures_only_its_own_bucket(monkeypatch):
    n = 1024
    calls = count_size_calls(monkeypatch)
    m = TrackedHashMap()
    for i in range(n):
        m.put(i, i)
    # one read before and one after each bucket put, nothing during rehash
    assert calls["n"] == 2 * n


def test_naive_growth_check_is_superlinear(monkeypatch):
    calls = count_size_calls(monkeypatch)

    def work(map_cls, n):
        calls["n"] = 0
        m = map_cls()
        for i in range(n):
            m.put(i, i)
        return calls["n"]

    tracked_small, tracked_large = work(TrackedHashMap, 256), work(TrackedHashMap, 1024)
    naive_small, naive_large = work(GrowableHashMap, 256), work(GrowableHashMap, 1024)

    assert tracked_large == 4 * tracked_small
    assert naive_large > 8 * naive_small
    assert naive_large > 50 * tracked_large


def test_every_layer_exposes_the_map_surface():
    from hashmaps import BucketedMap, SupportsMap

    for layer in (LinearMap(), BucketedMap(), GrowableHashMap(), TrackedHashMap()):
        assert isinstance(layer, SupportsMap)


@BOTH_POLICIES
def test_small_factor_grows_until_within_threshold(recount):
    m = TrackedHashMap(num_buckets=1, factor=0.3, recount_on_rehash=recount)
    m.put("a", 1)
    assert m.size() == 1
    assert m.size() <= m.factor * m.bucket_count
    for i in range(50):
        m.put(i, i)
        assert m.size() <= m.factor * m.bucket_count
        assert m.size() == m.recount()
