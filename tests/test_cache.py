"""Tests for the bounded suggestion cache."""
import sys
import os
import random
import threading
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

import pytest

from khmersuggest.cache import SuggestionCache
from khmersuggest.candidates import Candidate


def entry(word):
    return [Candidate(display_text="ក", romanization=word)]


def test_get_put_invalidate():
    cache = SuggestionCache()
    assert cache.get("suo") is None
    cache.put("suo", entry("suo"))
    assert cache.get("suo")[0].romanization == "suo"
    assert "suo" in cache
    assert cache.invalidate("suo") is True
    assert cache.get("suo") is None
    assert cache.invalidate("suo") is False


def test_clear():
    cache = SuggestionCache()
    for i in range(10):
        cache.put(f"w{i}", entry(f"w{i}"))
    cache.clear()
    assert len(cache) == 0


def test_stored_entries_are_tuples():
    cache = SuggestionCache()
    candidates = entry("suo")
    cache.put("suo", candidates)
    candidates.append(Candidate(display_text="x", romanization="suo"))
    assert len(cache.get("suo")) == 1


def test_flushes_oldest_batch_when_full():
    cache = SuggestionCache()
    for i in range(100):
        cache.put(f"w{i}", entry(f"w{i}"))
    assert len(cache) == 100

    cache.put("new", entry("new"))
    assert len(cache) == 81
    assert "new" in cache
    for i in range(20):
        assert f"w{i}" not in cache
    assert "w20" in cache


def test_overwrite_when_full_does_not_evict():
    cache = SuggestionCache()
    for i in range(100):
        cache.put(f"w{i}", entry(f"w{i}"))
    cache.put("w5", entry("w5"))
    assert len(cache) == 100


def test_size_never_exceeds_capacity():
    cache = SuggestionCache()
    rng = random.Random(7)
    for _ in range(2000):
        word = f"w{rng.randrange(400)}"
        if rng.random() < 0.1:
            cache.invalidate(word)
        else:
            cache.put(word, entry(word))
        assert len(cache) <= 100


def test_small_capacity():
    cache = SuggestionCache(capacity=3, evict_batch=20)
    for w in "abcd":
        cache.put(w, entry(w))
    assert len(cache) == 1
    assert "d" in cache


def test_invalid_capacity():
    with pytest.raises(ValueError):
        SuggestionCache(capacity=0)


def test_concurrent_writers():
    cache = SuggestionCache()
    errors = []

    def writer(offset):
        try:
            for i in range(500):
                word = f"t{offset}-{i}"
                cache.put(word, entry(word))
                cache.get(word)
                if i % 7 == 0:
                    cache.invalidate(word)
        except Exception as e:
            errors.append(e)

    threads = [threading.Thread(target=writer, args=(n,)) for n in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert not errors
    assert len(cache) <= 100


def test_put_if_generation_stores_when_unchanged():
    cache = SuggestionCache()
    generation = cache.generation("suo")
    assert cache.put_if_generation("suo", generation, entry("suo")) is True
    assert "suo" in cache


def test_put_if_generation_refused_after_invalidate():
    cache = SuggestionCache()
    generation = cache.generation("suo")
    cache.invalidate("suo")
    assert cache.put_if_generation("suo", generation, entry("suo")) is False
    assert "suo" not in cache

    other = cache.generation("tov")
    assert cache.put_if_generation("tov", other, entry("tov")) is True


def test_put_if_generation_refused_after_clear():
    cache = SuggestionCache()
    generation = cache.generation("suo")
    cache.clear()
    assert cache.put_if_generation("suo", generation, entry("suo")) is False
    assert len(cache) == 0
