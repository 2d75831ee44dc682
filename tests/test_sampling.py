import pytest

from textindex.bwt import bwt_transform
from textindex.last_first import LastFirstFinder
from textindex.matching import PartialSuffixArrayAgainstPatternComparer
from textindex.sampling import (
    SAMPLING_MODES,
    PartialSuffixArray,
    SuffixIndexCache,
    default_sample_rate,
)
from textindex.suffix_array import build_suffix_array
from textindex.text import TerminatedText

TEXT = TerminatedText("panamabananas")
SUFFIX_ARRAY = build_suffix_array(TEXT)
BWT = bwt_transform(TEXT, SUFFIX_ARRAY)


def build_cache(partial_suffix_array, strategy='precomputed'):
    return SuffixIndexCache(partial_suffix_array, LastFirstFinder.build(BWT.content, '$', strategy))


def test_text_mode_keeps_multiples_of_k_in_the_text():
    partial = PartialSuffixArray.from_suffix_array(SUFFIX_ARRAY, 5)

    assert partial.indexes == {1: 5, 11: 10, 12: 0}
    assert partial.k == 5
    assert len(partial) == 3
    assert 11 in partial
    assert partial[11] == 10


def test_slot_mode_keeps_multiples_of_k_in_the_suffix_array():
    partial = PartialSuffixArray.from_suffix_array(SUFFIX_ARRAY, 5, mode='slot')

    assert partial.indexes == {0: 13, 5: 9, 10: 8}


def test_invalid_sampling():
    with pytest.raises(ValueError):
        PartialSuffixArray.from_suffix_array(SUFFIX_ARRAY, 0)
    with pytest.raises(ValueError):
        PartialSuffixArray(-1, {})
    with pytest.raises(ValueError):
        PartialSuffixArray.from_suffix_array(SUFFIX_ARRAY, 3, mode='random')


def test_default_sample_rate():
    assert default_sample_rate(1) == 1
    assert default_sample_rate(14) == 14
    assert default_sample_rate(16) == 16
    assert PartialSuffixArray.from_suffix_array(SUFFIX_ARRAY).k == 14


@pytest.mark.parametrize('mode', SAMPLING_MODES)
@pytest.mark.parametrize('k', range(1, 16))
def test_cache_resolves_the_whole_suffix_array(mode, k):
    cache = build_cache(PartialSuffixArray.from_suffix_array(SUFFIX_ARRAY, k, mode))

    assert [cache.resolve(slot) for slot in range(len(TEXT))] == list(SUFFIX_ARRAY)
    assert len(cache) == len(TEXT)


@pytest.mark.parametrize('k', [1, 2, 3, 5, 8])
def test_text_mode_walks_are_shorter_than_k(k):
    partial = PartialSuffixArray.from_suffix_array(SUFFIX_ARRAY, k)
    for slot in range(len(TEXT)):
        cache = build_cache(partial)
        cache.resolve(slot)
        assert cache.walk_steps < k


def test_resolved_slots_are_cached():
    partial = PartialSuffixArray.from_suffix_array(SUFFIX_ARRAY, 5)
    cache = build_cache(partial, 'naive')

    # Slot 0 holds suffix 13, three steps away from the sampled suffix 10
    assert cache.resolve(0) == 13
    assert cache.walk_steps == 3
    assert len(cache) == 6
    assert cache[0] == 13
    assert cache.walk_steps == 3

    # The sample itself is left untouched
    assert partial.indexes == {1: 5, 11: 10, 12: 0}


def test_out_of_range_slots():
    cache = build_cache(PartialSuffixArray.from_suffix_array(SUFFIX_ARRAY, 5))

    with pytest.raises(IndexError):
        cache.resolve(14)
    with pytest.raises(IndexError):
        cache.resolve(-1)


def test_empty_sample_cannot_resolve():
    cache = build_cache(PartialSuffixArray(3, {}))

    with pytest.raises(ValueError):
        cache.resolve(0)


def test_comparer_over_partial_suffix_array():
    partial = PartialSuffixArray(5, {1: 5, 11: 10, 12: 0})
    comparer = PartialSuffixArrayAgainstPatternComparer(TEXT, partial, "ana", bwt=BWT)

    assert comparer.compare(0) < 0
    assert comparer.compare(1) < 0
    assert comparer.compare(3) == 0
    assert comparer.compare(4) == 0
    assert comparer.compare(5) == 0
    assert comparer.compare(6) > 0
    assert comparer.longest_match == 3
