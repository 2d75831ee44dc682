import random

import pytest

from textindex.pcs import (
    naive_classify_single_char,
    naive_sort_double_length,
    order_based_classify_double_length,
)
from textindex.sorting import merge_sort
from textindex.suffix_array import (
    SUFFIX_ARRAY_BUILDERS,
    NaiveSuffixArrayBuilder,
    PcsSuffixArrayBuilder,
    SuffixArray,
    build_suffix_array,
    get_suffix_array_builder,
)
from textindex.text import TerminatedText, compare_strings

KNOWN_SUFFIX_ARRAYS = [
    ("", [0]),
    ("a", [1, 0]),
    ("banana", [6, 5, 3, 1, 0, 4, 2]),
    ("aaaa", [4, 3, 2, 1, 0]),
    ("mississippi", [11, 10, 7, 4, 1, 0, 9, 8, 6, 3, 5, 2]),
    ("panamabananas", [13, 5, 3, 1, 7, 9, 11, 6, 4, 2, 8, 10, 0, 12]),
]


def random_texts(count, max_length, alphabet, seed=0):
    rng = random.Random(seed)
    return [''.join(rng.choice(alphabet) for _ in range(rng.randint(0, max_length)))
            for _ in range(count)]


def assert_is_suffix_array(text, suffix_array):
    full = text.full
    assert sorted(suffix_array) == list(range(len(full)))
    for i in range(len(suffix_array) - 1):
        assert compare_strings(full[suffix_array[i]:], full[suffix_array[i + 1]:], text.terminator) < 0


@pytest.mark.parametrize('name', sorted(SUFFIX_ARRAY_BUILDERS))
@pytest.mark.parametrize('text, expected', KNOWN_SUFFIX_ARRAYS)
def test_known_suffix_arrays(name, text, expected):
    suffix_array = get_suffix_array_builder(name).build(TerminatedText(text))

    assert list(suffix_array) == expected


@pytest.mark.parametrize('name', sorted(SUFFIX_ARRAY_BUILDERS))
@pytest.mark.parametrize('terminator', ['#', '~', 'z'])
def test_terminator_sorts_first_whatever_its_code(name, terminator):
    suffix_array = get_suffix_array_builder(name).build(TerminatedText("banana", terminator))

    assert list(suffix_array) == [6, 5, 3, 1, 0, 4, 2]


def test_builders_agree_on_random_texts():
    naive = NaiveSuffixArrayBuilder()
    naive_merge = NaiveSuffixArrayBuilder(sorter=merge_sort)
    pcs = PcsSuffixArrayBuilder()
    for s in random_texts(60, 40, "ab") + random_texts(60, 40, "acgt", seed=1):
        text = TerminatedText(s)
        expected = naive.build(text)

        assert pcs.build(text) == expected
        assert naive_merge.build(text) == expected
        assert_is_suffix_array(text, expected)


def test_pcs_builder_with_naive_steps():
    def build(text):
        codes = text.codes
        n = len(codes)
        builder = PcsSuffixArrayBuilder(
            single_char_classifier=lambda chars, order: naive_classify_single_char(chars),
            double_length_sorter=lambda pcs_length, order, eq_classes: naive_sort_double_length(codes, pcs_length),
            double_length_classifier=lambda pcs_length, eq_classes, order:
                order_based_classify_double_length(codes, min(pcs_length, n), order))
        return builder.build(text)

    for s in ["banana", "mississippi", "abracadabra"] + random_texts(20, 30, "abc", seed=2):
        text = TerminatedText(s)
        assert build(text) == PcsSuffixArrayBuilder().build(text)


def test_build_suffix_array_accepts_strings():
    assert build_suffix_array("banana") == SuffixArray([6, 5, 3, 1, 0, 4, 2])
    assert build_suffix_array(TerminatedText("banana"), 'naive') == SuffixArray([6, 5, 3, 1, 0, 4, 2])


def test_inverse():
    suffix_array = build_suffix_array("banana")
    rank = suffix_array.inverse()

    for slot, start in enumerate(suffix_array):
        assert rank[start] == slot


def test_unknown_builder():
    with pytest.raises(ValueError):
        get_suffix_array_builder('sais')


def test_terminator_in_text_is_rejected():
    with pytest.raises(ValueError):
        build_suffix_array("ban$ana")
