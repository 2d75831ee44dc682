import random

import pytest

from textindex.lcp import (
    LCP_ARRAY_BUILDERS,
    KasaiLcpArrayBuilder,
    LcpArray,
    NaiveLcpArrayBuilder,
    get_lcp_array_builder,
    longest_common_prefix,
)
from textindex.suffix_array import SuffixArray, build_suffix_array
from textindex.text import TerminatedText

KNOWN_LCP_ARRAYS = [
    ("", []),
    ("a", [0]),
    ("banana", [0, 1, 3, 0, 0, 2]),
    ("aaaa", [0, 1, 2, 3]),
    ("mississippi", [0, 1, 1, 4, 0, 0, 1, 0, 2, 1, 3]),
]


@pytest.mark.parametrize('name', sorted(LCP_ARRAY_BUILDERS))
@pytest.mark.parametrize('text, expected', KNOWN_LCP_ARRAYS)
def test_known_lcp_arrays(name, text, expected):
    text = TerminatedText(text)

    lcp_array = get_lcp_array_builder(name).build(text, build_suffix_array(text))

    assert list(lcp_array) == expected
    assert len(lcp_array) == len(text) - 1


def test_kasai_agrees_with_naive():
    rng = random.Random(5)
    for _ in range(80):
        text = TerminatedText(''.join(rng.choice("ab") for _ in range(rng.randint(0, 50))))
        suffix_array = build_suffix_array(text)

        assert KasaiLcpArrayBuilder().build(text, suffix_array) == \
            NaiveLcpArrayBuilder().build(text, suffix_array)


def test_longest_common_prefix():
    assert longest_common_prefix("banana", 1, "banana", 3) == 3
    assert longest_common_prefix("abc", 0, "abd", 0) == 2
    assert longest_common_prefix("abc", 3, "abc", 0) == 0


def test_suffix_array_must_match_the_text():
    text = TerminatedText("banana")

    with pytest.raises(ValueError):
        KasaiLcpArrayBuilder().build(text, SuffixArray([1, 0]))
    with pytest.raises(ValueError):
        NaiveLcpArrayBuilder().build(text, SuffixArray([1, 0]))


def test_unknown_builder():
    with pytest.raises(ValueError):
        get_lcp_array_builder('phi')


def test_lcp_array_equality():
    assert LcpArray([0, 1]) == LcpArray((0, 1))
    assert LcpArray([0, 1]) != LcpArray([1, 0])
