import numpy as np

from textindex.suffix_array import SuffixArray
from textindex.text import TerminatedText


class LcpArray:
    """Lengths of the longest common prefix of adjacent suffixes, in suffix array order."""

    def __init__(self, lengths):
        self._lengths = tuple(lengths)

    @property
    def lengths(self):
        return self._lengths

    def __len__(self):
        return len(self._lengths)

    def __getitem__(self, i):
        return self._lengths[i]

    def __iter__(self):
        return iter(self._lengths)

    def __eq__(self, other):
        if not isinstance(other, LcpArray):
            return NotImplemented
        return self._lengths == other._lengths

    def __hash__(self):
        return hash(self._lengths)

    def __repr__(self):
        return f"LcpArray({list(self._lengths)})"


def longest_common_prefix(x, x_start, y, y_start):
    """Length of the common prefix of ``x[x_start:]`` and ``y[y_start:]``."""
    length = 0
    limit = min(len(x) - x_start, len(y) - y_start)
    while length < limit and x[x_start + length] == y[y_start + length]:
        length += 1
    return length


class NaiveLcpArrayBuilder:
    """Compares every pair of adjacent suffixes from scratch. O(n^2) worst case."""

    def build(self, text: TerminatedText, suffix_array: SuffixArray) -> LcpArray:
        _check_consistent(text, suffix_array)
        full = text.full
        indexes = suffix_array.indexes
        return LcpArray(
            longest_common_prefix(full, indexes[i], full, indexes[i + 1])
            for i in range(len(indexes) - 1))


class KasaiLcpArrayBuilder:
    """
    Kasai's linear LCP construction.

    Suffixes are visited in text order rather than suffix array order. Dropping the first
    char of the suffix at v gives the suffix at v + 1, so the LCP of v + 1 with its
    successor is at least the LCP of v with its successor minus one: those chars are
    skipped. The running LCP grows by the chars actually compared and shrinks by at most
    one per position, so the whole walk does O(n) comparisons.
    """

    def build(self, text: TerminatedText, suffix_array: SuffixArray) -> LcpArray:
        _check_consistent(text, suffix_array)
        full = text.full
        indexes = suffix_array.indexes
        n = len(indexes)

        rank = np.empty(n, dtype=np.int64)
        rank[np.asarray(indexes, dtype=np.int64)] = np.arange(n)

        lengths = [0] * (n - 1)
        current_lcp = 0
        for v in range(n):
            slot = int(rank[v])
            if slot == n - 1:
                current_lcp = 0
                continue

            next_suffix = indexes[slot + 1]
            skip = max(current_lcp - 1, 0)
            current_lcp = skip + longest_common_prefix(full, v + skip, full, next_suffix + skip)
            lengths[slot] = current_lcp

        return LcpArray(lengths)


def _check_consistent(text, suffix_array):
    if len(text) != len(suffix_array):
        raise ValueError(
            f"Suffix array of length {len(suffix_array)} doesn't match a text of length {len(text)}")


LCP_ARRAY_BUILDERS = {
    'naive': NaiveLcpArrayBuilder,
    'kasai': KasaiLcpArrayBuilder,
}


def get_lcp_array_builder(name='kasai'):
    try:
        return LCP_ARRAY_BUILDERS[name]()
    except KeyError:
        raise ValueError(
            f"Unknown LCP array builder {name!r}, expected one of {sorted(LCP_ARRAY_BUILDERS)}"
        ) from None
