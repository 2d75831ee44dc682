import logging

from textindex.pcs import (
    classify_double_length,
    classify_single_char,
    sort_double_length,
    sort_single_char,
)
from textindex.sorting import build_alphabet, quick_sort
from textindex.text import TerminatedText, compare_strings

logger = logging.getLogger(__name__)


class SuffixArray:
    """Start offsets of the suffixes of a terminated text, in ascending suffix order."""

    def __init__(self, indexes):
        self._indexes = tuple(indexes)

    @property
    def indexes(self):
        return self._indexes

    def inverse(self):
        """``rank[v]`` such that ``indexes[rank[v]] == v``."""
        rank = [0] * len(self._indexes)
        for slot, start in enumerate(self._indexes):
            rank[start] = slot
        return rank

    def __len__(self):
        return len(self._indexes)

    def __getitem__(self, slot):
        return self._indexes[slot]

    def __iter__(self):
        return iter(self._indexes)

    def __eq__(self, other):
        if not isinstance(other, SuffixArray):
            return NotImplemented
        return self._indexes == other._indexes

    def __hash__(self):
        return hash(self._indexes)

    def __repr__(self):
        return f"SuffixArray({list(self._indexes)})"


class NaiveSuffixArrayBuilder:
    """
    Sorts all the suffixes of the text with the injected sort strategy.

    Each comparison costs up to O(n), so the build is O(n^2 log n). Suffixes are
    materialized as slices of the full text, terminator included.
    """

    def __init__(self, sorter=quick_sort):
        self.sorter = sorter

    def build(self, text: TerminatedText) -> SuffixArray:
        full = text.full
        terminator = text.terminator
        suffixes = [full[i:] for i in range(len(full))]
        ordered = self.sorter(suffixes, lambda x, y: compare_strings(x, y, terminator))
        return SuffixArray(len(full) - len(suffix) for suffix in ordered)


class PcsSuffixArrayBuilder:
    """
    Prefix-doubling suffix array builder, O(n log n).

    Sorts the partial cyclic substrings (PCS) of length 1 by counting sort, then keeps
    doubling the PCS length, sorting and classifying the double-length PCS from the
    order and classes of the previous round, until the length covers the whole text.
    Every step is injectable; see ``textindex.pcs`` for the available ones.
    """

    def __init__(self,
                 single_char_sorter=sort_single_char,
                 single_char_classifier=classify_single_char,
                 double_length_sorter=sort_double_length,
                 double_length_classifier=classify_double_length):
        self.single_char_sorter = single_char_sorter
        self.single_char_classifier = single_char_classifier
        self.double_length_sorter = double_length_sorter
        self.double_length_classifier = double_length_classifier

    def build(self, text: TerminatedText) -> SuffixArray:
        # Codes keep the terminator as the smallest symbol, whatever it is
        codes = text.codes
        n = len(codes)
        if n == 1:
            return SuffixArray([0])

        alphabet = build_alphabet(codes, 0)
        order = self.single_char_sorter(codes, alphabet)
        eq_classes = self.single_char_classifier(codes, order)

        pcs_length = 1
        rounds = 0
        while pcs_length < n:
            order = self.double_length_sorter(pcs_length, order, eq_classes)
            pcs_length *= 2
            eq_classes = self.double_length_classifier(pcs_length, eq_classes, order)
            rounds += 1
            logger.debug(f"PCS length {pcs_length}: {eq_classes[order[-1]] + 1} classes")

        logger.debug(f"Suffix array of {n} suffixes built in {rounds} doubling rounds")
        return SuffixArray(order)


SUFFIX_ARRAY_BUILDERS = {
    'naive': NaiveSuffixArrayBuilder,
    'pcs': PcsSuffixArrayBuilder,
}


def get_suffix_array_builder(name='pcs', **kwargs):
    try:
        builder_class = SUFFIX_ARRAY_BUILDERS[name]
    except KeyError:
        raise ValueError(
            f"Unknown suffix array builder {name!r}, expected one of {sorted(SUFFIX_ARRAY_BUILDERS)}"
        ) from None
    return builder_class(**kwargs)


def build_suffix_array(text, builder='pcs'):
    """Suffix array of ``text``, a TerminatedText or a plain string to be terminated."""
    if not isinstance(text, TerminatedText):
        text = TerminatedText(text)
    return get_suffix_array_builder(builder).build(text)
