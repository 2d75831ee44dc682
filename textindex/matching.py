"""
Pattern matching over suffix arrays and Burrows-Wheeler transforms.

Matchers return a ``Match``. Start and end indexes are slots of the suffix array, which
are also positions of the sorted BWT. On failure they point to the closest partial match
found, or are -1 when nothing matched.
"""
import logging
from typing import NamedTuple

from textindex import searching
from textindex.bwt import BWTransform
from textindex.last_first import LastFirstFinder, sort_bwt
from textindex.sampling import SuffixIndexCache
from textindex.text import DEFAULT_TERMINATOR, compare_chars, validate_rotated
from utils.utils import build_count, build_occ

logger = logging.getLogger(__name__)


class Match(NamedTuple):
    success: bool
    matched_chars: int
    start_index: int
    end_index: int


class SuffixComparison(NamedTuple):
    order: int
    matched_chars: int
    # The suffix ran out before the pattern did
    pattern_exceeds_suffix: bool


def _check_pattern(pattern):
    if not pattern:
        raise ValueError("The pattern should be non-empty")


class SuffixAgainstPatternComparer:
    """
    Compares the suffix in a slot of the suffix array against a pattern.

    Usable as a comparator by ``textindex.searching``: the second argument is ignored and
    the result is negative, zero or positive when the suffix sorts before, starts with, or
    sorts after the pattern. A suffix shorter than the pattern sorts before it.

    The longest prefix of the pattern matched so far, and the slot where it was matched,
    are tracked across all comparisons.
    """

    def __init__(self, text, pattern):
        _check_pattern(pattern)
        self.text = text
        self.pattern = pattern
        self.longest_match = 0
        self.longest_match_slot = -1

    def suffix_start(self, slot):
        raise NotImplementedError

    def compare_suffix_against_pattern(self, slot, suffix_start) -> SuffixComparison:
        full = self.text.full
        terminator = self.text.terminator
        pattern = self.pattern

        matched = 0
        while matched < len(pattern):
            if suffix_start + matched >= len(full):
                return SuffixComparison(-1, matched, True)

            order = compare_chars(full[suffix_start + matched], pattern[matched], terminator)
            if order != 0:
                return SuffixComparison(order, matched, False)

            matched += 1
            if matched > self.longest_match:
                self.longest_match = matched
                self.longest_match_slot = slot

        return SuffixComparison(0, matched, False)

    def compare(self, x, y=None):
        return self.compare_suffix_against_pattern(x, self.suffix_start(x)).order

    __call__ = compare


class SuffixArrayAgainstPatternComparer(SuffixAgainstPatternComparer):
    """Comparer over a dense suffix array: every slot is a direct lookup."""

    def __init__(self, text, suffix_array, pattern):
        super().__init__(text, pattern)
        self.suffix_array = suffix_array

    def suffix_start(self, slot):
        return self.suffix_array[slot]


class PartialSuffixArrayAgainstPatternComparer(SuffixAgainstPatternComparer):
    """
    Comparer over a partial suffix array.

    Slots missing from the sample are resolved by ``cache``, walking the Last-First
    mapping of ``bwt``. Pass the same cache to several comparers to share what they
    resolve; the comparers then write to it, one at a time.
    """

    def __init__(self, text, partial_suffix_array, pattern, bwt=None,
                 finder_strategy='precomputed', cache=None):
        super().__init__(text, pattern)
        if cache is None:
            if bwt is None:
                raise ValueError("Either a BWT or a cache is required")
            content = bwt.content if isinstance(bwt, BWTransform) else bwt
            finder = LastFirstFinder.build(content, text.terminator, finder_strategy)
            cache = SuffixIndexCache(partial_suffix_array, finder)
        self.partial_suffix_array = partial_suffix_array
        self.cache = cache

    def suffix_start(self, slot):
        return self.cache.resolve(slot)


class SuffixArrayBasedMatcher:
    """
    Binary search of a pattern over the slots of a suffix array.

    Takes either a dense ``suffix_array`` or a ``partial_suffix_array`` together with the
    ``bwt`` needed to fill its gaps, or an existing ``cache`` over it. Slots resolved from
    a partial suffix array stay cached for the lifetime of the matcher.
    """

    def __init__(self, text, suffix_array=None, partial_suffix_array=None, bwt=None,
                 finder_strategy='precomputed', cache=None):
        if (suffix_array is None) == (partial_suffix_array is None):
            raise ValueError("Exactly one of suffix_array and partial_suffix_array is required")
        self.text = text
        self.suffix_array = suffix_array
        self.partial_suffix_array = partial_suffix_array
        self.cache = None
        if partial_suffix_array is not None:
            if cache is None:
                if bwt is None:
                    raise ValueError("A BWT is required to match over a partial suffix array")
                content = bwt.content if isinstance(bwt, BWTransform) else bwt
                finder = LastFirstFinder.build(content, text.terminator, finder_strategy)
                cache = SuffixIndexCache(partial_suffix_array, finder)
            self.cache = cache

    def build_comparer(self, pattern):
        if self.cache is not None:
            return PartialSuffixArrayAgainstPatternComparer(
                self.text, self.partial_suffix_array, pattern, cache=self.cache)
        return SuffixArrayAgainstPatternComparer(self.text, self.suffix_array, pattern)

    def match(self, pattern) -> Match:
        slots = range(len(self.text))
        start_comparer = self.build_comparer(pattern)
        start_index = searching.first(slots, None, start_comparer)

        if start_index >= 0:
            end_comparer = self.build_comparer(pattern)
            end_index = searching.last(slots, None, end_comparer, start_index)
            return Match(True, start_comparer.longest_match, start_index, end_index)

        slot = start_comparer.longest_match_slot
        return Match(False, start_comparer.longest_match, slot, slot)

    def suffix_start(self, slot):
        if self.cache is not None:
            return self.cache.resolve(slot)
        return self.suffix_array[slot]


class NarrowingIntervalMatcher:
    """
    Backward search over a BWT.

    Starts from the interval of the sorted BWT holding the last char of the pattern and
    narrows it one char at a time, right to left: the rows of the interval whose last
    char is the next pattern char are mapped to the sorted BWT with the Last-First
    property.
    """

    def __init__(self, bwt, sorted_bwt=None, terminator=DEFAULT_TERMINATOR,
                 finder_strategy='precomputed'):
        if isinstance(bwt, BWTransform):
            terminator = bwt.terminator
            if sorted_bwt is None:
                sorted_bwt = bwt.sorted_content
            bwt = bwt.content

        validate_rotated(bwt, terminator)
        if sorted_bwt is None:
            sorted_bwt = sort_bwt(bwt, terminator)
        elif len(sorted_bwt) != len(bwt) or sorted_bwt != sort_bwt(bwt, terminator):
            raise ValueError("BWT and sorted BWT are not consistent with each other")

        self.bwt = bwt
        self.sorted_bwt = sorted_bwt
        self.terminator = terminator
        self.finder = self.build_finder(finder_strategy)

    def build_finder(self, strategy):
        return LastFirstFinder.build(self.bwt, self.terminator, strategy, self.sorted_bwt)

    def match(self, pattern) -> Match:
        _check_pattern(pattern)

        comparator = lambda x, y: compare_chars(x, y, self.terminator)
        start_index, end_index = searching.interval(self.sorted_bwt, pattern[-1], comparator)
        if start_index < 0:
            return Match(False, 0, -1, -1)

        matched = 1
        for char in reversed(pattern[:-1]):
            success, start_index, end_index = self.narrow_interval(char, start_index, end_index)
            if not success:
                return Match(False, matched, start_index, end_index)
            matched += 1

        return Match(True, matched, start_index, end_index)

    def count(self, pattern):
        match = self.match(pattern)
        return match.end_index - match.start_index + 1 if match.success else 0

    def narrow_interval(self, char, start_index, end_index):
        first = self.bwt.find(char, start_index, end_index + 1)
        if first < 0:
            return False, start_index, end_index
        last = self.bwt.rfind(char, start_index, end_index + 1)

        narrowed_start, _ = self.finder.last_to_first(first)
        narrowed_end, _ = self.finder.last_to_first(last)
        return True, narrowed_start, narrowed_end


class CountBasedNarrowingIntervalMatcher(NarrowingIntervalMatcher):
    """
    Backward search with precomputed counts.

    Narrowing becomes O(1) per char: the new interval starts at the first occurrence of
    the char in the sorted BWT, offset by its occurrences in the BWT before the interval.
    """

    def __init__(self, bwt, sorted_bwt=None, terminator=DEFAULT_TERMINATOR,
                 finder_strategy='naive'):
        super().__init__(bwt, sorted_bwt, terminator, finder_strategy)
        self.first_occurrences = build_count(self.sorted_bwt, self.terminator)
        self.occ = build_occ(self.bwt)

    def narrow_interval(self, char, start_index, end_index):
        if char not in self.first_occurrences:
            return False, start_index, end_index

        counts = self.occ[char]
        first_occurrence = self.first_occurrences[char]
        narrowed_start = first_occurrence + int(counts[start_index])
        narrowed_end = first_occurrence + int(counts[end_index + 1]) - 1
        if narrowed_start > narrowed_end:
            return False, start_index, end_index
        return True, narrowed_start, narrowed_end
