import logging
import math

from textindex.bwt import bwt_transform, invert
from textindex.last_first import LastFirstFinder
from textindex.lcp import get_lcp_array_builder
from textindex.matching import CountBasedNarrowingIntervalMatcher, SuffixArrayBasedMatcher
from textindex.sampling import PartialSuffixArray, SuffixIndexCache
from textindex.suffix_array import SuffixArray, get_suffix_array_builder
from textindex.text import DEFAULT_TERMINATOR, TerminatedText

logger = logging.getLogger(__name__)


class FMIndex:
    """
    Full-text index over a single terminated text.

    Keeps the BWT, its sorted version, a Last-First finder and a partial suffix array
    sampled with ``sample_rate``. The full suffix array is dropped after construction:
    ``locate`` recovers the missing positions by walking the Last-First mapping, caching
    what it resolves.
    """

    def __init__(self, text, terminator=DEFAULT_TERMINATOR, suffix_array_builder='pcs',
                 lcp_array_builder='kasai', finder_strategy='precomputed', sample_rate=None,
                 sampling_mode='text'):
        if not isinstance(text, TerminatedText):
            text = TerminatedText(text, terminator)
        self.text = text
        self.lcp_array_builder = get_lcp_array_builder(lcp_array_builder)

        suffix_array = get_suffix_array_builder(suffix_array_builder).build(text)
        self.bwt = bwt_transform(text, suffix_array)
        self.finder = LastFirstFinder.build(
            self.bwt.content, text.terminator, finder_strategy, self.bwt.sorted_content)
        self.partial_suffix_array = PartialSuffixArray.from_suffix_array(
            suffix_array, sample_rate, sampling_mode)

        self.cache = SuffixIndexCache(self.partial_suffix_array, self.finder)
        self.matcher = SuffixArrayBasedMatcher(
            text, partial_suffix_array=self.partial_suffix_array, cache=self.cache)
        self.backward_matcher = CountBasedNarrowingIntervalMatcher(self.bwt)
        self._lcp_array = None

        logger.info(
            f"Indexed {len(text)} chars: {len(self.partial_suffix_array)} sampled suffixes "
            f"(rate {self.partial_suffix_array.k}, mode {sampling_mode})")

    def __len__(self):
        return len(self.text)

    @property
    def suffix_array(self):
        """The full suffix array, resolving every slot through the cache."""
        return SuffixArray(self.cache.resolve(slot) for slot in range(len(self.text)))

    @property
    def lcp_array(self):
        if self._lcp_array is None:
            self._lcp_array = self.lcp_array_builder.build(self.text, self.suffix_array)
        return self._lcp_array

    def find_range(self, pattern):
        """Slots ``(l, r)`` of the suffixes starting with ``pattern``, or ``(-1, -1)``."""
        match = self.backward_matcher.match(pattern)
        if not match.success:
            return -1, -1
        return match.start_index, match.end_index

    def count(self, pattern):
        l, r = self.find_range(pattern)
        return 0 if l < 0 else r - l + 1

    def locate(self, pattern):
        """Sorted text positions where ``pattern`` occurs."""
        l, r = self.find_range(pattern)
        if l < 0:
            return []
        return sorted(self.cache.resolve(slot) for slot in range(l, r + 1))

    def match(self, pattern):
        """Binary search over the partial suffix array, reporting partial matches too."""
        return self.matcher.match(pattern)

    def invert(self):
        return invert(self.bwt, finder=self.finder)

    def get_size_metrics(self):
        n = len(self.text)
        word_bits = max(1, math.ceil(math.log2(n)))
        # The BWT takes a byte per char, each stored suffix start a word
        index_size = n * 8 + len(self.partial_suffix_array) * word_bits
        full_index_size = n * 8 + n * word_bits
        return {
            'original_size': n * 8,
            'index_size': index_size,
            'full_index_size': full_index_size,
            'space_saving': 1 - index_size / full_index_size,
            'sampled_suffixes': len(self.partial_suffix_array),
            'cached_suffixes': len(self.cache),
            'walk_steps': self.cache.walk_steps,
        }
