"""
Last-First mapping between a BWT (last column of the Burrows-Wheeler Matrix) and the
sorted BWT (first column).

The k-th occurrence of a char c in the BWT and the k-th occurrence of c in the sorted
BWT are the same char of the text. A ``LastFirstFinder`` answers occurrence queries on
both columns, each column being served by its own ``Occurrences`` lookup:

- ``ScanOccurrences``: linear scans, no extra space.
- ``SortedOccurrences``: binary search, only valid for the sorted column.
- ``PrecomputedOccurrences``: positions of every char, built once in O(n).

Strategies pick one lookup per column, see ``FINDER_STRATEGIES``.
"""
from textindex import searching
from textindex.text import char_key, compare_chars, validate_rotated


def sort_bwt(bwt, terminator):
    """First column of the Burrows-Wheeler Matrix: the chars of the BWT in ascending order."""
    return ''.join(sorted(bwt, key=lambda c: char_key(c, terminator)))


class ScanOccurrences:
    def __init__(self, content, terminator):
        self.content = content

    def nth(self, char, occurrence_rank):
        if occurrence_rank < 0:
            raise IndexError(f"Occurrence rank must be non-negative: {occurrence_rank}")
        seen = 0
        for index, c in enumerate(self.content):
            if c == char:
                if seen == occurrence_rank:
                    return index
                seen += 1
        raise IndexError(f"No occurrence {occurrence_rank} of {char!r}: only {seen} found")

    def rank(self, index):
        _check_index(self.content, index)
        char = self.content[index]
        return self.content.count(char, 0, index)


class SortedOccurrences:
    def __init__(self, content, terminator):
        self.content = content
        self._comparator = lambda x, y: compare_chars(x, y, terminator)

    def nth(self, char, occurrence_rank):
        index = searching.nth(self.content, char, occurrence_rank, self._comparator)
        if index < 0:
            raise IndexError(f"No occurrence {occurrence_rank} of {char!r}")
        return index

    def rank(self, index):
        _check_index(self.content, index)
        return index - searching.first(self.content, self.content[index], self._comparator, 0, index)


class PrecomputedOccurrences:
    def __init__(self, content, terminator):
        self.content = content
        self._positions = {}
        for index, c in enumerate(content):
            self._positions.setdefault(c, []).append(index)

    def nth(self, char, occurrence_rank):
        positions = self._positions.get(char, ())
        if not 0 <= occurrence_rank < len(positions):
            raise IndexError(
                f"No occurrence {occurrence_rank} of {char!r}: only {len(positions)} found")
        return positions[occurrence_rank]

    def rank(self, index):
        _check_index(self.content, index)
        # Positions of a char are in ascending order
        return searching.first(self._positions[self.content[index]], index)


def _check_index(content, index):
    if not 0 <= index < len(content):
        raise IndexError(f"Index out of range [0, {len(content)}): {index}")


FINDER_STRATEGIES = {
    'naive': (ScanOccurrences, ScanOccurrences),
    'binary_search': (ScanOccurrences, SortedOccurrences),
    'precomputed': (PrecomputedOccurrences, PrecomputedOccurrences),
}


class LastFirstFinder:
    """
    Occurrence queries over a BWT and its sorted version.

    ``bwt_lookup`` serves the BWT side, ``sorted_lookup`` the sorted side. Use
    ``LastFirstFinder.build`` to pick them by strategy name.
    """

    def __init__(self, bwt, sorted_bwt, terminator, bwt_lookup, sorted_lookup):
        if len(bwt) != len(sorted_bwt):
            raise ValueError("BWT and sorted BWT must have the same length")
        self.bwt = bwt
        self.sorted_bwt = sorted_bwt
        self.terminator = terminator
        self._bwt_occurrences = bwt_lookup(bwt, terminator)
        self._sorted_occurrences = sorted_lookup(sorted_bwt, terminator)

    @classmethod
    def build(cls, bwt, terminator, strategy='precomputed', sorted_bwt=None):
        validate_rotated(bwt, terminator)
        try:
            bwt_lookup, sorted_lookup = FINDER_STRATEGIES[strategy]
        except KeyError:
            raise ValueError(
                f"Unknown finder strategy {strategy!r}, expected one of {sorted(FINDER_STRATEGIES)}"
            ) from None
        if sorted_bwt is None:
            sorted_bwt = sort_bwt(bwt, terminator)
        return cls(bwt, sorted_bwt, terminator, bwt_lookup, sorted_lookup)

    def __len__(self):
        return len(self.bwt)

    def find_index_of_nth_occurrence_in_bwt(self, char, occurrence_rank):
        return self._bwt_occurrences.nth(char, occurrence_rank)

    def find_index_of_nth_occurrence_in_sorted_bwt(self, char, occurrence_rank):
        return self._sorted_occurrences.nth(char, occurrence_rank)

    def find_occurrence_rank_of_char_in_bwt(self, index):
        return self._bwt_occurrences.rank(index)

    def find_occurrence_rank_of_char_in_sorted_bwt(self, index):
        return self._sorted_occurrences.rank(index)

    def last_to_first(self, index):
        """Maps a BWT position to the sorted BWT position of the same text char."""
        occurrence_rank = self.find_occurrence_rank_of_char_in_bwt(index)
        char = self.bwt[index]
        return self.find_index_of_nth_occurrence_in_sorted_bwt(char, occurrence_rank), occurrence_rank

    def first_to_last(self, index):
        """Maps a sorted BWT position to the BWT position of the same text char."""
        occurrence_rank = self.find_occurrence_rank_of_char_in_sorted_bwt(index)
        return self.find_index_of_nth_occurrence_in_bwt(self.sorted_bwt[index], occurrence_rank)
