import logging

from textindex.last_first import LastFirstFinder, sort_bwt
from textindex.sorting import quick_sort
from textindex.text import DEFAULT_TERMINATOR, TerminatedText, compare_strings, validate_rotated

logger = logging.getLogger(__name__)


class BWTransform:
    """Last column of the Burrows-Wheeler Matrix of ``text``."""

    def __init__(self, text: TerminatedText, content: str):
        if len(content) != len(text):
            raise ValueError(
                f"Transform of length {len(content)} doesn't match a text of length {len(text)}")
        validate_rotated(content, text.terminator)
        self.text = text
        self.content = content
        self._sorted = None

    @property
    def terminator(self):
        return self.text.terminator

    @property
    def sorted_content(self):
        """First column of the matrix, computed once."""
        if self._sorted is None:
            self._sorted = sort_bwt(self.content, self.terminator)
        return self._sorted

    def __len__(self):
        return len(self.content)

    def __eq__(self, other):
        if not isinstance(other, BWTransform):
            return NotImplemented
        return self.text == other.text and self.content == other.content

    def __hash__(self):
        return hash((self.text, self.content))

    def __str__(self):
        return self.content

    def __repr__(self):
        return f"BWTransform({self.text!r}, {self.content!r})"


class BWMatrix:
    """All cyclic rotations of a terminated text, in ascending order."""

    def __init__(self, text: TerminatedText, rows):
        self.text = text
        self.rows = list(rows)

    @property
    def first_column(self):
        return ''.join(row[0] for row in self.rows)

    @property
    def last_column(self):
        return ''.join(row[-1] for row in self.rows)

    @property
    def transform(self):
        return BWTransform(self.text, self.last_column)

    def __len__(self):
        return len(self.rows)


def sorted_rotations(text: TerminatedText, sorter=quick_sort):
    terminator = text.terminator
    rotations = [text.rotation(i) for i in range(len(text))]
    return sorter(rotations, lambda x, y: compare_strings(x, y, terminator))


def build_matrix(text: TerminatedText, sorter=quick_sort) -> BWMatrix:
    return BWMatrix(text, sorted_rotations(text, sorter))


def build_matrix_from_transform(bwt: BWTransform, sorter=quick_sort) -> BWMatrix:
    """
    Rebuilds the whole matrix from its last column alone.

    Prepending the last column to the first i columns and sorting the rows gives the
    first i + 1 columns, since rows are rotations. O(n^3 log n), for reference only.
    """
    terminator = bwt.terminator
    last = bwt.content
    columns = [''] * len(last)
    for _ in range(len(last)):
        columns = sorter(
            [last[row] + columns[row] for row in range(len(last))],
            lambda x, y: compare_strings(x, y, terminator))
    return BWMatrix(bwt.text, columns)


def invert_matrix(matrix: BWMatrix) -> TerminatedText:
    """The first row starts with the terminator and is followed by the text."""
    first_row = matrix.rows[0]
    return TerminatedText(first_row[1:], first_row[0])


def rotations_transform(text: TerminatedText, sorter=quick_sort) -> BWTransform:
    """Transform by sorting all the rotations. O(n^2 log n)."""
    return BWTransform(text, ''.join(rotation[-1] for rotation in sorted_rotations(text, sorter)))


def bwt_transform(text: TerminatedText, suffix_array) -> BWTransform:
    """Transform derived from the suffix array in O(n)."""
    full = text.full
    n = len(full)
    if len(suffix_array) != n:
        raise ValueError(
            f"Suffix array of length {len(suffix_array)} doesn't match a text of length {n}")

    bwt = [''] * n
    for i in range(n):
        pos = suffix_array[i] - 1
        if pos < 0:
            pos = n - 1
        bwt[i] = full[pos]

    return BWTransform(text, ''.join(bwt))


def naive_invert(bwt, terminator=DEFAULT_TERMINATOR) -> TerminatedText:
    """Inversion through the reconstruction of the whole matrix."""
    content, terminator = _content_of(bwt, terminator)
    placeholder = TerminatedText(content.replace(terminator, ''), terminator)
    matrix = build_matrix_from_transform(BWTransform(placeholder, content))
    return invert_matrix(matrix)


def invert(bwt, terminator=DEFAULT_TERMINATOR, finder_strategy='precomputed', finder=None) -> TerminatedText:
    """
    Inversion through the Last-First property.

    The row whose last char is the terminator is the text itself. Its last char precedes
    the first char of the text, so the walk starts there and moves backwards through the
    text, one Last-First step per char, prepending as it goes.
    """
    content, terminator = _content_of(bwt, terminator)
    if finder is None:
        finder = LastFirstFinder.build(content, terminator, finder_strategy)
    elif finder.bwt != content or finder.terminator != terminator:
        raise ValueError("Finder is not built on the given transform")

    n = len(content)
    index = content.index(terminator)
    chars = []
    for _ in range(n):
        chars.append(content[index])
        index, _rank = finder.last_to_first(index)
    chars.reverse()

    # The terminator was collected first, so it is now last
    full = ''.join(chars)
    logger.debug(f"Inverted a transform of length {n}")
    return TerminatedText(full[:-1], terminator)


def _content_of(bwt, terminator):
    """Accepts either a BWTransform or its raw content."""
    if isinstance(bwt, BWTransform):
        return bwt.content, bwt.terminator
    return validate_rotated(bwt, terminator), terminator
