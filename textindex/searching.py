"""
Searching primitives driven by three-way comparators.

``comparator(element, item)`` must return a negative number, zero or a positive number
when ``element`` sorts before, together with or after ``item``. The comparators used by the
matchers ignore ``item`` and compare the element against a pattern they hold.
"""


def _default_comparator(x, y):
    return (x > y) - (x < y)


def _validate_bounds(source, from_index, to_index):
    length = len(source)
    if from_index is not None and not 0 <= from_index < length:
        raise IndexError(f"from_index out of range: {from_index}")
    if to_index is not None and not 0 <= to_index < length:
        raise IndexError(f"to_index out of range: {to_index}")
    return length


def _binary_search(source, item, comparator, from_index, to_index, first):
    length = _validate_bounds(source, from_index, to_index)
    comparator = comparator or _default_comparator

    start = 0 if from_index is None else from_index
    end = length - 1 if to_index is None else to_index
    result = -1
    while start <= end:
        middle = start + (end - start) // 2
        comparison = comparator(source[middle], item)
        if comparison < 0:
            start = middle + 1
        elif comparison > 0:
            end = middle - 1
        else:
            result = middle
            if first:
                end = middle - 1
            else:
                start = middle + 1
    return result


def first(source, item, comparator=None, from_index=None, to_index=None):
    """Index of the first element equal to ``item`` in ascending ``source``, or -1."""
    return _binary_search(source, item, comparator, from_index, to_index, True)


def last(source, item, comparator=None, from_index=None, to_index=None):
    """Index of the last element equal to ``item`` in ascending ``source``, or -1."""
    return _binary_search(source, item, comparator, from_index, to_index, False)


def interval(source, item, comparator=None, from_index=None, to_index=None):
    start = first(source, item, comparator, from_index, to_index)
    if start < 0:
        return -1, -1
    return start, last(source, item, comparator, start, to_index)


def nth(source, item, occurrence_rank, comparator=None, from_index=None, to_index=None):
    """Index of the ``occurrence_rank``-th (0-based) element equal to ``item``, or -1."""
    if occurrence_rank < 0:
        raise IndexError(f"Occurrence rank must be non-negative: {occurrence_rank}")
    comparator = comparator or _default_comparator

    start = first(source, item, comparator, from_index, to_index)
    if start < 0:
        return -1
    index = start + occurrence_rank
    if index < len(source) and comparator(source[index], item) == 0:
        return index
    return -1


def linear_first(source, item, from_index=None, to_index=None):
    """Index of the first element equal to ``item``, scanning from left; -1 if missing."""
    _validate_bounds(source, from_index, to_index)
    start = 0 if from_index is None else from_index
    end = len(source) - 1 if to_index is None else to_index
    for index in range(start, end + 1):
        if source[index] == item:
            return index
    return -1
