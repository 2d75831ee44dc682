"""
Sort strategies injected into the builders.

A generic strategy takes a sequence and a three-way comparator and returns a new sorted
list. A chars strategy takes a string and a dense alphabet and returns the order of the
positions of the string.
"""
from functools import cmp_to_key

import numpy as np


def quick_sort(items, comparator):
    return sorted(items, key=cmp_to_key(comparator))


def merge_sort(items, comparator):
    """Stable top-down merge sort."""
    items = list(items)
    if len(items) <= 1:
        return items

    middle = len(items) // 2
    left = merge_sort(items[:middle], comparator)
    right = merge_sort(items[middle:], comparator)

    merged = []
    i = j = 0
    while i < len(left) and j < len(right):
        # Ties taken from the left half to keep the sort stable
        if comparator(left[i], right[j]) <= 0:
            merged.append(left[i])
            i += 1
        else:
            merged.append(right[j])
            j += 1
    merged.extend(left[i:])
    merged.extend(right[j:])
    return merged


def build_alphabet(text, terminator=None):
    """Map each distinct symbol of ``text`` to a dense index, terminator first."""
    symbols = sorted(set(text), key=lambda c: (c != terminator, c))
    return {symbol: index for index, symbol in enumerate(symbols)}


def counting_sort_chars(text, alphabet):
    """Stable counting sort of the positions of ``text`` by symbol."""
    try:
        indexes = np.fromiter((alphabet[c] for c in text), dtype=np.int64, count=len(text))
    except KeyError as e:
        raise ValueError(f"Symbol {e.args[0]!r} is not in the alphabet") from e

    counts = np.bincount(indexes, minlength=len(alphabet)).cumsum()

    order = [0] * len(text)
    for i in range(len(text) - 1, -1, -1):
        alphabet_index = indexes[i]
        counts[alphabet_index] -= 1
        order[int(counts[alphabet_index])] = i
    return order


SORT_STRATEGIES = {
    'quick': quick_sort,
    'merge': merge_sort,
}
