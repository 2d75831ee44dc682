"""
Building blocks of prefix-doubling suffix sorting over partial cyclic substrings (PCS).

A PCS of length L starting at i is ``input[i:i+L]`` read cyclically. ``order`` lists the
PCS start indexes in ascending PCS order; ``eq_classes[i]`` is the rank of the PCS
starting at i, equal PCS sharing the same class.
"""
import numpy as np

from textindex.sorting import counting_sort_chars


def extract_pcs(text, index, pcs_length):
    n = len(text)
    if index + pcs_length <= n:
        return text[index:index + pcs_length]
    rotated = text[index:] + text[:index]
    return rotated * (pcs_length // n) + rotated[:pcs_length % n]


def extract_all_pcs(text, pcs_length):
    return [(extract_pcs(text, index, pcs_length), index) for index in range(len(text))]


def sort_single_char(text, alphabet):
    """Order of the single-char PCS, by counting sort over the alphabet."""
    return counting_sort_chars(text, alphabet)


def classify_single_char(text, order):
    """Eq classes of the single-char PCS, scanning ``order`` once."""
    if len(text) != len(order):
        raise ValueError("order must have as many items as chars in the text")
    if not text:
        return []

    eq_classes = [0] * len(order)
    current = 0
    for i in range(1, len(order)):
        if text[order[i]] != text[order[i - 1]]:
            current += 1
        eq_classes[order[i]] = current
    return eq_classes


def naive_classify_single_char(text):
    """Eq class of each char as the number of distinct smaller chars. O(n^2)."""
    return [len({c2 for c2 in text if c2 < c1}) for c1 in text]


def sort_double_length(pcs_length, order, eq_classes):
    """
    Order of the PCS of length ``2 * pcs_length``, given the order and eq classes of the
    PCS of length ``pcs_length``.

    The double PCS starting at i is the pair (class[i], class[i + L]). The previous order
    already sorts by second half when shifted back by L, so a stable counting sort by the
    first half is enough.
    """
    if pcs_length <= 0:
        raise ValueError(f"pcs_length must be positive: {pcs_length}")
    if len(order) != len(eq_classes):
        raise ValueError("order must have as many items as eq_classes")

    n = len(eq_classes)
    if n == 0:
        return []
    classes = np.asarray(eq_classes, dtype=np.int64)
    sigma = int(classes[order[-1]]) + 1
    counts = np.bincount(classes, minlength=sigma).cumsum()

    double_order = [0] * n
    for i in range(n - 1, -1, -1):
        start = (order[i] - pcs_length) % n
        eq_class = classes[start]
        counts[eq_class] -= 1
        double_order[int(counts[eq_class])] = start
    return double_order


def classify_double_length(pcs_length, eq_classes_half, order):
    """Eq classes of the PCS of length ``pcs_length`` from the classes of the halves."""
    if pcs_length <= 0:
        raise ValueError(f"pcs_length must be positive: {pcs_length}")
    if pcs_length % 2 != 0:
        raise ValueError(f"pcs_length must be even: {pcs_length}")
    if len(order) != len(eq_classes_half):
        raise ValueError("order must have as many items as eq_classes_half")

    n = len(eq_classes_half)
    if n == 0:
        return []
    half = pcs_length // 2
    eq_classes = [0] * n

    current = 0
    previous = order[0]
    for index in order[1:]:
        if (eq_classes_half[index] != eq_classes_half[previous] or
                eq_classes_half[(index + half) % n] != eq_classes_half[(previous + half) % n]):
            current += 1
        eq_classes[index] = current
        previous = index
    return eq_classes


def naive_sort_double_length(text, pcs_length):
    """Order of the PCS of length ``2 * pcs_length`` by direct comparison."""
    ordered = sorted(extract_all_pcs(text, 2 * pcs_length))
    return [index for _, index in ordered]


def naive_classify_double_length(text, pcs_length):
    """Eq classes of the PCS of length ``pcs_length`` by sorting them all."""
    if pcs_length <= 0 or pcs_length > len(text):
        raise ValueError(f"pcs_length must be in [1, {len(text)}]: {pcs_length}")

    ordered = sorted(extract_all_pcs(text, pcs_length))
    eq_classes = [0] * len(text)
    current = 0
    for i in range(1, len(ordered)):
        if ordered[i][0] != ordered[i - 1][0]:
            current += 1
        eq_classes[ordered[i][1]] = current
    return eq_classes


def order_based_classify_double_length(text, pcs_length, order):
    """Eq classes of the PCS of length ``pcs_length`` comparing the PCS along ``order``."""
    if pcs_length <= 0 or pcs_length > len(text):
        raise ValueError(f"pcs_length must be in [1, {len(text)}]: {pcs_length}")
    if len(order) != len(text):
        raise ValueError("order must have as many items as chars in the text")

    eq_classes = [0] * len(text)
    current = 0
    previous = extract_pcs(text, order[0], pcs_length)
    for index in order[1:]:
        pcs = extract_pcs(text, index, pcs_length)
        if pcs != previous:
            current += 1
        eq_classes[index] = current
        previous = pcs
    return eq_classes
