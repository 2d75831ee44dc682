from collections import Counter
import time

import numpy as np


def time_function(func):
    """
    Decorator to measure the execution time of a function
    """
    def wrapper(*args, **kwargs):
        start_time = time.perf_counter()
        result = func(*args, **kwargs)
        end_time = time.perf_counter()
        execution_time = end_time - start_time
        return result, execution_time
    return wrapper


def build_count(text, terminator='$'):
    """Index of the first occurrence of each char in the sorted text."""
    alphabet = sorted(set(text), key=lambda c: (c != terminator, c))
    c = Counter(text)
    total = 0
    count = {}
    for char in alphabet:
        count[char] = total
        total += c[char]
    return count


def build_occ(bwt):
    """occ[char][i] is the number of occurrences of char in bwt[:i]."""
    chars = np.array(list(bwt), dtype=str)
    occ = {}
    for char in set(bwt):
        occ[char] = np.concatenate(([0], np.cumsum(chars == char)))
    return occ
