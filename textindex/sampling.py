import logging
import math

logger = logging.getLogger(__name__)

SAMPLING_MODES = ('text', 'slot')


def default_sample_rate(n):
    if n < 2:
        return 1
    return max(1, int(math.log2(n) ** 2))


class PartialSuffixArray:
    """
    Sparse sample of a suffix array: ``indexes`` maps some slots to their suffix start.

    Built with ``mode='text'``, the sample keeps the slots whose suffix starts at a
    multiple of ``k``: every slot then reaches a sampled one in fewer than ``k``
    Last-First steps. With ``mode='slot'`` it keeps the slots which are multiples of ``k``.
    """

    def __init__(self, k, indexes):
        if k <= 0:
            raise ValueError(f"Sampling rate must be positive: {k}")
        self.k = k
        self.indexes = dict(indexes)

    @classmethod
    def from_suffix_array(cls, suffix_array, k=None, mode='text'):
        if k is None:
            k = default_sample_rate(len(suffix_array))
        if k <= 0:
            raise ValueError(f"Sampling rate must be positive: {k}")
        if mode == 'text':
            samples = {i: pos for i, pos in enumerate(suffix_array) if pos % k == 0}
        elif mode == 'slot':
            samples = {i: pos for i, pos in enumerate(suffix_array) if i % k == 0}
        else:
            raise ValueError(f"Unknown sampling mode {mode!r}, expected one of {SAMPLING_MODES}")
        return cls(k, samples)

    def __len__(self):
        return len(self.indexes)

    def __contains__(self, slot):
        return slot in self.indexes

    def __getitem__(self, slot):
        return self.indexes[slot]


class SuffixIndexCache:
    """
    Suffix starts known so far, growing as slots get resolved.

    Seeded from a ``PartialSuffixArray`` (the sample itself is copied, never modified).
    ``resolve`` walks the Last-First mapping from a slot until a known slot is met: each
    step moves to the suffix starting one char earlier, so the start of every slot on the
    path is the known start plus its distance from it. All of them are stored.

    Resolving writes to the cache: a cache must have a single writer at a time, so share
    one across threads only behind a lock.
    """

    def __init__(self, partial_suffix_array, finder):
        self.finder = finder
        self.k = partial_suffix_array.k
        self._known = dict(partial_suffix_array.indexes)
        self._n = len(finder)
        self.walk_steps = 0

    def __len__(self):
        return len(self._known)

    def __contains__(self, slot):
        return slot in self._known

    def resolve(self, slot):
        if not 0 <= slot < self._n:
            raise IndexError(f"Slot out of range [0, {self._n}): {slot}")

        path = [slot]
        while path[-1] not in self._known:
            index, _rank = self.finder.last_to_first(path[-1])
            path.append(index)
            if len(path) > self._n:
                raise ValueError("Partial suffix array has no sample on the Last-First cycle")

        base = self._known[path[-1]]
        steps = len(path) - 1
        for distance, visited in enumerate(path[:-1]):
            self._known[visited] = (base + steps - distance) % self._n
        if steps:
            self.walk_steps += steps
            logger.debug(f"Resolved slot {slot} in {steps} steps")
        return self._known[slot]

    def __getitem__(self, slot):
        return self.resolve(slot)
