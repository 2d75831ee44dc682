DEFAULT_TERMINATOR = '$'


def char_key(char, terminator):
    """Sort key placing the terminator before every other character."""
    return (char != terminator, char)


def compare_chars(x, y, terminator):
    if x == y:
        return 0
    if x == terminator:
        return -1
    if y == terminator:
        return 1
    return -1 if x < y else 1


def compare_strings(x, y, terminator):
    """Lexicographic comparison where the terminator is the smallest symbol."""
    for a, b in zip(x, y):
        result = compare_chars(a, b, terminator)
        if result != 0:
            return result
    return (len(x) > len(y)) - (len(x) < len(y))


def validate_rotated(content, terminator):
    """Rotated content (a BWT, a matrix row) must hold the terminator exactly once."""
    if len(terminator) != 1:
        raise ValueError(f"Terminator must be a single character: {terminator!r}")
    occurrences = content.count(terminator)
    if occurrences != 1:
        raise ValueError(
            f"Terminator {terminator!r} should occur exactly once, found {occurrences}")
    return content


class TerminatedText:
    """
    A text followed by a terminator which doesn't occur in the text.

    Indexing, slicing, iteration and len() all refer to the full sequence, terminator
    included, so ``len(TerminatedText("banana")) == 7``.
    """

    def __init__(self, text: str, terminator: str = DEFAULT_TERMINATOR, validate: bool = True):
        if len(terminator) != 1:
            raise ValueError(f"Terminator must be a single character: {terminator!r}")
        if validate and terminator in text:
            raise ValueError(f"Terminator {terminator!r} shouldn't be included in the text")
        self._text = text
        self._terminator = terminator
        self._full = text + terminator
        self._codes = None

    @property
    def text(self):
        return self._text

    @property
    def terminator(self):
        return self._terminator

    @property
    def full(self):
        return self._full

    @property
    def terminator_index(self):
        return len(self._full) - 1

    @property
    def codes(self):
        """Integer encoding preserving the order: terminator is 0, others are ord + 1."""
        if self._codes is None:
            self._codes = [0 if c == self._terminator else ord(c) + 1 for c in self._full]
        return self._codes

    def char_key(self, char):
        return char_key(char, self._terminator)

    def compare_chars(self, x, y):
        return compare_chars(x, y, self._terminator)

    def suffix(self, start):
        return self._full[start:]

    def rotation(self, shift):
        """Cyclic rotation of the full text starting at ``shift``."""
        shift %= len(self._full)
        return self._full[shift:] + self._full[:shift]

    def starts_with(self, prefix):
        return self._full.startswith(prefix)

    def ends_with(self, suffix):
        return self._full.endswith(suffix)

    def __len__(self):
        return len(self._full)

    def __getitem__(self, index):
        return self._full[index]

    def __iter__(self):
        return iter(self._full)

    def __eq__(self, other):
        if not isinstance(other, TerminatedText):
            return NotImplemented
        return self._text == other._text and self._terminator == other._terminator

    def __hash__(self):
        return hash((self._text, self._terminator))

    def __str__(self):
        return self._full

    def __repr__(self):
        return f"TerminatedText({self._text!r}, {self._terminator!r})"
