import gzip


def load_text(path, size_limit=None, encoding='latin-1'):
    opener = gzip.open if str(path).endswith('.gz') else open
    with opener(path, 'rt', encoding=encoding) as f:
        if size_limit:
            return f.read(size_limit)  # Read up to `size_limit` characters
        return f.read()  # Read the full text if no limit is provided


def strip_terminator(text, terminator):
    """Drop occurrences of the terminator, which cannot appear in indexed text."""
    return text.replace(terminator, '')
