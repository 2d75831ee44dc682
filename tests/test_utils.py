import gzip

from utils.data_loader import load_text, strip_terminator
from utils.utils import build_count, build_occ, time_function


def test_build_count():
    assert build_count("$aaabnn") == {'$': 0, 'a': 1, 'b': 4, 'n': 5}
    assert build_count("~aaabnn", '~') == {'~': 0, 'a': 1, 'b': 4, 'n': 5}


def test_build_occ():
    occ = build_occ("annb$aa")

    assert list(occ['a']) == [0, 1, 1, 1, 1, 1, 2, 3]
    assert list(occ['n']) == [0, 0, 1, 2, 2, 2, 2, 2]
    assert list(occ['$']) == [0, 0, 0, 0, 0, 1, 1, 1]
    assert set(occ) == {'a', 'n', 'b', '$'}


def test_time_function():
    @time_function
    def add(x, y):
        return x + y

    result, elapsed = add(2, 3)

    assert result == 5
    assert elapsed >= 0


def test_load_plain_text(tmp_path):
    path = tmp_path / "text.txt"
    path.write_text("mississippi", encoding='latin-1')

    assert load_text(path) == "mississippi"
    assert load_text(str(path), size_limit=4) == "miss"


def test_load_gzipped_text(tmp_path):
    path = tmp_path / "text.txt.gz"
    with gzip.open(path, 'wt', encoding='latin-1') as f:
        f.write("banana")

    assert load_text(path) == "banana"
    assert load_text(path, size_limit=3) == "ban"


def test_strip_terminator():
    assert strip_terminator("ba$na$na", '$') == "banana"
