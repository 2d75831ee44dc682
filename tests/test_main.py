import pytest

from main import main, parse_args


def test_index_text_from_command_line(capsys):
    main(['-t', 'banana', '-p', 'ana', '-p', 'bananas', '--show-arrays', '-k', '2'])

    out = capsys.readouterr().out
    assert "Suffix array: [6, 5, 3, 1, 0, 4, 2]" in out
    assert "LCP array: [0, 1, 3, 0, 0, 2]" in out
    assert "BWT: annb$aa" in out
    assert "Inverted: banana" in out
    assert "Occurrences of 'ana': 2 at positions [1, 3]" in out
    assert "Occurrences of 'bananas': 0 at positions []" in out
    assert "Longest partial match of 'bananas': 6 chars" in out
    assert "Space saving vs full suffix array" in out


def test_index_file_from_command_line(tmp_path, capsys):
    path = tmp_path / "text.txt"
    path.write_text("missi$ssippi", encoding='latin-1')

    main(['-i', str(path), '-p', 'ssi', '--suffix-array-builder', 'naive', '--finder', 'naive'])

    assert "Occurrences of 'ssi': 2 at positions [2, 5]" in capsys.readouterr().out


def test_text_source_is_required():
    with pytest.raises(SystemExit):
        parse_args(['-p', 'ana'])
    with pytest.raises(SystemExit):
        parse_args(['-t', 'banana', '--finder', 'wavelet'])
