from box_grid import NULL, chars, neighboring
from box_relation import Loc


def test_chars():
    assert chars("ab\ncd") == [["a", "b"], ["c", "d"]]
    assert chars("ab\nc") == [["a", "b"], ["c", "\0"]]
    assert chars("") == []


def test_chars_pads_to_longest_line():
    grid = chars("a\n\nabc\n")
    assert grid == [["a", NULL, NULL], [NULL, NULL, NULL], ["a", "b", "c"]]
    assert chars("┌─┐\n│▀│\n└─┘")[1] == ["│", "▀", "│"]


def test_neighboring():
    grid = chars("abc\ndef\nghi")
    assert neighboring(grid, Loc(1, 1)) == {"N": "b", "S": "h", "E": "f", "W": "d"}
    assert neighboring(grid, Loc(0, 0)) == {"N": NULL, "S": "d", "E": "b", "W": NULL}
    assert neighboring("ab\nc", Loc(0, 1)) == {"N": "a", "S": NULL, "E": NULL, "W": NULL}


def test_chars_splits_rows_on_newline_only():
    assert chars("a\x0cb") == [["a", "\x0c", "b"]]
    assert chars("a\rb") == [["a", "\r", "b"]]
    assert chars("a\u2028b\x85c") == [["a", "\u2028", "b", "\x85", "c"]]
    assert chars("ab\r\ncd\r\n") == [["a", "b"], ["c", "d"]]
    assert chars("a\n") == [["a"]]
    assert chars("a\r") == [["a", "\r"]]
    assert chars("\n") == [[]]
