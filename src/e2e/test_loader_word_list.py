# src/e2e/test_loader_word_list.py
from pathlib import Path

import pytest

from simwords.errors import IOFailure
from simwords.loader import load_words
from simwords.normalize import split_query_words


def test_strips_line_endings_and_trailing_whitespace(tmp_path: Path):
    f = tmp_path / "words.txt"
    f.write_bytes("Haus\r\nmaus  \n\nhäuser\t\n   \nHaus\nlast".encode("utf-8"))
    vocab = load_words(str(f))
    # blank lines skipped, duplicates and case kept, order preserved
    assert vocab.words == ["Haus", "maus", "häuser", "Haus", "last"]
    assert len(vocab) == 5


def test_utf8_bom_is_not_part_of_the_first_word(tmp_path: Path):
    f = tmp_path / "bom.txt"
    f.write_bytes("\ufeffStraße\nstrasse\n".encode("utf-8"))
    assert load_words(str(f)).words == ["Straße", "strasse"]


def test_invalid_utf8_is_an_io_failure(tmp_path: Path):
    f = tmp_path / "latin1.txt"
    f.write_bytes("Grüße\n".encode("latin-1"))
    with pytest.raises(IOFailure):
        load_words(str(f))


def test_missing_or_directory_word_list(tmp_path: Path):
    with pytest.raises(IOFailure):
        load_words(str(tmp_path / "nope.txt"))
    with pytest.raises(IOFailure):
        load_words(str(tmp_path))


@pytest.mark.parametrize(
    ["arg", "words"],
    [
        ("haus", ["haus"]),
        ("haus,maus", ["haus", "maus"]),
        ("haus,,maus,", ["haus", "maus"]),
        (",", []),
    ],
)
def test_split_query_words(arg, words):
    assert split_query_words(arg) == words
