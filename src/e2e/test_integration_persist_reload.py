# src/e2e/test_integration_persist_reload.py
import json
from pathlib import Path

import pytest

import simwords.DB.index as index_mod
from simwords.DB import build_index, open_index
from simwords.DB.acx import ACXWriter
from simwords.errors import IndexReadError, IOFailure, NotFoundError
from simwords.search import Retriever

WORDS = ["haus", "maus", "Haus", "häuser", "haus", "straße"]


@pytest.mark.e2e
def test_build_then_reopen(tmp_path: Path):
    loc = tmp_path / "idx"
    build_index(WORDS, str(loc)).close()
    assert sorted(p.name for p in loc.iterdir()) == ["grams.acx", "lengths.acx", "meta.json", "words.wdb"]

    idx = open_index(str(loc))
    try:
        assert idx.size() == len(WORDS)
        assert [idx.get(i) for i in range(idx.size())] == WORDS
        assert idx.ids_for_length(4) == [0, 1, 2, 4]
        assert idx.ids_for_gram("\x02h") == [0, 2, 3, 4]
    finally:
        idx.close()


@pytest.mark.e2e
def test_iter_words_is_lazy_and_restartable(tmp_path: Path):
    idx = build_index(WORDS, str(tmp_path / "idx"))
    try:
        seq = idx.iter_words()
        assert len(seq) == len(WORDS)
        it = iter(seq)
        assert next(it) == "haus"
        assert list(seq) == WORDS          # fresh pass starts over
        assert list(seq) == WORDS
    finally:
        idx.close()


@pytest.mark.e2e
def test_rebuild_replaces_previous_content(tmp_path: Path):
    loc = tmp_path / "idx"
    build_index(["alt", "older"], str(loc)).close()
    (loc / "stray.txt").write_text("left over", encoding="utf-8")

    idx = build_index(["neu"], str(loc))
    try:
        assert list(idx.iter_words()) == ["neu"]
        assert not (loc / "stray.txt").exists()
    finally:
        idx.close()
    # no staging directories left behind
    assert sorted(p.name for p in tmp_path.iterdir()) == ["idx"]


@pytest.mark.e2e
def test_existing_file_at_destination_is_replaced(tmp_path: Path):
    loc = tmp_path / "idx"
    loc.write_text("not an index", encoding="utf-8")
    build_index(["haus"], str(loc)).close()
    assert loc.is_dir()


@pytest.mark.e2e
def test_failed_build_leaves_no_index(tmp_path: Path, monkeypatch):
    loc = tmp_path / "idx"

    def boom(self, path, items):
        raise OSError(28, "No space left on device")

    monkeypatch.setattr(index_mod.ACXWriter, "save", boom)
    with pytest.raises(IOFailure):
        build_index(WORDS, str(loc))
    assert not loc.exists()
    assert list(tmp_path.iterdir()) == []


@pytest.mark.e2e
def test_open_missing_location(tmp_path: Path):
    with pytest.raises(NotFoundError):
        open_index(str(tmp_path / "nothing-here"))
    (tmp_path / "empty").mkdir()
    with pytest.raises(NotFoundError):
        open_index(str(tmp_path / "empty"))


@pytest.mark.e2e
@pytest.mark.parametrize("damage", ["truncate_words", "bad_magic", "drop_grams", "bad_meta", "old_version"])
def test_damaged_index_is_a_read_error(tmp_path: Path, damage: str):
    loc = tmp_path / "idx"
    build_index(WORDS, str(loc)).close()

    if damage == "truncate_words":
        data = (loc / "words.wdb").read_bytes()
        (loc / "words.wdb").write_bytes(data[:12])
    elif damage == "bad_magic":
        data = (loc / "words.wdb").read_bytes()
        (loc / "words.wdb").write_bytes(b"XXXX" + data[4:])
    elif damage == "drop_grams":
        (loc / "grams.acx").unlink()
    elif damage == "bad_meta":
        (loc / "meta.json").write_text("{not json", encoding="utf-8")
    elif damage == "old_version":
        meta = json.loads((loc / "meta.json").read_text(encoding="utf-8"))
        meta["version"] = 0
        (loc / "meta.json").write_text(json.dumps(meta), encoding="utf-8")

    with pytest.raises(IndexReadError):
        open_index(str(loc))


@pytest.mark.e2e
def test_reads_after_close_fail(tmp_path: Path):
    idx = build_index(WORDS, str(tmp_path / "idx"))
    idx.close()
    assert idx.closed
    with pytest.raises(IndexReadError):
        idx.size()
    with pytest.raises(IndexReadError):
        idx.ids_for_gram("ha")
    idx.close()  # second close is harmless


@pytest.mark.e2e
def test_posting_id_past_the_records_is_a_read_error(tmp_path: Path):
    loc = tmp_path / "idx"
    build_index(WORDS, str(loc)).close()
    ACXWriter(k=2).save(str(loc / "grams.acx"), [("\x02h", [0, 99]), ("ha", [0, 99])])

    idx = open_index(str(loc))
    try:
        with pytest.raises(IndexReadError):
            idx.get(99)
        with pytest.raises(IndexReadError):
            Retriever().retrieve(idx, "haus")
    finally:
        idx.close()


@pytest.mark.e2e
def test_unsorted_postings_keys_are_a_read_error(tmp_path: Path):
    loc = tmp_path / "idx"
    build_index(WORDS, str(loc)).close()
    ACXWriter(k=0).save(str(loc / "lengths.acx"), [("4", [0]), ("6", [3])])
    data = bytearray((loc / "lengths.acx").read_bytes())
    # swap the one-byte keys of the two entries: "6" before "4"
    first, second = 13, 13 + 1 + 1 + 8
    data[first], data[second] = data[second], data[first]
    (loc / "lengths.acx").write_bytes(bytes(data))

    with pytest.raises(IndexReadError):
        open_index(str(loc))
