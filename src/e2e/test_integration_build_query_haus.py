# src/e2e/test_integration_build_query_haus.py
from pathlib import Path

import pytest

from simwords.engine import Engine
from simwords.keyboard import GermanQwertzKeyboardDistance
from simwords.scorer import TypoScorer

VOCAB = ["haus", "maus", "house", "hausa"]


def _seed(tmp: Path, words=VOCAB) -> str:
    f = tmp / "words.txt"
    f.write_text("\n".join(words) + "\n", encoding="utf-8")
    return str(f)


@pytest.mark.e2e
def test_haus_finds_maus_only(tmp_path: Path):
    eng = Engine()
    try:
        eng.build(_seed(tmp_path), str(tmp_path / "idx"))
        assert eng.size() == 4
        rows = eng.find_similar("haus")
        assert [(q, c) for _, q, c in rows] == [("haus", "maus")]
        assert rows[0].distance == pytest.approx(GermanQwertzKeyboardDistance().distance("h", "m"))
        assert rows[0].distance > 0
    finally:
        eng.shutdown()


@pytest.mark.e2e
def test_hausa_scores_zero_when_extensions_are_kept(tmp_path: Path):
    eng = Engine(scorer=TypoScorer(reject_prefix_extensions=False))
    try:
        eng.build(_seed(tmp_path), str(tmp_path / "idx"))
        rows = {c: d for d, _, c in eng.find_similar("haus")}
        assert set(rows) == {"maus", "hausa"}
        assert rows["hausa"] == 0.0
        assert "house" not in rows
    finally:
        eng.shutdown()


@pytest.mark.e2e
def test_capitalised_query_skips_its_own_word(tmp_path: Path):
    eng = Engine()
    try:
        eng.build(_seed(tmp_path), str(tmp_path / "idx"))
        rows = eng.find_similar("Haus")
        assert all(c.lower() != "haus" for _, _, c in rows)
        assert [c for _, _, c in rows] == ["maus"]
        assert rows[0].query == "Haus"
    finally:
        eng.shutdown()


@pytest.mark.e2e
def test_query_all_uses_every_indexed_word(tmp_path: Path):
    eng = Engine()
    try:
        eng.build(_seed(tmp_path), str(tmp_path / "idx"))
        rows = list(eng.find_similar_all())
        assert [(q, c) for _, q, c in rows] == [("haus", "maus"), ("maus", "haus")]
        assert rows[0].distance == rows[1].distance
    finally:
        eng.shutdown()


@pytest.mark.e2e
def test_in_memory_build_matches_disk_build(tmp_path: Path):
    words = VOCAB + ["laus", "hais", "Maus", "haus"]
    disk, mem = Engine(), Engine()
    try:
        disk.build(_seed(tmp_path, words), str(tmp_path / "idx"))
        mem.build_from_words(words)
        for q in ("haus", "maus", "hais", "Haus", "hause"):
            assert disk.find_similar(q) == mem.find_similar(q)
        assert list(disk.find_similar_all()) == list(mem.find_similar_all())
    finally:
        disk.shutdown()
        mem.shutdown()


@pytest.mark.e2e
def test_rebuild_is_idempotent(tmp_path: Path):
    word_file = _seed(tmp_path, VOCAB + ["laus", "hais", "mais", "haus"])
    loc = str(tmp_path / "idx")
    eng = Engine()
    try:
        eng.build(word_file, loc)
        first = list(eng.find_similar_all())
        eng.build(word_file, loc)
        second = list(eng.find_similar_all())
        assert first == second and first
    finally:
        eng.shutdown()
