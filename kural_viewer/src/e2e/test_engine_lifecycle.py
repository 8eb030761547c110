import json
from pathlib import Path
import pytest
from kural.engine import Engine
from kural.loader import CorpusLoadError

def _seed(tmp: Path, n: int = 3) -> str:
    path = tmp / "tirukkural.json"
    path.write_text(json.dumps([
        {"KuralID": i, "VerseTamil": [f"அறம் {i}"], "VerseEnglish": [f"virtue {i}"]} for i in range(n)
    ], ensure_ascii=False), encoding="utf-8")
    return str(path)

@pytest.mark.e2e
def test_use_before_load_raises():
    eng = Engine()
    assert not eng.loaded
    with pytest.raises(RuntimeError):
        eng.search("x")
    with pytest.raises(RuntimeError):
        eng.navigator()

@pytest.mark.e2e
def test_corpus_is_write_once(tmp_path: Path):
    eng = Engine()
    try:
        corpus = eng.load(_seed(tmp_path))
        with pytest.raises(RuntimeError):
            eng.load(_seed(tmp_path))
        assert eng.corpus is corpus
    finally:
        eng.shutdown()

@pytest.mark.e2e
def test_failed_load_leaves_engine_unloaded(tmp_path: Path):
    bad = tmp_path / "bad.json"
    bad.write_text("[]", encoding="utf-8")
    eng = Engine()
    with pytest.raises(CorpusLoadError):
        eng.load(str(bad))
    assert not eng.loaded

@pytest.mark.e2e
def test_kural_and_navigator(tmp_path: Path):
    eng = Engine()
    try:
        eng.load(_seed(tmp_path, n=4))
        assert eng.kural(3).english == ("virtue 3",)
        with pytest.raises(IndexError):
            eng.kural(4)
        nav = eng.navigator(2)
        assert nav.total == 4 and nav.index == 2
        rows = eng.search("VIRTUE", limit=2)
        assert [r.id for r in rows] == [0, 1]
    finally:
        eng.shutdown()
    assert not eng.loaded
