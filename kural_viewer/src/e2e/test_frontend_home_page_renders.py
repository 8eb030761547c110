import json
from pathlib import Path
import pytest
from kural_web.web import app as flask_app
import kural_web.web as webmod

def _seed(tmp: Path) -> str:
    path = tmp / "tirukkural.json"
    path.write_text(json.dumps([
        {"KuralID": 0, "VerseTamil": ["அகர முதல"], "VerseEnglish": ["first of letters"]},
    ], ensure_ascii=False), encoding="utf-8")
    return str(path)

@pytest.mark.e2e
def test_frontend_home_page_renders(tmp_path: Path):
    eng = webmod.init_engine(_seed(tmp_path))
    try:
        client = flask_app.test_client()
        r = client.get("/")
        assert r.status_code == 200
        html = r.data.decode("utf-8", errors="ignore").lower()
        assert "tirukkural" in html
        assert "search by tamil or english" in html
        assert "settimeout(search, debounce_ms)" in html
        # a slower, older search response must not repaint the dropdown
        assert "const mine = ++seq;" in html
        assert html.count("if(mine !== seq) return;") == 2
    finally:
        eng.shutdown()

@pytest.mark.e2e
def test_frontend_serves_corpus_asset(tmp_path: Path):
    eng = webmod.init_engine(_seed(tmp_path))
    try:
        r = flask_app.test_client().get("/tirukkural.json")
        assert r.status_code == 200
        data = json.loads(r.data.decode("utf-8"))
        assert data[0]["KuralID"] == 0
    finally:
        eng.shutdown()
