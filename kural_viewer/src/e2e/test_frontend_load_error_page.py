from pathlib import Path
import pytest
from kural_web.web import app as flask_app
import kural_web.web as webmod

@pytest.mark.e2e
def test_load_failure_shows_full_page_error(tmp_path: Path):
    bad = tmp_path / "tirukkural.json"
    bad.write_text('{"not": "an array"}', encoding="utf-8")
    webmod.init_engine(str(bad))

    client = flask_app.test_client()
    r = client.get("/")
    assert r.status_code == 503
    html = r.data.decode("utf-8").lower()
    assert "error loading content" in html
    assert "reload" in html

    # no partial functionality
    assert client.get("/api/search?q=x").status_code == 503
    assert client.get("/api/kural/0").status_code == 503
    health = client.get("/api/health").get_json()
    assert health == {"ok": False, "kurals": 0}

@pytest.mark.e2e
def test_page_reload_retries_failed_load(tmp_path: Path):
    asset = tmp_path / "tirukkural.json"
    asset.write_text("[]", encoding="utf-8")
    webmod.init_engine(str(asset))
    client = flask_app.test_client()
    assert client.get("/").status_code == 503

    asset.write_text('[{"KuralID": 0, "VerseTamil": ["அகர"], "VerseEnglish": ["first"]}]', encoding="utf-8")
    try:
        assert client.get("/").status_code == 200
        assert client.get("/api/health").get_json() == {"ok": True, "kurals": 1}
    finally:
        webmod._engine.shutdown()
