import json
from pathlib import Path
from types import SimpleNamespace
import pytest

pytest.importorskip("tkinter")
pytest.importorskip("customtkinter")

import app as desktop
from kural.config import DEBOUNCE_MS, LOAD_ERROR_MESSAGE, SEARCH_ERROR_MESSAGE
from kural.engine import Engine

def _seed(tmp: Path, rows=None) -> str:
    if rows is None:
        rows = [
            {"KuralID": 0, "VerseTamil": ["அகர முதல"], "VerseEnglish": ["A is first of letters"]},
            {"KuralID": 1, "VerseTamil": ["கற்றதனால்"], "VerseEnglish": ["What is the use of learning"]},
            {"KuralID": 2, "VerseTamil": ["மலர்மிசை"], "VerseEnglish": ["Those who love the feet"]},
        ]
    path = tmp / "tirukkural.json"
    path.write_text(json.dumps(rows, ensure_ascii=False), encoding="utf-8")
    return str(path)

class _Widget:
    """Records what the viewer does to a widget, without a display."""

    def __init__(self, path: str):
        self.path = path
        self.text = ""
        self.options = {}
        self.calls = []

    def __str__(self):
        return self.path

    def configure(self, **kw):
        self.options.update(kw)

    def get(self):
        return self.text

    def delete(self, first, last=None):
        self.text = ""

    def insert(self, index, s):
        self.text += s

    def __getattr__(self, name):
        def record(*args, **kw):
            self.calls.append(name)
        return record

class _Button:
    def __init__(self, master, text="", command=None, **kw):
        self.text = text
        self.command = command

    def grid(self, **kw):
        pass

    def destroy(self):
        pass

_WIDGETS = (
    "progress", "lbl_status", "entry_query", "results_frame", "lbl_search_msg",
    "entry_jump", "btn_go", "btn_prev", "btn_next", "lbl_number", "lbl_tamil",
    "lbl_translit", "lbl_english", "lbl_position", "txt_log", "error_overlay", "lbl_error",
)

def _viewer(source: str):
    v = object.__new__(desktop.KuralViewerApp)
    v._source = source
    v._engine = Engine()
    v._nav = None
    v._loading_thread = None
    v._search_after_id = None
    v._result_buttons = []
    for name in _WIDGETS:
        setattr(v, name, _Widget(f".{name}"))

    v.scheduled = []
    v.cancelled = []

    def after(ms, fn=None):
        v.scheduled.append((ms, fn))
        return f"after#{len(v.scheduled)}"

    v.after = after
    v.after_cancel = v.cancelled.append
    return v

def _run_scheduled(v):
    pending, v.scheduled = v.scheduled, []
    for _ms, fn in pending:
        fn()

def _loaded(tmp: Path):
    v = _viewer(_seed(tmp))
    v._load_worker()
    _run_scheduled(v)
    return v

@pytest.mark.e2e
def test_load_failure_shows_error_overlay(tmp_path: Path):
    v = _viewer(_seed(tmp_path, rows=[]))
    v._load_worker()
    assert len(v.scheduled) == 1
    # the callback runs after the worker's except block has exited
    _run_scheduled(v)
    assert v.lbl_error.options["text"] == LOAD_ERROR_MESSAGE
    assert "place" in v.error_overlay.calls and "lift" in v.error_overlay.calls
    assert "stop" in v.progress.calls
    assert v._nav is None

@pytest.mark.e2e
def test_reload_after_failure_starts_a_fresh_engine(tmp_path: Path):
    source = _seed(tmp_path, rows=[])
    v = _viewer(source)
    v._load_worker()
    _run_scheduled(v)
    failed_engine = v._engine

    _seed(tmp_path)
    v._reload()
    v._loading_thread.join(timeout=5)
    _run_scheduled(v)

    assert "place_forget" in v.error_overlay.calls
    assert v._engine is not failed_engine
    assert v._nav is not None and v._nav.total == 3
    assert v.lbl_number.options["text"] == "1"

@pytest.mark.e2e
def test_buttons_track_bounds(tmp_path: Path):
    v = _loaded(tmp_path)
    assert v.btn_prev.options["state"] == "disabled"
    assert v.btn_next.options["state"] == "normal"
    assert v.lbl_position.options["text"] == "1 / 3"

    v._next(); v._next()
    assert v._nav.index == 2
    assert v.btn_prev.options["state"] == "normal"
    assert v.btn_next.options["state"] == "disabled"

    v._next()
    assert v._nav.index == 2
    assert v.lbl_english.options["text"] == "Those who love the feet"

@pytest.mark.e2e
def test_go_entry_rejects_out_of_range(tmp_path: Path):
    v = _loaded(tmp_path)
    v.entry_jump.text = "5000"
    v._on_jump_changed()
    assert v.btn_go.options["state"] == "disabled"
    v._go_to_entry()
    assert v._nav.index == 0

    v.entry_jump.text = "2"
    v._on_jump_changed()
    assert v.btn_go.options["state"] == "normal"
    v._go_to_entry()
    assert v._nav.index == 1
    assert v.entry_jump.text == "2"

@pytest.mark.e2e
def test_query_changes_are_debounced(tmp_path: Path):
    v = _loaded(tmp_path)
    v._on_query_changed()
    v._on_query_changed()
    assert [ms for ms, _fn in v.scheduled] == [DEBOUNCE_MS, DEBOUNCE_MS]
    assert v.cancelled == ["after#1"]
    assert v._search_after_id == "after#2"

@pytest.mark.e2e
def test_search_failure_shows_inline_message(tmp_path: Path):
    v = _loaded(tmp_path)
    v._next()

    def boom(q, **kw):
        raise RuntimeError("index exploded")

    v._engine.search = boom
    v.entry_query.text = "love"
    v._do_search()
    assert v.lbl_search_msg.options["text"] == SEARCH_ERROR_MESSAGE
    assert v._nav.index == 1
    assert "search" in v.txt_log.text.lower()

@pytest.mark.e2e
def test_search_result_click_jumps(tmp_path: Path, monkeypatch):
    monkeypatch.setattr(desktop.ctk, "CTkButton", _Button)
    v = _loaded(tmp_path)
    v.entry_query.text = "LEARNING"
    v._do_search()
    assert len(v._result_buttons) == 1
    assert "[learning]" in v._result_buttons[0].text

    v._result_buttons[0].command()
    assert v._nav.index == 1
    assert v.entry_query.text == ""

@pytest.mark.e2e
def test_arrow_keys_ignored_while_typing(tmp_path: Path):
    v = _loaded(tmp_path)
    v._on_arrow(SimpleNamespace(widget=".entry_query.!entry"), 1)
    v._on_arrow(SimpleNamespace(widget=".entry_jump"), 1)
    assert v._nav.index == 0

    v._on_arrow(SimpleNamespace(widget=".card"), 1)
    assert v._nav.index == 1
    v._on_arrow(SimpleNamespace(widget=".card.!label"), -1)
    assert v._nav.index == 0
