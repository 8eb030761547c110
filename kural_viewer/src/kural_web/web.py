from __future__ import annotations
import argparse
import logging
from html import escape
from flask import Flask, request, jsonify, Response, send_file
from kural import Engine, CorpusLoadError, Kural, split_highlight
from kural.config import MAX_RESULTS, CORPUS_FILE, CORPUS_ROUTE, DEBOUNCE_MS, SEARCH_ERROR_MESSAGE, LOAD_ERROR_MESSAGE

log = logging.getLogger(__name__)

app = Flask(__name__)
_engine: Engine | None = None
_load_error: str | None = None
_corpus_source: str = CORPUS_FILE

# ---------- helpers ----------
def _ready() -> bool:
    return _engine is not None and _engine.loaded and _load_error is None

def _unavailable():
    return jsonify({"error": _load_error or LOAD_ERROR_MESSAGE}), 503

def _segments(lines, highlight: str):
    return [[{"text": s.text, "matched": s.matched} for s in split_highlight(line, highlight)] for line in lines]

def _view(k: Kural, nav) -> dict:
    return {
        "index": nav.index,
        "number": k.number,
        "total": nav.total,
        "has_next": nav.has_next,
        "has_previous": nav.has_previous,
        "tamil": list(k.tamil),
        "transliteration": list(k.transliteration),
        "english": list(k.english),
    }

# ---------- API ----------
@app.get("/api/health")
def api_health():
    n = len(_engine.corpus) if _ready() else 0  # type: ignore
    return jsonify({"ok": _ready(), "kurals": n})

@app.get("/api/kural/<int:index>")
def api_kural(index: int):
    if not _ready():
        return _unavailable()
    total = len(_engine.corpus)  # type: ignore
    if not 0 <= index < total:
        return jsonify({"error": f"kural index must be in [0, {total - 1}]"}), 404
    nav = _engine.navigator(index)  # type: ignore
    return jsonify(_view(_engine.kural(index), nav))  # type: ignore

@app.get("/api/navigate")
def api_navigate():
    if not _ready():
        return _unavailable()
    total = len(_engine.corpus)  # type: ignore
    index = request.args.get("index", 0, type=int)
    action = request.args.get("action", "", type=str)
    target = request.args.get("target", None, type=int)
    if not 0 <= index < total:
        return jsonify({"error": f"kural index must be in [0, {total - 1}]"}), 404

    # state lives with the client; rebuild a navigator at its current index
    nav = _engine.navigator(index)  # type: ignore
    if action == "next":
        nav.next()
    elif action == "previous":
        nav.previous()
    elif action in ("goto", "select"):
        moved = target is not None and (nav.go_to(target) if action == "goto" else nav.select_from_search(target))
        if not moved:
            return jsonify({"error": f"kural index must be in [0, {total - 1}]", "index": nav.index}), 400
    else:
        return jsonify({"error": f"unknown action {action!r}"}), 400
    return jsonify(_view(_engine.kural(nav.index), nav))  # type: ignore

@app.get("/api/search")
def api_search():
    if not _ready():
        return _unavailable()
    q = request.args.get("q", "", type=str)
    k = request.args.get("k", MAX_RESULTS, type=int)
    try:
        rows = _engine.search(q, limit=max(1, min(MAX_RESULTS, k)))  # type: ignore
    except Exception:
        log.exception("Search failed for %r", q)
        return jsonify({"error": SEARCH_ERROR_MESSAGE}), 500
    return jsonify([
        {
            "id": r.id,
            "index": r.index,
            "number": r.id + 1,
            "highlight": r.highlight,
            "tamil": _segments(r.tamil, r.highlight),
            "english": _segments(r.english, r.highlight),
        }
        for r in rows
    ])

@app.get(CORPUS_ROUTE)
def corpus_asset():
    if _corpus_source.startswith(("http://", "https://")):
        return jsonify({"error": "corpus is served from a remote URL"}), 404
    return send_file(_corpus_source, mimetype="application/json")

# ---------- UI ----------
_ERROR_HTML = r"""
<!doctype html>
<html lang="en">
<head>
<meta charset="utf-8" />
<meta name="viewport" content="width=device-width,initial-scale=1" />
<title>Tirukkural • Error</title>
<style>
body{margin:0; height:100vh; display:flex; align-items:center; justify-content:center;
  background:#0b0f14; color:#cfd8e3; font:16px/1.45 system-ui,-apple-system,Segoe UI,Roboto,Ubuntu,Arial}
.card{max-width:520px; padding:28px; text-align:center; background:#0f141b; border:1px solid #1c2530; border-radius:16px}
h1{font-size:20px; color:#ff5d5d; margin:0 0 10px 0}
.btn{margin-top:16px; padding:10px 14px; border-radius:10px; border:1px solid #1c2530;
  background:#0b1117; color:#cfd8e3; cursor:pointer}
</style>
</head>
<body>
  <div class="card">
    <h1>Error Loading Content</h1>
    <p>__MESSAGE__</p>
    <button class="btn" onclick="window.location.reload()">Reload</button>
  </div>
</body>
</html>
"""

@app.get("/")
def home():
    # a browser reload after a failed load is the manual retry; try the source once more
    if _load_error is not None:
        init_engine(_corpus_source)
    if not _ready():
        msg = escape(_load_error or LOAD_ERROR_MESSAGE)
        return Response(_ERROR_HTML.replace("__MESSAGE__", msg), status=503, mimetype="text/html")

    # A tiny SPA: CSS variables + minimal JS, no external deps.
    html = r"""
<!doctype html>
<html lang="en">
<head>
<meta charset="utf-8" />
<meta name="viewport" content="width=device-width,initial-scale=1" />
<title>Tirukkural • Viewer</title>
<style>
:root{
  --bg:#0b0f14;
  --panel:#0f141b;
  --ink:#cfd8e3;
  --muted:#8a94a6;
  --accent:#6ee7ff;
  --accent-2:#22d3ee;
  --border:#1c2530;
  --danger:#ff5d5d;
  --mark-bg:rgba(255,235,59,.35);
}
*{box-sizing:border-box}
html,body{height:100%}
body{
  margin:0; background:var(--bg); color:var(--ink);
  font:16px/1.45 system-ui,-apple-system,Segoe UI,Roboto,Ubuntu,"Helvetica Neue",Arial;
}
.container{ max-width:900px; margin:24px auto; padding:0 16px }
.card{
  background:var(--panel); border:1px solid var(--border);
  border-radius:16px; padding:18px; box-shadow:0 10px 30px rgba(0,0,0,.25);
}
h1{ font-size:20px; margin:0 0 8px 0; letter-spacing:.3px }
.search{ position:relative; margin:8px 0 16px 0 }
.search input{
  width:100%; padding:12px 14px; border-radius:30px; border:1px solid var(--border);
  background:#0b1117; color:var(--ink); outline:none; font-size:16px;
}
.search input:focus{ border-color:var(--accent) }
.dropdown{
  display:none; position:absolute; top:calc(100% + 6px); left:0; right:0; max-height:400px; overflow-y:auto;
  background:var(--panel); border:1px solid var(--border); border-radius:12px; z-index:10;
}
.item{ padding:10px 14px; border-top:1px solid var(--border); cursor:pointer }
.item:first-child{ border-top:none }
.item:hover{ background:#0d131a }
.small{ color:var(--muted); font-size:13px; font-variant-numeric:tabular-nums }
.mark{ background:var(--mark-bg); border-radius:3px; padding:0 2px }
.err{ padding:10px 14px; color:#ffb0b0 }
.empty{ padding:14px; text-align:center; color:var(--muted) }
.nav{ display:flex; align-items:center; justify-content:space-between; gap:12px }
.btn{
  padding:10px 14px; border-radius:10px; border:1px solid var(--border);
  background:#0b1117; color:var(--ink); cursor:pointer;
}
.btn:hover:enabled{ border-color:var(--accent-2) }
.btn:disabled{ opacity:.4; cursor:default }
.jump{ display:flex; justify-content:center; align-items:center; gap:8px; margin-bottom:12px; color:var(--muted) }
.jump input{
  width:72px; padding:6px 8px; border-radius:8px; border:1px solid var(--border);
  background:#0b1117; color:var(--ink); text-align:center;
}
.number{ font-size:40px; font-weight:700; color:var(--accent); text-align:center }
.tamil{ font-size:24px; text-align:center; margin:12px 0 }
.translit{ font-style:italic; color:var(--muted); text-align:center; margin:12px 0 }
.english{ text-align:center; margin:12px 0 }
footer{ margin:26px 0 6px 0; color:var(--muted); font-size:12px; text-align:center }
kbd{ background:#111825; border:1px solid var(--border); padding:1px 6px; border-radius:6px; color:var(--ink) }
</style>
</head>
<body>
  <div class="container">
    <h1>Tirukkural</h1>
    <div class="search">
      <input id="q" type="text" placeholder="Search by Tamil or English..." autocomplete="off" />
      <div id="dd" class="dropdown"></div>
    </div>
    <div class="card">
      <div class="jump">
        Kural: <input id="jump" type="number" min="1" value="1" />
        <button id="go" class="btn">Go</button>
      </div>
      <div class="nav">
        <button id="prev" class="btn" aria-label="Previous kural">&#8249;</button>
        <div style="flex:1">
          <div id="num" class="number"></div>
          <div id="tamil" class="tamil"></div>
          <div id="translit" class="translit"></div>
          <div id="english" class="english"></div>
          <div id="pos" class="small" style="text-align:center"></div>
        </div>
        <button id="next" class="btn" aria-label="Next kural">&#8250;</button>
      </div>
    </div>
    <footer>Use <kbd>&larr;</kbd> / <kbd>&rarr;</kbd> to move between kurals • <kbd>Esc</kbd> clears the search</footer>
  </div>

<script>
const $ = (sel) => document.querySelector(sel);
const q = $("#q"), dd = $("#dd"), jump = $("#jump"), go = $("#go"), prev = $("#prev"), next = $("#next");
const DEBOUNCE_MS = __DEBOUNCE_MS__;
let current = 0, total = 0, t, seq = 0;

function esc(s){ return String(s).replace(/[&<>"']/g, c => ({"&":"&amp;","<":"&lt;",">":"&gt;",'"':"&quot;","'":"&#39;"}[c])); }
function lines(arr){ return arr.map(l => `<div>${esc(l)}</div>`).join(""); }
function segs(line){ return line.map(s => s.matched ? `<span class="mark">${esc(s.text)}</span>` : esc(s.text)).join(""); }

function render(v){
  current = v.index; total = v.total;
  $("#num").textContent = v.number;
  $("#tamil").innerHTML = lines(v.tamil);
  $("#translit").innerHTML = lines(v.transliteration);
  $("#english").innerHTML = lines(v.english);
  $("#pos").textContent = `${v.number} / ${v.total}`;
  prev.disabled = !v.has_previous;
  next.disabled = !v.has_next;
  jump.max = v.total;
  jump.value = v.number;
  validateJump();
}

async function navigate(action, target){
  let url = `/api/navigate?index=${current}&action=${action}`;
  if(target !== undefined) url += `&target=${target}`;
  const resp = await fetch(url);
  if(resp.ok) render(await resp.json());
}

function jumpTarget(){
  const n = parseInt(jump.value, 10);
  return (!isNaN(n) && n >= 1 && n <= total) ? n - 1 : null;
}
function validateJump(){ go.disabled = jumpTarget() === null; }

async function search(){
  const query = q.value;
  // only the latest request may paint the dropdown
  const mine = ++seq;
  if(!query.trim()){ dd.style.display = "none"; return; }
  dd.style.display = "block";
  try{
    const resp = await fetch(`/api/search?q=${encodeURIComponent(query)}`);
    const data = await resp.json();
    if(mine !== seq) return;
    if(!resp.ok) throw new Error(data.error || `HTTP ${resp.status}`);
    if(data.length === 0){ dd.innerHTML = `<div class="empty">No matches.</div>`; return; }
    dd.innerHTML = data.map(r => `
      <div class="item" data-id="${r.id}">
        <div class="small">Kural ${r.number}</div>
        <div>${r.tamil.map(segs).join("<br>")}</div>
        <div class="small">${r.english.map(segs).join(" ")}</div>
      </div>`).join("");
  }catch(e){
    if(mine !== seq) return;
    dd.innerHTML = `<div class="err">${esc(e.message ?? e)}</div>`;
  }
}

function debouncedSearch(){
  clearTimeout(t);
  t = setTimeout(search, DEBOUNCE_MS);
}

dd.addEventListener("click", (ev)=>{
  const item = ev.target.closest(".item");
  if(!item) return;
  navigate("select", parseInt(item.dataset.id, 10));
  q.value = ""; dd.style.display = "none";
  window.scrollTo({top:0, behavior:"smooth"});
});
q.addEventListener("input", debouncedSearch);
jump.addEventListener("input", validateJump);
jump.addEventListener("keydown", (ev)=>{ if(ev.key === "Enter" && !go.disabled) go.click(); });
go.addEventListener("click", ()=>{ const target = jumpTarget(); if(target !== null) navigate("goto", target); });
prev.addEventListener("click", ()=> navigate("previous"));
next.addEventListener("click", ()=> navigate("next"));
window.addEventListener("keydown", (ev)=>{
  if(ev.target === q || ev.target === jump){
    if(ev.key === "Escape"){ q.value = ""; dd.style.display = "none"; }
    return;
  }
  if(ev.key === "ArrowLeft" && !prev.disabled) prev.click();
  else if(ev.key === "ArrowRight" && !next.disabled) next.click();
});

fetch("/api/kural/0").then(r => r.json()).then(render);
</script>
</body>
</html>
"""
    return Response(html.replace("__DEBOUNCE_MS__", str(DEBOUNCE_MS)), mimetype="text/html")

def init_engine(source: str | None = None, *, verbose: bool = False) -> Engine:
    """Load the corpus once; on failure keep serving the error page."""
    global _engine, _load_error, _corpus_source
    _corpus_source = source or CORPUS_FILE
    _engine = Engine()
    _load_error = None
    try:
        _engine.load(_corpus_source, verbose=verbose)
    except CorpusLoadError as exc:
        log.error("Corpus load failed: %s", exc)
        _load_error = LOAD_ERROR_MESSAGE
    return _engine

def main(argv=None) -> int:
    ap = argparse.ArgumentParser(description="Run the Tirukkural viewer in the browser")
    ap.add_argument("--corpus", default=None, help="Path or http(s) URL of the corpus JSON")
    ap.add_argument("--host", default="127.0.0.1")
    ap.add_argument("--port", type=int, default=8000)
    ap.add_argument("--verbose", action="store_true")
    args = ap.parse_args(argv)

    eng = init_engine(args.corpus, verbose=args.verbose)
    log.info("Serving on http://%s:%d", args.host, args.port)
    try:
        app.run(host=args.host, port=args.port, debug=args.verbose)
    finally:
        eng.shutdown()
    return 0

if __name__ == "__main__":
    raise SystemExit(main())
