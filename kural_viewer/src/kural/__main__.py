from __future__ import annotations
import argparse, json, logging, sys
from kural import Engine, CorpusLoadError, Navigator, parse_display_index, split_highlight, render_segments
from kural.config import MAX_RESULTS, SEARCH_ERROR_MESSAGE

log = logging.getLogger("kural.cli")

def _print_kural(eng: Engine, index: int) -> None:
    k = eng.kural(index)
    print(f"Kural {k.number} / {len(eng.corpus)}")
    for line in k.tamil:
        print(f"  {line}")
    for line in k.transliteration:
        print(f"  {line}")
    for line in k.english:
        print(f"  {line}")

def _run_query(eng: Engine, q: str, k: int, as_json: bool) -> None:
    try:
        rows = eng.search(q, limit=k)
    except Exception:
        log.exception("Search failed for %r", q)
        print(SEARCH_ERROR_MESSAGE, file=sys.stderr)
        return
    if as_json:
        print(json.dumps([r.__dict__ for r in rows], ensure_ascii=False, indent=2))
        return
    if not rows:
        print("(no matches)"); return
    for r in rows:
        first = render_segments(split_highlight(r.tamil[0] if r.tamil else "", r.highlight))
        print(f"{r.id + 1:<5} {first}")
        for line in r.english:
            print(f"      {render_segments(split_highlight(line, r.highlight))}")

def _repl(eng: Engine, nav: Navigator, k: int) -> None:
    print("Commands: n (next), p (previous), <number> (go to), /text (search), empty line to exit.")
    _print_kural(eng, nav.index)
    while True:
        try:
            cmd = input("> ").strip()
        except (EOFError, KeyboardInterrupt):
            break
        if not cmd:
            break
        if cmd == "n":
            if not nav.next():
                print("(already at the last kural)")
        elif cmd == "p":
            if not nav.previous():
                print("(already at the first kural)")
        elif cmd.startswith("/"):
            _run_query(eng, cmd[1:], k, as_json=False)
            continue
        else:
            target = parse_display_index(cmd, nav.total)
            if target is None:
                print(f"(enter a number between 1 and {nav.total})")
                continue
            nav.go_to(target)
        _print_kural(eng, nav.index)

def main(argv: list[str] | None = None) -> int:
    p = argparse.ArgumentParser(description="Tirukkural viewer CLI")
    p.add_argument("--corpus", default=None, help="Path or http(s) URL of the corpus JSON (default: bundled asset)")
    p.add_argument("--show", default=None, help="Print one kural by its 1-based number")
    p.add_argument("--q", default=None, help="Single search to run once")
    p.add_argument("-k", type=int, default=MAX_RESULTS, help="Maximum search results")
    p.add_argument("--repl", action="store_true", help="Interactive browsing loop after load")
    p.add_argument("--json", action="store_true", help="Emit search results as JSON")
    p.add_argument("--verbose", action="store_true")

    args = p.parse_args(argv)

    eng = Engine()
    try:
        try:
            eng.load(args.corpus, verbose=args.verbose)
        except CorpusLoadError as exc:
            print(f"error: {exc}", file=sys.stderr)
            return 1

        nav = eng.navigator()
        if args.show is not None:
            target = parse_display_index(args.show, nav.total)
            if target is None:
                print(f"error: kural number must be between 1 and {nav.total}", file=sys.stderr)
                return 2
            nav.go_to(target)
            _print_kural(eng, nav.index)

        if args.q:
            _run_query(eng, args.q, args.k, args.json)

        if args.repl:
            _repl(eng, nav, args.k)

        return 0
    finally:
        eng.shutdown()

if __name__ == "__main__":
    raise SystemExit(main())
