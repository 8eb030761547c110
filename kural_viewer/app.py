# app.py
# CustomTkinter desktop viewer for the Tirukkural corpus (dark theme).
# - Background corpus load (keeps UI responsive); full-screen error + Reload on failure.
# - One kural at a time with Previous/Next and a 1-based "Go to" entry.
# - Live search with debounce; up to 10 results, click to jump.

from __future__ import annotations
import logging
import threading
from typing import List, Optional

import customtkinter as ctk

from kural import Engine, CorpusLoadError, Navigator, SearchResult, parse_display_index, split_highlight, render_segments
from kural.config import DEBOUNCE_MS, LOAD_ERROR_MESSAGE, SEARCH_ERROR_MESSAGE

log = logging.getLogger(__name__)


# -------------------- small helpers --------------------

def shorten(text: str, max_chars: int = 70) -> str:
    """Shorten long result lines neatly for buttons."""
    if len(text) <= max_chars:
        return text
    return text[: max_chars - 3] + "..."


# -------------------- main app --------------------

class KuralViewerApp(ctk.CTk):
    """Dark-themed viewer that loads the corpus in the background and browses it."""

    def __init__(self, source: Optional[str] = None) -> None:
        super().__init__()

        # Theme
        ctk.set_appearance_mode("dark")
        ctk.set_default_color_theme("blue")

        # Window
        self.title("Tirukkural")
        self.geometry("900x680")
        self.minsize(760, 560)

        # State
        self._source = source
        self._engine = Engine()
        self._nav: Optional[Navigator] = None
        self._loading_thread: Optional[threading.Thread] = None
        self._search_after_id: Optional[str] = None
        self._result_buttons: List[ctk.CTkButton] = []

        # Fonts
        self.font_title = ctk.CTkFont(size=18, weight="bold")
        self.font_number = ctk.CTkFont(size=34, weight="bold")
        self.font_tamil = ctk.CTkFont(size=22)
        self.font_label = ctk.CTkFont(size=13)
        self.font_italic = ctk.CTkFont(size=14, slant="italic")

        # Layout grid
        self.grid_columnconfigure(0, weight=1)
        self.grid_rowconfigure(2, weight=1)  # kural card

        # Build UI
        self._build_header()
        self._build_search()
        self._build_card()
        self._build_log()
        self._build_error_overlay()

        self.protocol("WM_DELETE_WINDOW", self._on_close)
        self._start_loading()

    # --------- UI sections ---------

    def _build_header(self) -> None:
        header = ctk.CTkFrame(self, corner_radius=10)
        header.grid(row=0, column=0, sticky="ew", padx=12, pady=(12, 6))
        header.grid_columnconfigure(0, weight=1)

        ctk.CTkLabel(header, text="Tirukkural", font=self.font_title).grid(
            row=0, column=0, sticky="w", padx=12, pady=10
        )
        self.progress = ctk.CTkProgressBar(header, mode="indeterminate", determinate_speed=1.2)
        self.progress.grid(row=0, column=1, sticky="e", padx=(0, 6), pady=10)

        self.lbl_status = ctk.CTkLabel(header, text="Status: —", anchor="e")
        self.lbl_status.grid(row=0, column=2, sticky="e", padx=12, pady=10)

    def _build_search(self) -> None:
        box = ctk.CTkFrame(self, corner_radius=10)
        box.grid(row=1, column=0, sticky="ew", padx=12, pady=6)
        box.grid_columnconfigure(0, weight=1)

        self.entry_query = ctk.CTkEntry(box, placeholder_text="Search by Tamil or English...")
        self.entry_query.grid(row=0, column=0, sticky="ew", padx=12, pady=10)
        self.entry_query.bind("<KeyRelease>", self._on_query_changed)

        # dropdown-like result list; hidden until a query produces output
        self.results_frame = ctk.CTkFrame(box, corner_radius=8)
        self.results_frame.grid_columnconfigure(0, weight=1)
        self.lbl_search_msg = ctk.CTkLabel(self.results_frame, text="", anchor="w")

    def _build_card(self) -> None:
        card = ctk.CTkFrame(self, corner_radius=10)
        card.grid(row=2, column=0, sticky="nsew", padx=12, pady=6)
        card.grid_columnconfigure(1, weight=1)
        card.grid_rowconfigure(1, weight=1)

        # Direct entry
        jump = ctk.CTkFrame(card, fg_color="transparent")
        jump.grid(row=0, column=0, columnspan=3, pady=(10, 4))
        ctk.CTkLabel(jump, text="Kural:", font=self.font_label).grid(row=0, column=0, padx=(0, 6))
        self.entry_jump = ctk.CTkEntry(jump, width=70, justify="center")
        self.entry_jump.grid(row=0, column=1)
        self.entry_jump.bind("<KeyRelease>", self._on_jump_changed)
        self.entry_jump.bind("<Return>", lambda _ev: self._go_to_entry())
        self.btn_go = ctk.CTkButton(jump, text="Go", width=50, command=self._go_to_entry, state="disabled")
        self.btn_go.grid(row=0, column=2, padx=(6, 0))

        # Prev / body / Next
        self.btn_prev = ctk.CTkButton(card, text="‹", width=40, command=self._previous, state="disabled")
        self.btn_prev.grid(row=1, column=0, sticky="ns", padx=12, pady=12)

        body = ctk.CTkFrame(card, fg_color="transparent")
        body.grid(row=1, column=1, sticky="nsew")
        body.grid_columnconfigure(0, weight=1)
        self.lbl_number = ctk.CTkLabel(body, text="", font=self.font_number)
        self.lbl_number.grid(row=0, column=0, pady=(12, 6))
        self.lbl_tamil = ctk.CTkLabel(body, text="", font=self.font_tamil, justify="center", wraplength=640)
        self.lbl_tamil.grid(row=1, column=0, pady=6)
        self.lbl_translit = ctk.CTkLabel(body, text="", font=self.font_italic, justify="center", wraplength=640)
        self.lbl_translit.grid(row=2, column=0, pady=6)
        self.lbl_english = ctk.CTkLabel(body, text="", font=self.font_label, justify="center", wraplength=640)
        self.lbl_english.grid(row=3, column=0, pady=6)
        self.lbl_position = ctk.CTkLabel(body, text="", font=self.font_label)
        self.lbl_position.grid(row=4, column=0, pady=(6, 12))

        self.btn_next = ctk.CTkButton(card, text="›", width=40, command=self._next, state="disabled")
        self.btn_next.grid(row=1, column=2, sticky="ns", padx=12, pady=12)

        self.bind("<Left>", lambda ev: self._on_arrow(ev, -1))
        self.bind("<Right>", lambda ev: self._on_arrow(ev, 1))

    def _build_log(self) -> None:
        frame = ctk.CTkFrame(self, corner_radius=10)
        frame.grid(row=3, column=0, sticky="ew", padx=12, pady=(6, 12))
        frame.grid_columnconfigure(0, weight=1)

        ctk.CTkLabel(frame, text="Event log", font=self.font_label).grid(
            row=0, column=0, sticky="w", padx=12, pady=(10, 2)
        )
        self.txt_log = ctk.CTkTextbox(frame, height=80, wrap="word", font=ctk.CTkFont(size=12))
        self.txt_log.grid(row=1, column=0, sticky="ew", padx=12, pady=(0, 12))

    def _build_error_overlay(self) -> None:
        # covers the whole window; no partial functionality after a failed load
        self.error_overlay = ctk.CTkFrame(self, corner_radius=0)
        self.error_overlay.grid_columnconfigure(0, weight=1)
        self.error_overlay.grid_rowconfigure((0, 4), weight=1)
        ctk.CTkLabel(self.error_overlay, text="Error Loading Content", font=self.font_title,
                     text_color="#ff5d5d").grid(row=1, column=0, pady=6)
        self.lbl_error = ctk.CTkLabel(self.error_overlay, text="", wraplength=520)
        self.lbl_error.grid(row=2, column=0, pady=6)
        ctk.CTkButton(self.error_overlay, text="Reload", command=self._reload).grid(row=3, column=0, pady=12)

    # --------- loading pipeline (threaded) ---------

    def _start_loading(self) -> None:
        # prevent re-entrancy
        if self._loading_thread and self._loading_thread.is_alive():
            return
        self._set_status("Loading Tirukkural…")
        self.progress.start()
        self._loading_thread = threading.Thread(target=self._load_worker, daemon=True)
        self._loading_thread.start()

    def _load_worker(self) -> None:
        try:
            corpus = self._engine.load(self._source)
        except CorpusLoadError as exc:
            # bind now: the except target is cleared when the block exits
            self.after(0, lambda err=exc: self._on_load_error(err))
            return
        self.after(0, lambda: self._on_load_ok(len(corpus)))

    def _on_load_ok(self, n_kurals: int) -> None:
        self.progress.stop()
        self._nav = self._engine.navigator()
        self._set_status(f"Loaded {n_kurals:,} kurals.")
        self._log(f"Corpus ready ({n_kurals} kurals).")
        self._show_current()
        self.entry_query.focus_set()

    def _on_load_error(self, exc: Exception) -> None:
        self.progress.stop()
        self._set_status("Error while loading corpus.")
        log.error("Corpus load failed: %s", exc)
        self.lbl_error.configure(text=LOAD_ERROR_MESSAGE)
        self.error_overlay.place(relx=0, rely=0, relwidth=1, relheight=1)
        self.error_overlay.lift()

    def _reload(self) -> None:
        # the corpus is write-once per session, so a reload starts a fresh engine
        self.error_overlay.place_forget()
        self._engine = Engine()
        self._nav = None
        self._start_loading()

    # --------- navigation ---------

    def _next(self) -> None:
        if self._nav and self._nav.next():
            self._show_current()

    def _previous(self) -> None:
        if self._nav and self._nav.previous():
            self._show_current()

    def _go_to_entry(self) -> None:
        if not self._nav:
            return
        target = parse_display_index(self.entry_jump.get(), self._nav.total)
        if target is None:
            return
        if self._nav.go_to(target):
            self._show_current()

    def _select_result(self, kural_id: int) -> None:
        if self._nav and self._nav.select_from_search(kural_id):
            self._log(f"Jumped to kural {kural_id + 1} from search.")
            self.entry_query.delete(0, "end")
            self._hide_results()
            self._show_current()

    def _on_arrow(self, ev, step: int) -> None:
        # arrows typed into an entry move its cursor, not the kural
        if self._in_entry(ev.widget):
            return
        if step < 0:
            self._previous()
        else:
            self._next()

    def _in_entry(self, widget) -> bool:
        path = str(widget)
        return any(path == str(e) or path.startswith(str(e) + ".") for e in (self.entry_query, self.entry_jump))

    def _on_jump_changed(self, _ev=None) -> None:
        ok = self._nav is not None and parse_display_index(self.entry_jump.get(), self._nav.total) is not None
        self.btn_go.configure(state="normal" if ok else "disabled")

    def _show_current(self) -> None:
        nav = self._nav
        if nav is None:
            return
        k = self._engine.kural(nav.index)
        self.lbl_number.configure(text=str(k.number))
        self.lbl_tamil.configure(text="\n".join(k.tamil))
        self.lbl_translit.configure(text="\n".join(k.transliteration))
        self.lbl_english.configure(text="\n".join(k.english))
        self.lbl_position.configure(text=f"{k.number} / {nav.total}")
        self.btn_prev.configure(state="normal" if nav.has_previous else "disabled")
        self.btn_next.configure(state="normal" if nav.has_next else "disabled")
        self.entry_jump.delete(0, "end")
        self.entry_jump.insert(0, str(k.number))
        self._on_jump_changed()

    # --------- search ---------

    def _on_query_changed(self, _ev=None) -> None:
        # debounce for smoother typing
        if self._search_after_id is not None:
            self.after_cancel(self._search_after_id)
        self._search_after_id = self.after(DEBOUNCE_MS, self._do_search)

    def _do_search(self) -> None:
        self._search_after_id = None
        q = self.entry_query.get()
        if not q.strip() or not self._engine.loaded:
            self._hide_results()
            return

        try:
            results = self._engine.search(q)
        except Exception:
            log.exception("Search failed for %r", q)
            self._log("ERROR in search; navigation unchanged.")
            self._show_results([], message=SEARCH_ERROR_MESSAGE)
            return

        self._show_results(results, message="No matches." if not results else "")

    def _show_results(self, results: List[SearchResult], message: str = "") -> None:
        for btn in self._result_buttons:
            btn.destroy()
        self._result_buttons = []
        self.lbl_search_msg.grid_forget()

        if message:
            self.lbl_search_msg.configure(text=message)
            self.lbl_search_msg.grid(row=0, column=0, sticky="ew", padx=10, pady=6)
        for row, r in enumerate(results, start=1):
            btn = ctk.CTkButton(
                self.results_frame,
                text=f"{r.id + 1:>4}  {shorten(self._marked(r))}",
                anchor="w",
                fg_color="transparent",
                command=lambda kid=r.id: self._select_result(kid),
            )
            btn.grid(row=row, column=0, sticky="ew", padx=6, pady=1)
            self._result_buttons.append(btn)
        self.results_frame.grid(row=1, column=0, sticky="ew", padx=12, pady=(0, 10))

    @staticmethod
    def _marked(r: SearchResult) -> str:
        # plain labels cannot style substrings; bracket the matched parts instead
        lines = [ln for ln in r.tamil + r.english if r.highlight in ln.lower()] or list(r.tamil)
        return render_segments(split_highlight(lines[0], r.highlight))

    def _hide_results(self) -> None:
        self.results_frame.grid_forget()

    # --------- misc UI helpers ---------

    def _set_status(self, text: str) -> None:
        self.lbl_status.configure(text=f"Status: {text}")

    def _log(self, msg: str) -> None:
        self.txt_log.insert("end", msg + "\n")
        self.txt_log.see("end")

    # --------- lifecycle ---------

    def _on_close(self) -> None:
        self._engine.shutdown()
        self.destroy()


if __name__ == "__main__":
    import argparse
    ap = argparse.ArgumentParser(description="Tirukkural desktop viewer")
    ap.add_argument("--corpus", default=None, help="Path or http(s) URL of the corpus JSON")
    ap.add_argument("--verbose", action="store_true")
    args = ap.parse_args()
    if args.verbose:
        logging.basicConfig(level=logging.INFO)
    app = KuralViewerApp(source=args.corpus)
    app.mainloop()
