# kural/engine.py
from __future__ import annotations

import logging
from typing import List, Optional

from . import config as CFG
from .models import Corpus, Kural, SearchResult
from .loader import load_corpus
from .search import search_kurals
from .navigation import Navigator

log = logging.getLogger(__name__)


class Engine:
    """
    Thin orchestration layer that glues together:
      - the read-only corpus (loader.load_corpus),
      - substring search (search.search_kurals),
      - per-view navigation state (navigation.Navigator).

    Public API (used by the desktop app, Flask UI and CLI):
      * load(source):        fetch + validate the corpus, exactly once
      * search(query, limit): first matches in corpus order
      * kural(index):        one couplet by 0-based position
      * navigator(index):    fresh Navigator bound to the corpus size
      * shutdown():          drop the corpus
    """

    def __init__(self) -> None:
        self._corpus: Optional[Corpus] = None

    # ------------- lifecycle -------------

    def load(self, source: Optional[str] = None, *, verbose: bool = False) -> Corpus:
        if verbose:
            logging.basicConfig(level=logging.INFO)
        # write-once: a loaded corpus is never replaced in the same session
        if self._corpus is not None:
            raise RuntimeError("Corpus already loaded; start a new session to reload.")
        self._corpus = load_corpus(source)
        log.info("Engine load() complete: kurals=%d", len(self._corpus))
        return self._corpus

    @property
    def loaded(self) -> bool:
        return self._corpus is not None

    @property
    def corpus(self) -> Corpus:
        if self._corpus is None:
            raise RuntimeError("Engine not initialized. Call load() first.")
        return self._corpus

    # ------------- query -------------

    def search(self, query: str, *, limit: int = CFG.MAX_RESULTS) -> List[SearchResult]:
        return search_kurals(query, self.corpus, limit=limit)

    def kural(self, index: int) -> Kural:
        corpus = self.corpus
        if not 0 <= index < len(corpus):
            raise IndexError(f"kural index {index} outside [0, {len(corpus) - 1}]")
        return corpus[index]

    def navigator(self, index: int = 0) -> Navigator:
        return Navigator(len(self.corpus), index)

    # ------------- teardown -------------

    def shutdown(self) -> None:
        self._corpus = None
        log.info("Engine shutdown complete")
