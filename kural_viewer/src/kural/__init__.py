"""Public API for the Tirukkural viewer core."""
from __future__ import annotations
from .models import Kural, Corpus, SearchResult, Segment
from .loader import CorpusLoadError, load_corpus, parse_corpus
from .search import search_kurals
from .highlight import split_highlight, render_segments
from .navigation import Navigator, parse_display_index
from .engine import Engine

__all__ = [
    "Kural", "Corpus", "SearchResult", "Segment",
    "CorpusLoadError", "load_corpus", "parse_corpus",
    "search_kurals", "split_highlight", "render_segments",
    "Navigator", "parse_display_index", "Engine",
]
