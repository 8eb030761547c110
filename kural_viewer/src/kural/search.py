from __future__ import annotations
from typing import Iterable, List
from .models import Corpus, Kural, SearchResult
from .config import MAX_RESULTS

def _any_line_contains(lines: Iterable[str], term: str) -> bool:
    return any(term in line.lower() for line in lines)

def matches(kural: Kural, term: str) -> bool:
    """True if any Tamil or English line contains the (already lowercased) term."""
    return _any_line_contains(kural.tamil, term) or _any_line_contains(kural.english, term)

def search_kurals(query: str, corpus: Corpus, limit: int = MAX_RESULTS) -> List[SearchResult]:
    """
    Case-insensitive substring search over Tamil and English lines.
    Results keep corpus order and stop at the first `limit` matches; no ranking.
    """
    if not query.strip():
        return []

    term = query.lower()
    out: List[SearchResult] = []
    for index, kural in enumerate(corpus):
        if len(out) >= limit:
            break
        if matches(kural, term):
            out.append(SearchResult(
                id=kural.id,
                index=index,
                tamil=kural.tamil,
                english=kural.english,
                highlight=term,
            ))
    return out
