from __future__ import annotations
import json
import logging
from typing import Any, List, Optional

import requests

from .models import Kural, Corpus
from .config import CORPUS_FILE, EXPECTED_KURALS, FETCH_TIMEOUT

log = logging.getLogger(__name__)


class CorpusLoadError(RuntimeError):
    """Raised when the corpus asset cannot be fetched, parsed or validated."""


def _is_url(source: str) -> bool:
    return source.startswith(("http://", "https://"))

def _fetch(url: str) -> Any:
    try:
        resp = requests.get(url, timeout=FETCH_TIMEOUT)
    except requests.RequestException as exc:
        raise CorpusLoadError(f"could not fetch {url}: {exc}") from exc
    if not resp.ok:
        raise CorpusLoadError(f"could not fetch {url}: HTTP {resp.status_code}")
    try:
        return resp.json()
    except ValueError as exc:
        raise CorpusLoadError(f"{url} did not return JSON: {exc}") from exc

def _read(path: str) -> Any:
    try:
        with open(path, "r", encoding="utf-8") as f:
            return json.load(f)
    except OSError as exc:
        raise CorpusLoadError(f"could not read {path}: {exc}") from exc
    except ValueError as exc:
        raise CorpusLoadError(f"{path} is not valid JSON: {exc}") from exc

def _lines(rec: dict, key: str, pos: int, *, required: bool = True) -> tuple[str, ...]:
    value = rec.get(key)
    if value is None and not required:
        return ()
    if not isinstance(value, list) or not all(isinstance(x, str) for x in value):
        raise CorpusLoadError(f"record {pos}: {key} must be a list of strings")
    return tuple(value)

def parse_corpus(payload: Any) -> Corpus:
    """
    Validate a decoded JSON payload and build a read-only Corpus.
    Rules:
      * payload must be a non-empty array of objects
      * KuralID must be an int equal to the record's position
      * VerseTamil / VerseEnglish are required string arrays, VerseTranslit is optional
    """
    if not isinstance(payload, list):
        raise CorpusLoadError("invalid data format: expected a JSON array")
    if not payload:
        raise CorpusLoadError("invalid data format: corpus is empty")

    kurals: List[Kural] = []
    for pos, rec in enumerate(payload):
        if not isinstance(rec, dict):
            raise CorpusLoadError(f"record {pos}: expected an object")
        kid = rec.get("KuralID")
        # bool is an int subclass; reject it explicitly
        if not isinstance(kid, int) or isinstance(kid, bool):
            raise CorpusLoadError(f"record {pos}: KuralID must be an integer")
        if kid != pos:
            raise CorpusLoadError(f"record {pos}: KuralID {kid} does not match its position")
        kurals.append(Kural(
            id=kid,
            tamil=_lines(rec, "VerseTamil", pos),
            english=_lines(rec, "VerseEnglish", pos),
            transliteration=_lines(rec, "VerseTranslit", pos, required=False),
        ))

    if len(kurals) != EXPECTED_KURALS:
        log.info("Corpus has %d kurals (full Tirukkural has %d)", len(kurals), EXPECTED_KURALS)
    return Corpus(kurals=tuple(kurals))

def load_corpus(source: Optional[str] = None) -> Corpus:
    """Load the corpus from a file path or an http(s) URL (default: bundled asset)."""
    source = source or CORPUS_FILE
    log.info("Loading corpus from %s", source)
    payload = _fetch(source) if _is_url(source) else _read(source)
    corpus = parse_corpus(payload)
    log.info("Corpus ready: kurals=%d", len(corpus))
    return corpus
