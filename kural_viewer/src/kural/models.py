from __future__ import annotations
from dataclasses import dataclass
from typing import Iterator, Tuple

@dataclass(frozen=True)
class Kural:
    id: int                          # 0-based, equals position in the corpus
    tamil: Tuple[str, ...]
    english: Tuple[str, ...]
    transliteration: Tuple[str, ...] = ()

    @property
    def number(self) -> int:
        """1-based number shown to readers."""
        return self.id + 1

@dataclass(frozen=True)
class Corpus:
    kurals: Tuple[Kural, ...]

    def __len__(self) -> int:
        return len(self.kurals)

    def __getitem__(self, index: int) -> Kural:
        return self.kurals[index]

    def __iter__(self) -> Iterator[Kural]:
        return iter(self.kurals)

@dataclass(frozen=True)
class SearchResult:
    id: int
    index: int                # corpus position of the match
    tamil: Tuple[str, ...]
    english: Tuple[str, ...]
    highlight: str            # lowercased query

@dataclass(frozen=True)
class Segment:
    text: str
    matched: bool
