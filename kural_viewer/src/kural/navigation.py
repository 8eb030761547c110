from __future__ import annotations
import logging
from typing import Optional

log = logging.getLogger(__name__)


class Navigator:
    """
    Current-couplet index for one view, bounded to [0, total-1].

    next/previous are no-ops at the edges; go_to rejects out-of-range targets
    (returns False, index unchanged) instead of clamping.
    """

    def __init__(self, total: int, index: int = 0) -> None:
        if total < 1:
            raise ValueError("Navigator needs a non-empty corpus")
        if not 0 <= index < total:
            raise ValueError(f"index {index} outside [0, {total - 1}]")
        self.total = total
        self.index = index

    @property
    def has_next(self) -> bool:
        return self.index + 1 < self.total

    @property
    def has_previous(self) -> bool:
        return self.index - 1 >= 0

    def next(self) -> bool:
        if not self.has_next:
            return False
        self.index += 1
        return True

    def previous(self) -> bool:
        if not self.has_previous:
            return False
        self.index -= 1
        return True

    def go_to(self, target: int) -> bool:
        if not 0 <= target < self.total:
            log.info("Rejected navigation to %s (valid: 0..%d)", target, self.total - 1)
            return False
        self.index = target
        return True

    def select_from_search(self, kural_id: int) -> bool:
        # ids are dense and equal to corpus position
        return self.go_to(kural_id)

    def __repr__(self) -> str:
        return f"Navigator(index={self.index}, total={self.total})"


def parse_display_index(text: str, total: int) -> Optional[int]:
    """Parse a 1-based direct-entry value; return the 0-based index or None if unusable."""
    try:
        num = int(str(text).strip(), 10)
    except ValueError:
        return None
    if not 1 <= num <= total:
        return None
    return num - 1
