from __future__ import annotations
import re
from typing import List, Sequence
from .models import Segment

def split_highlight(text: str, highlight: str) -> List[Segment]:
    """
    Split `text` around case-insensitive occurrences of `highlight`.

    Joining the returned segments gives back `text` unchanged; a segment is
    marked as matched when it is one of the captured occurrences, so the
    marking agrees with the case-insensitive match even for characters whose
    lowercase forms differ (e.g. "\u017f" against "s").
    The highlight is escaped, so regex metacharacters are matched literally.
    """
    if not highlight or not text:
        return [Segment(text, False)]

    # the capture group puts occurrences at the odd positions
    parts = re.split(f"({re.escape(highlight)})", text, flags=re.IGNORECASE)
    return [Segment(p, i % 2 == 1) for i, p in enumerate(parts) if p]

def render_segments(segments: Sequence[Segment], mark: str = "[{}]") -> str:
    """Flatten segments to plain text, wrapping matched ones with `mark`."""
    return "".join(mark.format(s.text) if s.matched else s.text for s in segments)
