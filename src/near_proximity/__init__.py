"""Term-proximity window enumeration for text-search ranking."""

from near_proximity.phrase import get_min_span, term_windows
from near_proximity.proximity import Window, near_proximity


__all__ = [
    "Window",
    "get_min_span",
    "near_proximity",
    "term_windows",
]
