"""Term-keyed helpers on top of the proximity window enumerator.

Search code usually holds positions keyed by term rather than by keyword
index. These helpers run the enumerator in mapping order and translate the
windows back to terms.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence

from near_proximity.proximity import near_proximity


def term_windows(term_positions: Mapping[str, Sequence[int]]) -> list[dict[str, int]]:
    """Return every proximity window as a ``{term: position}`` mapping.

    Windows keep the enumerator order: smallest span first.
    """
    terms = list(term_positions)
    windows = near_proximity([term_positions[term] for term in terms])
    return [dict(zip(terms, window.positions)) for window in windows]


def get_min_span(term_positions: Mapping[str, Sequence[int]]) -> float:
    """Calculate minimum span containing at least one of each term.

    The span is the number of positions from first to last term inclusive.
    For adjacent terms, span equals the number of terms.

    Args:
        term_positions: Dictionary mapping terms to their positions.

    Returns:
        Minimum span, or infinity if not all terms are present.
    """
    if not term_positions:
        return float("inf")

    if any(len(positions) == 0 for positions in term_positions.values()):
        return float("inf")

    if len(term_positions) == 1:
        return 1.0

    windows = near_proximity(list(term_positions.values()))
    if not windows:
        return float("inf")
    return float(windows[0].size + 1)
