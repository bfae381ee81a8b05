"""Term-proximity windows over sorted keyword position streams.

Given one ascending position stream per query keyword, the enumerator walks
all streams in lockstep and emits every window (one position per keyword)
that cannot be shrunk on its left edge without losing a keyword. Ranking code
uses the smallest windows to reward documents where the query terms occur
close together.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Sequence
import logging
from typing import NamedTuple


logger = logging.getLogger(__name__)


class Window(NamedTuple):
    """One position per keyword, in keyword order, plus the window span."""

    size: int
    positions: tuple[int, ...]


def _position(entry: tuple[int, int]) -> tuple[int, int]:
    # Frontier entries are (keyword, position); ties resolve by keyword.
    return entry[1], entry[0]


def near_proximity(
    keywords: Sequence[Iterable[int]],
    output: list[Window] | None = None,
) -> list[Window]:
    """Enumerate the locally minimal windows of the given position streams.

    Every keyword's positions must be sorted in non-decreasing order. This is
    not checked: unsorted input gives unspecified windows. Streams are consumed;
    do not read from a partially drained iterator afterwards.

    Enumeration stops entirely the first time the keyword holding the leftmost
    position has no more positions, even when other streams are not drained.

    Args:
        keywords: One iterable of positions per keyword.
        output: Optional list to fill. It is cleared first and returned.

    Returns:
        Windows sorted by size, then by positions in keyword order. With a
        single keyword every position is its own window of size 0, in stream
        order.
    """
    if output is None:
        output = []
    else:
        output.clear()

    streams: list[Iterator[int]] = [iter(positions) for positions in keywords]

    if len(streams) < 2:
        if streams:
            output.extend(Window(0, (p,)) for p in streams[0])
        return output

    # Pop the head of each stream; an empty keyword means no complete window.
    frontier: list[tuple[int, int]] = []
    for keyword, stream in enumerate(streams):
        head = next(stream, None)
        if head is None:
            return output
        frontier.append((keyword, head))

    frontier.sort(key=_position)

    while True:
        leftmost_keyword, leftmost = frontier[0]
        rightmost = frontier[-1][1]

        p = next(streams[leftmost_keyword], None)

        # If p > r the interval [l, r] is minimal.
        if p is None or p > rightmost:
            path = tuple(position for _, position in sorted(frontier))
            output.append(Window(rightmost - leftmost, path))

        if p is None:
            break

        # The leftmost entry is always frontier[0]; the second smallest (q)
        # moves into its place when p lands past the right edge.
        frontier[0] = (leftmost_keyword, p)
        frontier.sort(key=_position)

    output.sort()

    if logger.isEnabledFor(logging.DEBUG):
        logger.debug(
            "Enumerated %d proximity windows over %d keywords",
            len(output),
            len(streams),
        )

    return output
