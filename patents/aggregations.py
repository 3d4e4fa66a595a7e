"""Chart-ready reductions over the filtered patent sequence.

Each function is stateless and recomputed in full on every filter change.
Output is a list of (label, count) rows; label decoration such as appending
the code description belongs to the presentation layer.

Ordering:
    count_by_year      year ascending
    top_authors        count descending, ties in first-seen order
    top_directions     count descending, ties in first-seen order
    count_by_ipc_code  code ascending (stable legend for the pie chart)
"""

from __future__ import annotations

from collections import Counter
from collections.abc import Iterable, Sequence
from typing import NamedTuple

from patents.columns import DIRECTION_UNSPECIFIED
from patents.enrich import EnrichedPatent

DEFAULT_TOP_N = 10


class CountRow(NamedTuple):
    """One labelled count in an aggregation view."""

    label: str | int
    count: int


def top_n(counts: Counter, limit: int = DEFAULT_TOP_N) -> list[CountRow]:
    """Return the *limit* largest counts, ties kept in insertion order.

    Counter preserves first-insertion order and sorted() is stable, so
    sorting on the count alone never reorders equal counts.
    """
    ranked = sorted(counts.items(), key=lambda item: item[1], reverse=True)
    return [CountRow(label, count) for label, count in ranked[:limit]]


def count_by_year(patents: Iterable[EnrichedPatent]) -> list[CountRow]:
    counts = Counter(p.year for p in patents)
    return [CountRow(year, counts[year]) for year in sorted(counts)]


def top_authors(patents: Iterable[EnrichedPatent], limit: int = DEFAULT_TOP_N) -> list[CountRow]:
    """Count patents per author; a patent counts once for each of its authors.

    Empty author entries (from trailing or doubled commas) are not counted.
    """
    counts: Counter = Counter()
    for p in patents:
        for author in p.authors:
            if author:
                counts[author] += 1
    return top_n(counts, limit)


def direction_label(patent: EnrichedPatent) -> str:
    return patent.direction.strip() or DIRECTION_UNSPECIFIED


def top_directions(patents: Iterable[EnrichedPatent], limit: int = DEFAULT_TOP_N) -> list[CountRow]:
    counts = Counter(direction_label(p) for p in patents)
    return top_n(counts, limit)


def count_by_ipc_code(patents: Iterable[EnrichedPatent]) -> list[CountRow]:
    counts = Counter(p.ipc_code for p in patents)
    return [CountRow(code, counts[code]) for code in sorted(counts)]


def aggregate_all(patents: Sequence[EnrichedPatent], limit: int = DEFAULT_TOP_N) -> dict[str, list[CountRow]]:
    """Run all four views over one filtered sequence."""
    return {
        "by_year": count_by_year(patents),
        "by_author": top_authors(patents, limit),
        "by_direction": top_directions(patents, limit),
        "by_ipc_code": count_by_ipc_code(patents),
    }
