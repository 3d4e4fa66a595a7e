"""Filter state and the filter applied to the working set.

The three criteria compose conjunctively: a patent is kept only when it
passes the text search AND the code selection AND the year selection.  An
empty criterion places no constraint.  Filtering always starts from the
full working set, never from a previous result.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field

from patents.enrich import EnrichedPatent
from utils.strings import casefold_or_empty


@dataclass(frozen=True)
class FilterSnapshot:
    """Immutable view of a FilterState, consumed by apply_filters()."""

    search_term: str = ""
    selected_codes: frozenset[str] = frozenset()
    selected_years: frozenset[int] = frozenset()

    @property
    def is_empty(self) -> bool:
        return not (self.search_term or self.selected_codes or self.selected_years)


@dataclass
class FilterState:
    """Current filter criteria, changed only by explicit user actions."""

    search_term: str = ""
    selected_codes: set[str] = field(default_factory=set)
    selected_years: set[int] = field(default_factory=set)

    @classmethod
    def from_params(
        cls,
        q: str | None = None,
        codes: Iterable[str] | None = None,
        years: Iterable[int] | None = None,
    ) -> "FilterState":
        """Build a state from request-style parameters."""
        state = cls()
        state.set_search_term(q or "")
        state.selected_codes.update(c for c in (codes or ()) if c)
        state.selected_years.update(years or ())
        return state

    def set_search_term(self, text: str) -> None:
        self.search_term = casefold_or_empty(text)

    def select_code(self, code: str) -> None:
        self.selected_codes.add(code)

    def deselect_code(self, code: str) -> None:
        self.selected_codes.discard(code)

    def clear_codes(self) -> None:
        self.selected_codes.clear()

    def select_year(self, year: int) -> None:
        self.selected_years.add(year)

    def deselect_year(self, year: int) -> None:
        self.selected_years.discard(year)

    def clear_years(self) -> None:
        self.selected_years.clear()

    def reset(self) -> None:
        """Clear every criterion (the start-up state)."""
        self.search_term = ""
        self.clear_codes()
        self.clear_years()

    def snapshot(self) -> FilterSnapshot:
        return FilterSnapshot(
            search_term=self.search_term,
            selected_codes=frozenset(self.selected_codes),
            selected_years=frozenset(self.selected_years),
        )


def matches_search(patent: EnrichedPatent, term: str) -> bool:
    """True when the case-folded title or raw authors field contains *term*."""
    if not term:
        return True
    return term in patent.title.casefold() or term in patent.authors_raw.casefold()


def apply_filters(
    patents: Sequence[EnrichedPatent],
    state: FilterState | FilterSnapshot,
) -> list[EnrichedPatent]:
    """Return the patents passing every active criterion, in original order.

    Args:
        patents: The working set (not modified).
        state: Criteria to apply; a live FilterState is snapshotted first.

    Returns:
        A new list; empty when nothing matches.
    """
    snap = state.snapshot() if isinstance(state, FilterState) else state
    result = [p for p in patents if matches_search(p, snap.search_term)]
    if snap.selected_codes:
        result = [p for p in result if p.ipc_code in snap.selected_codes]
    if snap.selected_years:
        result = [p for p in result if p.year in snap.selected_years]
    return result
