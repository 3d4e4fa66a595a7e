"""Dashboard controller: owns the loaded data and the current filter state.

Load order is strict.  The code dictionary is fetched first and its outcome
(success or an empty fallback) is settled before any patent record is
enriched, because descriptions are resolved at enrichment time.

Usage::

    controller = DashboardController(fetch=SourceFetcher().fetch)
    controller.load("patents.csv", "mpk_codes.csv")
    view = controller.select_code("A61K")
    view.by_year  # [CountRow(label=2021, count=3), ...]
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from dataclasses import dataclass, field

from patents.aggregations import DEFAULT_TOP_N, CountRow, aggregate_all
from patents.codes import EMPTY_DICTIONARY, CodeDictionary, load_code_dictionary
from patents.columns import DEFAULT_COLUMNS, IPC_NOT_SPECIFIED, Columns
from patents.csv_parser import parse_csv
from patents.enrich import EnrichedPatent, build_working_set, describe_code
from patents.filters import FilterSnapshot, FilterState, apply_filters
from utils.http import SourceUnavailable

logger = logging.getLogger(__name__)

LOAD_ERROR_MESSAGE = "Ошибка загрузки patents.csv. Проверьте файл."


@dataclass(frozen=True)
class CodeOption:
    code: str
    description: str


@dataclass(frozen=True)
class DashboardView:
    """Everything the presentation layer needs for one render."""

    by_year: list[CountRow] = field(default_factory=list)
    by_author: list[CountRow] = field(default_factory=list)
    by_direction: list[CountRow] = field(default_factory=list)
    by_ipc_code: list[CountRow] = field(default_factory=list)
    patents: list[EnrichedPatent] = field(default_factory=list)
    total: int = 0
    error: str | None = None

    @property
    def failed(self) -> bool:
        return self.error is not None

    @property
    def no_results(self) -> bool:
        """True when data loaded but nothing matches the current filters."""
        return not self.failed and not self.patents


class DashboardController:
    """Single owner of the working set, dictionary and session filter state."""

    def __init__(
        self,
        fetch: Callable[[str], str],
        columns: Columns = DEFAULT_COLUMNS,
        top_n: int = DEFAULT_TOP_N,
    ) -> None:
        self._fetch = fetch
        self.columns = columns
        self.top_n = top_n
        self.codes: CodeDictionary = EMPTY_DICTIONARY
        self.patents: tuple[EnrichedPatent, ...] = ()
        self.state = FilterState()
        self.loaded = False
        self.load_error: str | None = None

    # ── Loading ───────────────────────────────────────────────────────────

    def load(self, patents_source: str, codes_source: str) -> None:
        """Load the dictionary, then the patent records.

        A missing dictionary is tolerated.  A failure to read the patent file
        is recorded in ``load_error`` and leaves the working set empty; every
        later view reports the error instead of showing stale or empty data.
        """
        start = time.monotonic()
        self.codes = load_code_dictionary(codes_source, self._fetch)
        self.state.reset()
        try:
            text = self._fetch(patents_source)
        except SourceUnavailable as exc:
            logger.error("patent records not loaded: %s", exc)
            self.patents = ()
            self.load_error = LOAD_ERROR_MESSAGE
            self.loaded = False
            return

        self.patents = build_working_set(parse_csv(text), self.codes, self.columns)
        self.load_error = None
        self.loaded = True
        logger.info(
            "loaded %d patents in %.1f ms",
            len(self.patents), (time.monotonic() - start) * 1000,
        )

    # ── Recompute ─────────────────────────────────────────────────────────

    def recompute(self, state: FilterState | FilterSnapshot | None = None) -> DashboardView:
        """Filter the full working set and rebuild every aggregation.

        Args:
            state: Criteria to use; defaults to the controller's own state.
        """
        if self.load_error is not None:
            return DashboardView(error=self.load_error)
        filtered = apply_filters(self.patents, state if state is not None else self.state)
        return DashboardView(
            **aggregate_all(filtered, self.top_n),
            patents=filtered,
            total=len(self.patents),
        )

    # ── User actions ──────────────────────────────────────────────────────

    def set_search_term(self, text: str) -> DashboardView:
        self.state.set_search_term(text)
        return self.recompute()

    def select_code(self, code: str) -> DashboardView:
        self.state.select_code(code)
        return self.recompute()

    def deselect_code(self, code: str) -> DashboardView:
        self.state.deselect_code(code)
        return self.recompute()

    def clear_codes(self) -> DashboardView:
        self.state.clear_codes()
        return self.recompute()

    def select_year(self, year: int) -> DashboardView:
        self.state.select_year(year)
        return self.recompute()

    def deselect_year(self, year: int) -> DashboardView:
        self.state.deselect_year(year)
        return self.recompute()

    def clear_years(self) -> DashboardView:
        self.state.clear_years()
        return self.recompute()

    def reset_filters(self) -> DashboardView:
        self.state.reset()
        return self.recompute()

    # ── Filter options ────────────────────────────────────────────────────

    def code_options(self) -> list[CodeOption]:
        """Distinct codes present in the working set, sorted, without the sentinel."""
        codes = sorted({p.ipc_code for p in self.patents} - {IPC_NOT_SPECIFIED})
        return [CodeOption(code, describe_code(code, self.codes)) for code in codes]

    def year_options(self) -> list[int]:
        return sorted({p.year for p in self.patents if p.year is not None})
