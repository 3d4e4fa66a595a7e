"""Patent dashboard core: parse, enrich, filter and aggregate patent records."""

from patents.aggregations import (
    CountRow,
    aggregate_all,
    count_by_ipc_code,
    count_by_year,
    top_authors,
    top_directions,
    top_n,
)
from patents.codes import load_code_dictionary, parse_code_dictionary
from patents.columns import (
    DEFAULT_COLUMNS,
    DIRECTION_UNSPECIFIED,
    IPC_NOT_SPECIFIED,
    IPC_UNKNOWN,
    Columns,
)
from patents.csv_parser import parse_csv
from patents.dashboard import DashboardController, DashboardView
from patents.enrich import EnrichedPatent, build_working_set, enrich_record
from patents.filters import FilterSnapshot, FilterState, apply_filters

__all__ = [
    # Parsing
    "parse_csv",
    "parse_code_dictionary",
    "load_code_dictionary",
    # Enrichment
    "EnrichedPatent",
    "enrich_record",
    "build_working_set",
    "Columns",
    "DEFAULT_COLUMNS",
    "IPC_NOT_SPECIFIED",
    "IPC_UNKNOWN",
    "DIRECTION_UNSPECIFIED",
    # Filtering
    "FilterState",
    "FilterSnapshot",
    "apply_filters",
    # Aggregation
    "CountRow",
    "count_by_year",
    "top_authors",
    "top_directions",
    "count_by_ipc_code",
    "top_n",
    "aggregate_all",
    # Controller
    "DashboardController",
    "DashboardView",
]
