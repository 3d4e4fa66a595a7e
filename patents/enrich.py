"""Derived fields for patent records and construction of the working set.

enrich_record() is pure and always returns a value; build_working_set() is
the ingestion step that drops records whose publication year cannot be
parsed.  Dropped rows are counted in the log, not reported individually.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from patents.codes import CodeDictionary
from patents.columns import DEFAULT_COLUMNS, IPC_NOT_SPECIFIED, IPC_UNKNOWN, Columns
from patents.csv_parser import RawRecord
from utils.patterns import IPC_CODE, PUBLICATION_DATE
from utils.strings import clean_field

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EnrichedPatent:
    """One patent row plus the fields derived from it."""

    fields: Mapping[str, str]
    year: int | None
    authors: tuple[str, ...]
    ipc_code: str
    ipc_description: str
    columns: Columns = field(default=DEFAULT_COLUMNS, repr=False, compare=False)

    def get(self, column: str, default: str = "") -> str:
        """Return a raw column value, ``default`` when the column is absent."""
        return self.fields.get(column, default)

    @property
    def title(self) -> str:
        return self.get(self.columns.title)

    @property
    def authors_raw(self) -> str:
        return self.get(self.columns.authors)

    @property
    def ipc_raw(self) -> str:
        return self.get(self.columns.ipc)

    @property
    def direction(self) -> str:
        return self.get(self.columns.direction)

    @property
    def number(self) -> str:
        return self.get(self.columns.number)

    @property
    def link(self) -> str:
        return self.get(self.columns.link)

    @property
    def index(self) -> str:
        return self.get(self.columns.index)


def parse_year(value: str) -> int | None:
    """Extract the year from a ``DD.MM.YYYY`` date; None when there is none.

    Examples:
        parse_year("15.03.2021") -> 2021
        parse_year("2021") -> None
    """
    match = PUBLICATION_DATE.search(value or "")
    return int(match.group(3)) if match else None


def split_authors(value: str) -> tuple[str, ...]:
    """Split a comma-joined author list; empty entries are kept."""
    return tuple(clean_field(a) for a in (value or "").split(","))


def extract_ipc_code(value: str) -> str:
    """Return the leading classification code or the "not specified" sentinel.

    Examples:
        extract_ipc_code("A61K 9/00") -> "A61K"
        extract_ipc_code("") -> IPC_NOT_SPECIFIED
    """
    match = IPC_CODE.match(value or "")
    return match.group(0) if match else IPC_NOT_SPECIFIED


def describe_code(code: str, codes: CodeDictionary) -> str:
    """Look up a code's description, falling back to the "unknown" sentinel."""
    return codes.get(code) or IPC_UNKNOWN


def enrich_record(
    raw: RawRecord,
    codes: CodeDictionary,
    columns: Columns = DEFAULT_COLUMNS,
) -> EnrichedPatent:
    """Derive year, authors, IPC code and IPC description for one record."""
    ipc_code = extract_ipc_code(raw.get(columns.ipc, ""))
    return EnrichedPatent(
        fields=MappingProxyType(dict(raw)),
        year=parse_year(raw.get(columns.published, "")),
        authors=split_authors(raw.get(columns.authors, "")),
        ipc_code=ipc_code,
        ipc_description=describe_code(ipc_code, codes),
        columns=columns,
    )


def build_working_set(
    records: Iterable[RawRecord],
    codes: CodeDictionary,
    columns: Columns = DEFAULT_COLUMNS,
) -> tuple[EnrichedPatent, ...]:
    """Enrich every record and keep only those with a publication year.

    Must be called after the code dictionary has finished loading, since
    descriptions are resolved here and not looked up again later.
    """
    kept: list[EnrichedPatent] = []
    dropped = 0
    for raw in records:
        patent = enrich_record(raw, codes, columns)
        if patent.year is None:
            dropped += 1
            continue
        kept.append(patent)
    if dropped:
        logger.info("skipped %d records without a publication year", dropped)
    return tuple(kept)
