"""
Pydantic response models for the API.

Chart series are plain (label, count) rows; the classification-code series
also carries the presentation extras the pie chart needs (legend label,
colour and share of the total).
"""

from __future__ import annotations

from pydantic import BaseModel, Field


# ── Chart series ──────────────────────────────────────────────────────────────

class YearCountOut(BaseModel):
    """Patents published in one year."""
    year: int = Field(..., description="Publication year", examples=[2021])
    count: int = Field(..., description="Number of matching patents", examples=[14])


class LabelCountOut(BaseModel):
    """One row of a top-N view (authors or directions)."""
    label: str = Field(..., description="Author name or direction", examples=["Иванов И.И."])
    count: int = Field(..., description="Number of matching patents", examples=[5])


class IpcCountOut(BaseModel):
    """One slice of the classification-code pie chart."""
    code: str = Field(..., description="Classification code", examples=["A61K"])
    description: str = Field(..., description="Code description, or the unknown sentinel")
    label: str = Field(..., description="Legend label: code and description", examples=["A61K - Препараты"])
    count: int = Field(..., description="Number of matching patents", examples=[3])
    pct_of_total: int = Field(..., description="Whole-number percentage of the filtered patents")
    color: str = Field(..., description="Slice colour", examples=["#dc3545"])


class FiltersOut(BaseModel):
    """The filter criteria a response was computed with."""
    q: str = Field("", description="Case-folded search term")
    ipc_code: list[str] = Field(default_factory=list, description="Selected classification codes")
    year: list[int] = Field(default_factory=list, description="Selected publication years")


class DashboardResponse(BaseModel):
    """Response body for GET /api/v1/dashboard."""
    total: int = Field(..., description="Patents in the working set", examples=[1200])
    matched: int = Field(..., description="Patents passing the filters", examples=[87])
    no_results: bool = Field(..., description="True when nothing matches the filters")
    filters: FiltersOut
    by_year: list[YearCountOut]
    by_author: list[LabelCountOut]
    by_direction: list[LabelCountOut]
    by_ipc_code: list[IpcCountOut]


# ── Table rows ────────────────────────────────────────────────────────────────

class PatentOut(BaseModel):
    """A patent as shown in the data table."""
    index: str = Field("", description="Display index from the source file", examples=["17"])
    title: str = Field("", description="Patent title")
    authors: str = Field("", description="Authors as written in the source file")
    ipc: str = Field("", description="Full classification string", examples=["A61K 9/00"])
    ipc_code: str = Field(..., description="Extracted classification code", examples=["A61K"])
    direction: str = Field("", description="Direction / category label")
    year: int = Field(..., description="Publication year", examples=[2021])
    number: str = Field("", description="Patent number", examples=["RU 2745678 C1"])
    link: str | None = Field(None, description="External link, if present")


class PatentListResponse(BaseModel):
    """Response body for GET /api/v1/patents."""
    total: int = Field(..., description="Matching patents before pagination", examples=[87])
    limit: int = Field(..., description="Page size used", examples=[100])
    offset: int = Field(..., description="Offset of this page", examples=[0])
    no_results: bool = Field(..., description="True when nothing matches the filters")
    items: list[PatentOut]


# ── Reference data ────────────────────────────────────────────────────────────

class IpcCodeOptionOut(BaseModel):
    """A classification code offered in the filter sidebar."""
    code: str = Field(..., examples=["B01J"])
    description: str = Field(..., description="Full description, or the unknown sentinel")


class YearOptionOut(BaseModel):
    """A publication year offered in the filter sidebar."""
    year: int = Field(..., examples=[2020])
    row_count: int = Field(..., description="Patents published that year", examples=[41])


# ── Error model ───────────────────────────────────────────────────────────────

class ErrorResponse(BaseModel):
    """Standard error response body."""
    error: str = Field(..., description="Short error category", examples=["Data unavailable"])
    detail: str | None = Field(None, description="Extended error detail")
    status_code: int = Field(..., ge=400, le=599, description="HTTP status code", examples=[503])
