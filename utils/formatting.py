"""Output formatting utilities for the patent dashboard.

Provides reusable functions for:
- Chart labels and percentages
- Deterministic chart colours
- Text truncation for filter labels
- Count tables for the command-line summary
"""

import math
from typing import Iterable, List, Tuple, Union

# 16 distinct colours; assigned in order and cycled when a chart has more
# slices than colours.
PALETTE = (
    "#dc3545", "#007bff", "#28a745", "#ffc107",
    "#6f42c1", "#fd7e14", "#20c997", "#e83e8c",
    "#6610f2", "#17a2b8", "#d63384", "#795548",
    "#198754", "#0dcaf0", "#adb5bd", "#343a40",
)

BAR_COLOR = "#0056b3"


def chart_palette(count: int) -> List[str]:
    """Return *count* colours, cycling through PALETTE.

    Examples:
        chart_palette(2) -> ["#dc3545", "#007bff"]
        chart_palette(17)[16] -> "#dc3545"
    """
    return [PALETTE[i % len(PALETTE)] for i in range(count)]


def percent_of(value: int, total: int) -> int:
    """Whole-number share of *total*, rounding halves up; 0 for an empty total.

    Examples:
        percent_of(1, 8) -> 13
        percent_of(0, 0) -> 0
    """
    if not total:
        return 0
    return int(math.floor(value / total * 100 + 0.5))


def code_label(code: str, description: str) -> str:
    """Legend label for a classification code: "A61K - Препараты ..."."""
    return f"{code} - {description}"


def truncate_text(text: str, max_length: int = 50, suffix: str = "...") -> str:
    """Cut text to *max_length* characters and append *suffix* if it was longer.

    The suffix is added after the kept characters, so the result can be up
    to ``max_length + len(suffix)`` long.

    Examples:
        truncate_text("Short", 10) -> "Short"
        truncate_text("Long text here", 4) -> "Long..."
    """
    if len(text) <= max_length:
        return text
    return text[:max_length] + suffix


class CountTable:
    """Two-column "label / count" table printed by the command-line summary.

    Usage:
        table = CountTable("Топ авторов", "Автор")
        table.extend(view.by_author)
        print(table.render())
    """

    COUNT_HEADER = "Количество"
    EMPTY = "(нет данных)"

    def __init__(self, title: str, label_header: str):
        self.title = title
        self.label_header = label_header
        self.rows: List[Tuple[str, int]] = []

    def add(self, label: Union[str, int], count: int) -> None:
        self.rows.append((str(label), count))

    def extend(self, rows: Iterable[Tuple[Union[str, int], int]]) -> None:
        for label, count in rows:
            self.add(label, count)

    def render(self) -> str:
        """Title, header, separator and one line per row; counts right-aligned."""
        if not self.rows:
            return f"{self.title}\n{self.EMPTY}"
        label_width = max(len(self.label_header), *(len(label) for label, _ in self.rows))
        count_width = max(len(self.COUNT_HEADER), *(len(str(count)) for _, count in self.rows))
        lines = [
            self.title,
            f"{self.label_header.ljust(label_width)}  {self.COUNT_HEADER.rjust(count_width)}",
            f"{'-' * label_width}  {'-' * count_width}",
        ]
        lines.extend(
            f"{label.ljust(label_width)}  {str(count).rjust(count_width)}"
            for label, count in self.rows
        )
        return "\n".join(lines)
