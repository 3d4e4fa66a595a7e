"""
Tests for utils/formatting.py

Chart colours, percentages, legend labels, truncation and the plain-text
table used by the command-line summary.
"""
import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from utils.formatting import (
    PALETTE,
    CountTable,
    chart_palette,
    code_label,
    percent_of,
    truncate_text,
)


class TestChartPalette:
    def test_distinct_colours(self):
        assert len(set(PALETTE)) == len(PALETTE) == 16

    def test_assigned_in_order(self):
        assert chart_palette(3) == list(PALETTE[:3])

    def test_cycles_past_palette_length(self):
        colours = chart_palette(20)
        assert colours[16] == PALETTE[0]
        assert colours[19] == PALETTE[3]

    def test_zero(self):
        assert chart_palette(0) == []


class TestPercentOf:
    @pytest.mark.parametrize("value,total,expected", [
        (1, 8, 13),
        (1, 3, 33),
        (2, 3, 67),
        (1, 200, 1),
        (5, 5, 100),
        (0, 0, 0),
        (3, 0, 0),
    ])
    def test_percent_of(self, value, total, expected):
        assert percent_of(value, total) == expected


class TestLabels:
    def test_code_label(self):
        assert code_label("A61K", "Препараты") == "A61K - Препараты"

    def test_truncate_short(self):
        assert truncate_text("Short", 10) == "Short"

    def test_truncate_exact_length(self):
        assert truncate_text("x" * 50) == "x" * 50

    def test_truncate_long(self):
        assert truncate_text("x" * 51) == "x" * 50 + "..."


class TestCountTable:
    def test_render(self):
        table = CountTable("Патенты по годам", "Год")
        table.extend([(2021, 3), (2019, 12)])
        lines = table.render().split("\n")
        assert lines == [
            "Патенты по годам",
            "Год   Количество",
            "----  ----------",
            "2021           3",
            "2019          12",
        ]

    def test_wide_labels_widen_column(self):
        table = CountTable("Топ авторов", "Автор")
        table.add("Иванов И.И.", 3)
        header, separator, row = table.render().split("\n")[1:]
        assert header.index("Количество") == row.index("Иванов И.И.") + len("Иванов И.И.") + 2
        assert separator.startswith("-" * len("Иванов И.И.") + "  ")

    def test_accepts_count_rows(self):
        from patents.aggregations import CountRow

        table = CountTable("МПК", "Код")
        table.extend([CountRow("A61K", 1)])
        assert table.rows == [("A61K", 1)]

    def test_empty_table(self):
        assert CountTable("Топ направлений", "Направление").render() == (
            "Топ направлений\n(нет данных)"
        )
