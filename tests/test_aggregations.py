"""
Tests for patents/aggregations.py: the four chart/table views.
"""
import sys
from collections import Counter
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from patents.aggregations import (
    aggregate_all,
    count_by_ipc_code,
    count_by_year,
    direction_label,
    top_authors,
    top_directions,
    top_n,
)
from patents.codes import parse_code_dictionary
from patents.columns import DIRECTION_UNSPECIFIED, IPC_NOT_SPECIFIED
from patents.csv_parser import parse_csv
from patents.enrich import build_working_set, enrich_record
from conftest import CODES_CSV, PATENTS_CSV


@pytest.fixture()
def patents():
    return build_working_set(parse_csv(PATENTS_CSV), parse_code_dictionary(CODES_CSV))


class TestTopN:
    def test_ties_keep_insertion_order(self):
        counts = Counter(["b", "a", "c", "a", "b"])
        assert top_n(counts, 3) == [("b", 2), ("a", 2), ("c", 1)]

    def test_limit(self):
        counts = Counter({f"x{i}": i for i in range(1, 20)})
        rows = top_n(counts, 10)
        assert len(rows) == 10
        assert rows[0] == ("x19", 19)

    def test_empty(self):
        assert top_n(Counter()) == []


class TestViews:
    def test_count_by_year_ascending(self, patents):
        assert count_by_year(patents) == [(2019, 1), (2020, 1), (2021, 3)]

    def test_top_authors(self, patents):
        assert top_authors(patents) == [
            ("Иванов И.И.", 3),
            ("Петров П.П.", 3),
            ("Сидоров С.С.", 2),
        ]

    def test_top_authors_skips_empty_entries(self):
        p = enrich_record({"Авторы": "A,,B,", "Публикация": "01.01.2020"}, {})
        assert top_authors([p]) == [("A", 1), ("B", 1)]

    def test_top_directions_with_unspecified(self, patents):
        assert top_directions(patents) == [
            ("Химия", 2),
            ("Медицина", 1),
            ("Приборостроение", 1),
            (DIRECTION_UNSPECIFIED, 1),
        ]

    def test_direction_label_whitespace_only(self):
        p = enrich_record({"Направление": "   "}, {})
        assert direction_label(p) == DIRECTION_UNSPECIFIED

    def test_count_by_ipc_code_sorted(self, patents):
        assert count_by_ipc_code(patents) == [
            ("A61K", 1),
            ("B01J", 2),
            ("G01N", 1),
            (IPC_NOT_SPECIFIED, 1),
        ]

    def test_counts_sum_to_matched(self, patents):
        views = aggregate_all(patents)
        assert sum(r.count for r in views["by_year"]) == len(patents)
        assert sum(r.count for r in views["by_ipc_code"]) == len(patents)
        assert sum(r.count for r in views["by_direction"]) == len(patents)

    def test_empty_input(self):
        views = aggregate_all([])
        assert all(rows == [] for rows in views.values())

    def test_limit_applies_to_ranked_views_only(self, patents):
        views = aggregate_all(patents, limit=1)
        assert views["by_author"] == [("Иванов И.И.", 3)]
        assert views["by_direction"] == [("Химия", 2)]
        assert len(views["by_year"]) == 3
