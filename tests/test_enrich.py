"""
Tests for patents/enrich.py: derived fields and the working set.
"""
import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from patents.codes import parse_code_dictionary
from patents.columns import IPC_NOT_SPECIFIED, IPC_UNKNOWN, Columns
from patents.csv_parser import parse_csv
from patents.enrich import (
    build_working_set,
    enrich_record,
    extract_ipc_code,
    parse_year,
    split_authors,
)
from conftest import CODES_CSV, PATENTS_CSV


@pytest.fixture()
def codes():
    return parse_code_dictionary(CODES_CSV)


class TestParseYear:
    @pytest.mark.parametrize("value,expected", [
        ("15.03.2021", 2021),
        ("Опубл. 01.12.2019, бюл. 34", 2019),
        ("2021", None),
        ("15/03/2021", None),
        ("", None),
    ])
    def test_parse_year(self, value, expected):
        assert parse_year(value) == expected


class TestExtractIpcCode:
    @pytest.mark.parametrize("value,expected", [
        ("A61K 9/00", "A61K"),
        ("B01J21/04", "B01J21"),
        ("G21", "G21"),
        ("A 61K", IPC_NOT_SPECIFIED),
        ("a61k 9/00", IPC_NOT_SPECIFIED),
        (" A61K", IPC_NOT_SPECIFIED),
        ("", IPC_NOT_SPECIFIED),
        ("нет", IPC_NOT_SPECIFIED),
    ])
    def test_extract(self, value, expected):
        assert extract_ipc_code(value) == expected


class TestSplitAuthors:
    def test_split_and_trim(self):
        assert split_authors("Иванов И.И., Петров П.П.") == ("Иванов И.И.", "Петров П.П.")

    def test_empty_entries_kept(self):
        assert split_authors("Иванов,,Петров,") == ("Иванов", "", "Петров", "")

    def test_quotes_removed(self):
        assert split_authors('"Иванов", Петров') == ("Иванов", "Петров")


class TestEnrichRecord:
    def test_all_derived_fields(self, codes):
        raw = {"Авторы": "A, B", "МПК": "A61K 9/00", "Публикация": "15.03.2021",
               "Название": "T"}
        p = enrich_record(raw, codes)
        assert p.year == 2021
        assert p.authors == ("A", "B")
        assert p.ipc_code == "A61K"
        assert p.ipc_description == "Препараты для медицинских целей"
        assert p.title == "T"

    def test_unknown_code_description(self, codes):
        p = enrich_record({"МПК": "G01N 33/00"}, codes)
        assert p.ipc_code == "G01N"
        assert p.ipc_description == IPC_UNKNOWN

    def test_not_specified_code_description(self, codes):
        p = enrich_record({}, codes)
        assert p.ipc_code == IPC_NOT_SPECIFIED
        assert p.ipc_description == IPC_UNKNOWN

    def test_missing_year_still_returns_record(self, codes):
        p = enrich_record({"Публикация": "2021"}, codes)
        assert p.year is None

    def test_raw_fields_copied_and_read_only(self, codes):
        raw = {"Название": "T", "Примечание": "x"}
        p = enrich_record(raw, codes)
        raw["Название"] = "changed"
        assert p.get("Название") == "T"
        assert p.get("Примечание") == "x"
        with pytest.raises(TypeError):
            p.fields["Название"] = "y"

    def test_custom_columns(self, codes):
        cols = Columns(title="title", authors="authors", ipc="ipc", published="date")
        raw = {"title": "T", "authors": "A", "ipc": "B01J", "date": "01.01.2000"}
        p = enrich_record(raw, codes, cols)
        assert (p.title, p.year, p.ipc_code) == ("T", 2000, "B01J")


class TestBuildWorkingSet:
    def test_records_without_year_dropped(self, codes):
        patents = build_working_set(parse_csv(PATENTS_CSV), codes)
        assert [p.index for p in patents] == ["1", "2", "3", "5", "6"]
        assert all(p.year is not None for p in patents)

    def test_working_set_is_immutable(self, codes):
        patents = build_working_set(parse_csv(PATENTS_CSV), codes)
        assert isinstance(patents, tuple)

    def test_empty_dictionary_degrades_descriptions(self):
        patents = build_working_set(parse_csv(PATENTS_CSV), {})
        assert {p.ipc_description for p in patents} == {IPC_UNKNOWN}
