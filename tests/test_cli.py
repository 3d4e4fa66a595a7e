"""
Tests for the command-line summary (python -m patents).
"""
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from patents.__main__ import main
from patents.dashboard import LOAD_ERROR_MESSAGE


class TestCli:
    def test_prints_all_views(self, patents_path, codes_path, capsys):
        rc = main(["--patents", patents_path, "--codes", codes_path])
        out = capsys.readouterr().out
        assert rc == 0
        assert "Патентов: 5 из 5" in out
        for heading in ("Патенты по годам", "Топ авторов", "Топ направлений", "МПК"):
            assert heading in out
        assert "A61K - Препараты для медицинских целей" in out
        assert "G01N - Неизвестно" in out

    def test_filters(self, patents_path, codes_path, capsys):
        rc = main(["--patents", patents_path, "--codes", codes_path,
                   "--search", "иванов", "--year", "2021"])
        out = capsys.readouterr().out
        assert rc == 0
        assert "Патентов: 2 из 5" in out

    def test_code_filter_repeatable(self, patents_path, codes_path, capsys):
        main(["--patents", patents_path, "--codes", codes_path,
              "--code", "A61K", "--code", "G01N"])
        assert "Патентов: 2 из 5" in capsys.readouterr().out

    def test_no_results(self, patents_path, codes_path, capsys):
        main(["--patents", patents_path, "--codes", codes_path, "--year", "1990"])
        assert "Нет результатов поиска." in capsys.readouterr().out

    def test_top(self, patents_path, codes_path, capsys):
        main(["--patents", patents_path, "--codes", codes_path, "--top", "1"])
        out = capsys.readouterr().out
        assert "Иванов И.И." in out
        assert "Сидоров С.С." not in out

    def test_missing_patents_file(self, tmp_path, codes_path, capsys):
        rc = main(["--patents", str(tmp_path / "missing.csv"), "--codes", codes_path])
        captured = capsys.readouterr()
        assert rc == 1
        assert LOAD_ERROR_MESSAGE in captured.err
