"""
Pytest fixtures for the patent dashboard tests.

Provides small but realistic source files (a patents.csv export and an
mpk_codes.csv dictionary), a loaded DashboardController, and FastAPI test
clients for a healthy app and for one whose patents file is missing.

Working set of PATENTS_CSV (record 4 has no DD.MM.YYYY date and is dropped):

    №  year  ipc_code     direction         authors
    1  2021  B01J         Химия             Иванов, Петров
    2  2020  A61K         Медицина          Петров, Сидоров
    3  2021  G01N         Приборостроение   Иванов
    5  2019  Не указано   (empty)           Сидоров, Иванов
    6  2021  B01J         Химия             Петров
"""

import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from fastapi.testclient import TestClient  # noqa: E402

from api.app import create_app  # noqa: E402
from patents.dashboard import DashboardController  # noqa: E402
from utils.http import SourceFetcher  # noqa: E402

PATENTS_CSV = """\
№,Название,Авторы,МПК,Направление,Публикация,Номер патента,Ссылка на патент
1,Способ получения катализатора,"Иванов И.И., Петров П.П.",B01J 21/04,Химия,15.03.2021,RU 2745001 C1,https://example.org/2745001
2,Лекарственная форма,"Петров П.П., Сидоров С.С.",A61K 9/00,Медицина,01.06.2020,RU 2720002 C1,https://example.org/2720002
3,"Устройство, для измерения",Иванов И.И.,G01N 33/00,Приборостроение,20.11.2021,RU 2760003 C1,

4,Без даты,Козлов К.К.,A61K 31/00,Медицина,2021,RU 2700004 C1,
5,Композиция,"Сидоров С.С., Иванов И.И.",нет,,10.02.2019,RU 2680005 C1,
6,Каталитический реактор,Петров П.П.,B01J 8/00,Химия,05.05.2021,RU 2750006 C1,https://example.org/2750006
"""

CODES_CSV = """\
Code|Subcode|Description
A61K|-|"Препараты для медицинских целей"
B01J||"Химические способы"
B01J|x|"Химические или физические способы"
C07|bad
|x|Без кода
G01|x|
"""


# ── Source files ──────────────────────────────────────────────────────────────

@pytest.fixture()
def data_dir(tmp_path):
    """Directory holding patents.csv and mpk_codes.csv."""
    (tmp_path / "patents.csv").write_text(PATENTS_CSV, encoding="utf-8")
    (tmp_path / "mpk_codes.csv").write_text(CODES_CSV, encoding="utf-8")
    return tmp_path


@pytest.fixture()
def patents_path(data_dir):
    return str(data_dir / "patents.csv")


@pytest.fixture()
def codes_path(data_dir):
    return str(data_dir / "mpk_codes.csv")


# ── Controller ────────────────────────────────────────────────────────────────

@pytest.fixture()
def controller(patents_path, codes_path):
    """A DashboardController loaded from the fixture files."""
    ctrl = DashboardController(fetch=SourceFetcher().fetch)
    ctrl.load(patents_path, codes_path)
    return ctrl


# ── API clients ───────────────────────────────────────────────────────────────

@pytest.fixture()
def app_client(patents_path, codes_path):
    """TestClient for an app with both sources available."""
    app = create_app(patents_source=patents_path, codes_source=codes_path)
    with TestClient(app) as client:
        yield client


@pytest.fixture()
def broken_client(tmp_path):
    """TestClient for an app whose patents.csv does not exist."""
    app = create_app(
        patents_source=str(tmp_path / "missing.csv"),
        codes_source=str(tmp_path / "missing_codes.csv"),
    )
    with TestClient(app, raise_server_exceptions=False) as client:
        yield client
