"""Column names and sentinel values for the patent source files.

The headers are the ones used by ``patents.csv`` as exported from the
patent register; any other column is carried through untouched.
"""

from dataclasses import dataclass

# Sentinels substituted for missing derived values
IPC_NOT_SPECIFIED = "Не указано"
IPC_UNKNOWN = "Неизвестно"
DIRECTION_UNSPECIFIED = "Не указано"


@dataclass(frozen=True)
class Columns:
    """Header names of the recognised ``patents.csv`` columns."""

    index: str = "№"
    title: str = "Название"
    authors: str = "Авторы"
    ipc: str = "МПК"
    direction: str = "Направление"
    published: str = "Публикация"
    number: str = "Номер патента"
    link: str = "Ссылка на патент"


DEFAULT_COLUMNS = Columns()
