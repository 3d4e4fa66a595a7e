"""String processing utilities for the patent dashboard.

The CSV and dictionary parsers call clean_field() for every field of every
line, so it stays a plain strip + replace without regex overhead.
"""


def clean_field(value: str) -> str:
    """Trim a raw field and drop every double-quote character.

    Quote characters are removed wherever they occur, not just at the ends,
    which is how the source files encode quoted values.

    Example:
        ' "Иванов И.И., Петров П.П." ' -> 'Иванов И.И., Петров П.П.'
    """
    return value.strip().replace('"', '')


def casefold_or_empty(value: str | None) -> str:
    """Return *value* case-folded, or an empty string for None."""
    return (value or "").casefold()
