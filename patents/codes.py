"""Classification-code dictionary (``mpk_codes.csv``).

The dictionary file is pipe-separated with a header row::

    Code|Subcode|Description
    A|"-"|"Удовлетворение жизненных потребностей человека"
    B01||"Способы и устройства общего назначения"

Only the code and the description are used.  The dictionary is optional:
when it cannot be loaded the dashboard runs with an empty mapping and every
lookup falls back to the "unknown" sentinel.
"""

import logging
from collections.abc import Callable, Mapping
from types import MappingProxyType

from utils.http import SourceUnavailable
from utils.strings import clean_field

logger = logging.getLogger(__name__)

CodeDictionary = Mapping[str, str]

EMPTY_DICTIONARY: CodeDictionary = MappingProxyType({})


def parse_code_dictionary(text: str) -> CodeDictionary:
    """Parse pipe-separated dictionary text into a read-only mapping.

    A line is admitted only when it splits into at least three parts and both
    the code (first part) and the description (third part) are non-empty.
    Later duplicate codes overwrite earlier ones.
    """
    lines = text.strip().split("\n")
    if len(lines) < 2:
        return EMPTY_DICTIONARY

    descriptions: dict[str, str] = {}
    for line in lines[1:]:
        line = line.strip()
        if not line:
            continue
        parts = [clean_field(p) for p in line.split("|")]
        if len(parts) < 3:
            continue
        code, description = parts[0], parts[2]
        if code and description:
            descriptions[code] = description
    return MappingProxyType(descriptions)


def load_code_dictionary(source: str, fetch: Callable[[str], str]) -> CodeDictionary:
    """Fetch and parse the dictionary; never raises.

    Args:
        source: Path or URL of ``mpk_codes.csv``.
        fetch: Callable returning the text of a source, raising
            SourceUnavailable on failure.

    Returns:
        The parsed dictionary, or an empty one if the source is unavailable.
    """
    try:
        text = fetch(source)
    except SourceUnavailable as exc:
        logger.warning("code dictionary not loaded, using codes without descriptions: %s", exc)
        return EMPTY_DICTIONARY
    codes = parse_code_dictionary(text)
    logger.info("loaded code dictionary: %d codes", len(codes))
    return codes
