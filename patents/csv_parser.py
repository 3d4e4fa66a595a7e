"""Quote-aware parser for the comma-separated patent export.

The export is not strict RFC 4180: a double quote simply toggles "inside a
quoted field", and every quote character is dropped from the field value.
That keeps commas inside author lists intact without needing escape rules.
Lines with an odd number of quotes are not diagnosed; their field
boundaries come out wrong and the row is kept as parsed.
"""

from utils.strings import clean_field

RawRecord = dict[str, str]


def split_line(line: str) -> list[str]:
    """Split one data line into cleaned fields, honouring quoted commas."""
    fields: list[str] = []
    current: list[str] = []
    in_quotes = False
    # Trailing comma flushes the last field through the same branch.
    for char in line + ",":
        if char == '"':
            in_quotes = not in_quotes
        elif char == "," and not in_quotes:
            fields.append(clean_field("".join(current)))
            current = []
        else:
            current.append(char)
    return fields


def parse_header(line: str) -> list[str]:
    """Split the header line on commas; headers are never quoted-with-comma."""
    return [clean_field(h) for h in line.split(",")]


def parse_csv(text: str) -> list[RawRecord]:
    """Parse raw CSV text into an ordered list of header-keyed records.

    The first non-empty line is the header.  Each following non-empty line
    becomes one record: fields are mapped onto headers by position, surplus
    fields are discarded and headers without a field get ``""``.

    Args:
        text: Full file contents.

    Returns:
        Records in file order.  Empty input gives an empty list.
    """
    lines = [line.strip() for line in text.split("\n")]
    lines = [line for line in lines if line]
    if not lines:
        return []

    headers = parse_header(lines[0])
    records: list[RawRecord] = []
    for line in lines[1:]:
        fields = split_line(line)
        records.append({
            header: fields[i] if i < len(fields) else ""
            for i, header in enumerate(headers)
        })
    return records
