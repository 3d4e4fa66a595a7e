"""Pre-compiled regex patterns for the patent dashboard.

All patterns are compiled once at module import; the enrichment step runs
them for every record in the source file.

Usage:
    from utils.patterns import PUBLICATION_DATE, IPC_CODE

    match = PUBLICATION_DATE.search("15.03.2021")
"""

import re

# Publication date "DD.MM.YYYY" anywhere in the value; group 3 is the year.
# Examples: "15.03.2021", "Опубл. 01.12.2019"
PUBLICATION_DATE = re.compile(r'(\d{2})\.(\d{2})\.(\d{4})')

# Leading IPC-like classification code: one capital letter then one or more
# capitals/digits.  Examples: "A61K 9/00" -> "A61K", "B01J" -> "B01J"
IPC_CODE = re.compile(r'^[A-Z][A-Z0-9]+')

# Source locations fetched over HTTP rather than read from disk
URL_SCHEME = re.compile(r'^https?://', re.IGNORECASE)
