from __future__ import annotations
import re
from datetime import datetime

SEPARATOR = "-"

# Optional sign, ASCII digits, surrounding whitespace allowed. Anything
# else (including "1_000" which int() would accept) counts as unparseable.
_INTEGER = re.compile(r"^\s*[+-]?[0-9]+\s*$")


def _to_int_or_zero(text: str) -> int:
    if _INTEGER.match(text):
        return int(text)
    return 0


def parse_years(raw: str | None) -> tuple[int, int]:
    """
    Turn a raw reign string into (start_year, end_year).

    Accepted shapes:
      "1016"       →  (1016, 1016)
      "1066-1087"  →  (1066, 1087)
      "1952-"      →  (1952, <current year>)   still reigning
      "" / None    →  (0, 0)

    Parsing is lenient: a segment that is not an integer becomes 0 and
    nothing is ever raised. Segments after the second are ignored.
    """
    if raw is None or not raw.strip():
        return 0, 0

    parts = raw.split(SEPARATOR)
    if len(parts) == 1:
        year = _to_int_or_zero(parts[0])
        return year, year

    start = _to_int_or_zero(parts[0])
    if not parts[1].strip():
        end = datetime.now().year
    else:
        end = _to_int_or_zero(parts[1])
    return start, end
