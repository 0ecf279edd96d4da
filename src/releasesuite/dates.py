"""Date/version token parsing.

Release notes label each release with a short numeric token such as
``25.01.17``, ``17.01.2025`` or ``1/17/25``. The same digits can mean several
calendar dates, so resolution is heuristic:

- ``yyyy.mm.dd``  -> version ``yy.mm.dd``
- ``dd.mm.yyyy``  -> a component above 12 must be the day; otherwise day-first
- ``yy.mm.dd`` vs ``dd.mm.yy`` -> first component in 20..39 means year-first,
  last component in 20..39 means year-last, otherwise year-first when the
  tail is a valid month/day, else day-first
- ``m/d/yyyy`` or ``d/m/yy`` -> same >12 rule as above, day-first on a tie

The tie-break defaults differ between shapes on purpose; they mirror how the
existing release documents were written. ``DateToken.ambiguous`` flags results
where another valid reading of the digits exists.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import datetime, timezone

_YEAR_FIRST_RE = re.compile(r"^(\d{4})[./-](\d{1,2})[./-](\d{1,2})$")
_YEAR_LAST_RE = re.compile(r"^(\d{1,2})[./-](\d{1,2})[./-](\d{4})$")
_SHORT_RE = re.compile(r"^(\d{2})[./-](\d{2})[./-](\d{2})$")
_SLASH_RE = re.compile(r"^(\d{1,2})/(\d{1,2})/(\d{2,4})$")

# A line consisting solely of a date token (release header / item separator).
DATE_LINE_RE = re.compile(
    r"^(?:\d{4}[./-]\d{1,2}[./-]\d{1,2}|\d{1,2}[./-]\d{1,2}[./-]\d{2}(?:\d{2})?)$"
)

_CENTURY = 2000


@dataclass(frozen=True)
class DateToken:
    iso: str
    version: str
    ambiguous: bool = False

    @property
    def date(self) -> str:
        return self.iso[:10]


def is_date_line(line: str) -> bool:
    return bool(DATE_LINE_RE.match(line.strip()))


def _iso(year: int, month: int, day: int) -> str | None:
    try:
        moment = datetime(year, month, day, tzinfo=timezone.utc)
    except ValueError:
        return None
    return moment.strftime("%Y-%m-%dT%H:%M:%S.000Z")


def _valid(year: int, month: int, day: int) -> bool:
    return _iso(year, month, day) is not None


def _two(value: int) -> str:
    return f"{value % 100:02d}"


def _day_month(a: int, b: int) -> tuple[int, int]:
    """Resolve (day, month) from two leading components using the >12 rule."""
    if a > 12 and b <= 12:
        return a, b
    if b > 12 and a <= 12:
        return b, a
    return a, b


def _parse_year_first(m: re.Match[str]) -> DateToken | None:
    year, month, day = int(m.group(1)), int(m.group(2)), int(m.group(3))
    iso = _iso(year, month, day)
    if iso is None:
        return None
    return DateToken(iso, f"{_two(year)}.{month:02d}.{day:02d}")


def _parse_year_last(a: int, b: int, year: int) -> DateToken | None:
    day, month = _day_month(a, b)
    iso = _iso(year, month, day)
    if iso is None:
        return None
    ambiguous = a != b and a <= 12 and b <= 12 and _valid(year, a, b)
    return DateToken(iso, f"{day:02d}.{month:02d}.{_two(year)}", ambiguous)


def _parse_short(a: int, b: int, c: int) -> DateToken | None:
    year_first = _valid(_CENTURY + a, b, c)
    year_last = _valid(_CENTURY + c, b, a)
    # Both readings valid and different -> the pick below is a guess.
    ambiguous = year_first and year_last and a != c
    if 20 <= a <= 39 and year_first:
        chosen = "first"
    elif 20 <= c <= 39 and year_last:
        chosen = "last"
    elif year_first:
        chosen = "first"
    else:
        chosen = "last"
    if chosen == "first":
        iso = _iso(_CENTURY + a, b, c)
    else:
        iso = _iso(_CENTURY + c, b, a)
    if iso is None:
        return None
    return DateToken(iso, f"{a:02d}.{b:02d}.{c:02d}", ambiguous)


def parse_date_token(token: str) -> DateToken | None:
    """Return the calendar date and canonical version for ``token``.

    Never raises; ``None`` means the token is not a recognised date shape (or
    names an impossible calendar date) and the caller should treat the text as
    ordinary content.
    """
    t = token.strip()
    m = _YEAR_FIRST_RE.match(t)
    if m:
        return _parse_year_first(m)
    m = _YEAR_LAST_RE.match(t)
    if m:
        return _parse_year_last(int(m.group(1)), int(m.group(2)), int(m.group(3)))
    m = _SHORT_RE.match(t)
    if m:
        return _parse_short(int(m.group(1)), int(m.group(2)), int(m.group(3)))
    m = _SLASH_RE.match(t)
    if m:
        year_part = m.group(3)
        if len(year_part) == 3:
            return None
        year = int(year_part) + (_CENTURY if len(year_part) == 2 else 0)
        return _parse_year_last(int(m.group(1)), int(m.group(2)), year)
    return None


__all__ = ["DateToken", "DATE_LINE_RE", "is_date_line", "parse_date_token"]
