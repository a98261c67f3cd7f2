# -*- coding: utf-8 -*-

"""
TAI64 label helpers for djbdns.tinydns plugins.

Features:
  - Parse a date/time string (numeric offset or zone abbreviation) with dateutil.
  - Normalize it to whole seconds since the Unix epoch.
  - Encode those seconds as the 16 hex digit external TAI64 label read by
    tinydns-data in the timestamp field of a data line.
  - Raises Tai64Error subclasses (with an optional hint) on failures.

Known quirk: instants more than LEAP_SECONDS_AT_EPOCH seconds before the Unix
epoch are encoded as EPOCH_BIAS - seconds, not EPOCH_BIAS + seconds. Labels
produced by existing zone data depend on that, so it is kept as is.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Dict, Mapping, Optional, Sequence

from dateutil import parser as dtparser
from dateutil import tz


EPOCH_BIAS = 2 ** 62
LEAP_SECONDS_AT_EPOCH = 10
LABEL_WIDTH = 16
LABEL_MAX = 2 ** 64 - 1

FUNCTION_NAME = "to_tinydns_tai64"

_UNIX_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
_LABEL_RE = re.compile(r"^[0-9a-f]{16}$")
_WORD_RE = re.compile(r"\b[A-Za-z]+\b")
_MAX_OFFSET = 86400

# Abbreviations dateutil does not resolve on its own; offsets in seconds.
ZONE_OFFSETS: Dict[str, int] = {
    "UTC": 0,
    "UT": 0,
    "GMT": 0,
    "Z": 0,
    "EST": -5 * 3600,
    "EDT": -4 * 3600,
    "CST": -6 * 3600,
    "CDT": -5 * 3600,
    "MST": -7 * 3600,
    "MDT": -6 * 3600,
    "PST": -8 * 3600,
    "PDT": -7 * 3600,
    "AKST": -9 * 3600,
    "AKDT": -8 * 3600,
    "HST": -10 * 3600,
    "WET": 0,
    "WEST": 1 * 3600,
    "CET": 1 * 3600,
    "CEST": 2 * 3600,
    "EET": 2 * 3600,
    "EEST": 3 * 3600,
    "JST": 9 * 3600,
    "AWST": 8 * 3600,
    "ACST": 9 * 3600 + 1800,
    "ACDT": 10 * 3600 + 1800,
    "AEST": 10 * 3600,
    "AEDT": 11 * 3600,
    "NZST": 12 * 3600,
    "NZDT": 13 * 3600,
}


class Tai64Error(Exception):
    def __init__(self, message: str, hint: Optional[str] = None) -> None:
        super().__init__(message)
        self.hint = hint


class ArityError(Tai64Error, TypeError):
    pass


class DatetimeTypeError(Tai64Error, TypeError):
    pass


class ParseError(Tai64Error, ValueError):
    pass


class Tai64RangeError(Tai64Error, OverflowError):
    pass


InvalidInputError = ParseError


@dataclass(frozen=True)
class Tai64Stamp:
    datetime: str
    epoch: int
    tai64: str


def check_arguments(args: Sequence[Any]) -> str:
    """Validate a host call convention of exactly one datetime string.

    Returns the single argument. Raises ArityError or DatetimeTypeError
    before anything is parsed.
    """
    if len(args) != 1:
        raise ArityError(
            f"{FUNCTION_NAME}(): Wrong number of arguments given ({len(args)} for 1)"
        )
    value = args[0]
    if not isinstance(value, str):
        raise DatetimeTypeError(
            f"{FUNCTION_NAME}(): Requires a datetime string to work with",
            hint=f"got {type(value).__name__}",
        )
    return value


def zone_offsets(extra: Optional[Mapping[str, Any]] = None) -> Dict[str, int]:
    """Return the abbreviation table merged with caller-supplied entries."""
    offsets = dict(ZONE_OFFSETS)
    for name, offset in (extra or {}).items():
        if not isinstance(name, str) or not name.strip():
            raise ParseError(f"Invalid time zone abbreviation: {name!r}")
        if isinstance(offset, bool) or not isinstance(offset, int):
            raise ParseError(
                f"Invalid offset for time zone {name!r}: {offset!r}",
                hint="offsets are integer seconds east of UTC",
            )
        if abs(offset) >= _MAX_OFFSET:
            raise ParseError(
                f"Invalid offset for time zone {name!r}: {offset!r}",
                hint="offsets are integer seconds east of UTC, within ±24h",
            )
        offsets[name.strip().upper()] = offset
    return offsets


def resolve_zone(name: Optional[str], tzinfos: Optional[Mapping[str, Any]] = None):
    """Return a tzinfo for an abbreviation or IANA name; None means host local time."""
    if name is None:
        return tz.tzlocal()
    offsets = zone_offsets(tzinfos)
    key = name.strip().upper()
    if key in offsets:
        return tz.tzoffset(key, offsets[key])
    zone = tz.gettz(name.strip())
    if zone is None:
        raise ParseError(f"Unknown time zone: {name!r}",
                         hint="use an IANA name such as Pacific/Auckland or a known abbreviation")
    return zone


def _upper_zone_names(value: str, offsets: Mapping[str, int]) -> str:
    # dateutil only takes all-uppercase tokens as zone names
    return _WORD_RE.sub(
        lambda m: m.group(0).upper() if m.group(0).upper() in offsets else m.group(0), value)


def parse_datetime(value: str, default_tz: Optional[str] = None,
                   tzinfos: Optional[Mapping[str, Any]] = None) -> datetime:
    """Parse value into an aware datetime.

    Zone abbreviations are matched case-insensitively. Strings without an
    offset or a known abbreviation are placed in default_tz (host local time
    when None); an unknown or mistyped abbreviation is ignored the same way,
    so it silently falls back to default_tz.
    """
    if not isinstance(value, str):
        raise DatetimeTypeError(
            f"{FUNCTION_NAME}(): Requires a datetime string to work with",
            hint=f"got {type(value).__name__}",
        )
    if not value.strip():
        raise ParseError("Empty datetime string")
    offsets = zone_offsets(tzinfos)
    try:
        dt = dtparser.parse(_upper_zone_names(value, offsets), tzinfos=offsets)
    except (ValueError, OverflowError) as e:
        raise ParseError(f"Unable to parse datetime {value!r}: {e}") from e
    if dt.tzinfo is None or dt.utcoffset() is None:
        dt = dt.replace(tzinfo=resolve_zone(default_tz, tzinfos))
    return dt


def to_epoch_seconds(dt: datetime) -> int:
    """Whole seconds since 1970-01-01T00:00:00Z, fraction dropped (floor)."""
    if dt.tzinfo is None or dt.utcoffset() is None:
        raise ParseError(f"Datetime {dt.isoformat()} has no UTC offset")
    delta = dt - _UNIX_EPOCH
    return delta.days * 86400 + delta.seconds


def encode_seconds(seconds: int) -> str:
    sec = seconds + LEAP_SECONDS_AT_EPOCH
    if sec >= 0:
        label = sec + EPOCH_BIAS
    else:
        label = EPOCH_BIAS - sec
    if label > LABEL_MAX:
        raise Tai64RangeError(f"{seconds} seconds does not fit in a 64-bit TAI64 label")
    return "%0*x" % (LABEL_WIDTH, label)


def stamp(value: str, default_tz: Optional[str] = None,
          tzinfos: Optional[Mapping[str, Any]] = None) -> Tai64Stamp:
    """Parse and encode value, keeping the intermediate epoch seconds."""
    epoch = to_epoch_seconds(parse_datetime(value, default_tz, tzinfos))
    return Tai64Stamp(datetime=value, epoch=epoch, tai64=encode_seconds(epoch))


def encode(value: str, default_tz: Optional[str] = None,
           tzinfos: Optional[Mapping[str, Any]] = None) -> str:
    """Convert a date/time string to the tinydns-data TAI64 label.

    Both '2014-03-20 01:14:56+13:00' and '2014-03-20 01:14:56 NZDT'
    give '4000000053298a4a'.
    """
    return stamp(value, default_tz, tzinfos).tai64


def is_tai64_label(value: Any) -> bool:
    return isinstance(value, str) and bool(_LABEL_RE.match(value))
