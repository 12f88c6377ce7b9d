"""
Validator Primitives.

Side-effect-free type predicates used by the template and version
normalizers, plus helpers that render instants in the two date formats
the Remote Config service and its SDKs exchange:

- ISO-8601 extended, as returned by the REST API
  (e.g. ``2020-11-30T22:38:16.421Z``).
- UTC display format, as exposed on normalized versions
  (e.g. ``Mon, 30 Nov 2020 22:38:16 GMT``).

None of the predicates raise; they only classify their input.
"""

from __future__ import annotations

import math
import re
from collections.abc import Mapping
from datetime import datetime, timezone
from email.utils import format_datetime, parsedate_to_datetime
from typing import Any, Optional

_ISO_DATE_RE = re.compile(
    r"^(?P<date>\d{4}-\d{2}-\d{2})T(?P<time>\d{2}:\d{2}:\d{2})"
    r"(?:\.(?P<fraction>\d+))?(?P<tz>Z|[+-]\d{2}:\d{2})?$",
    re.ASCII,
)

# Plain ASCII decimal or exponent notation; no underscores or non-ASCII digits
_NUMERIC_RE = re.compile(r"[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?", re.ASCII)


def is_non_empty_string(value: Any) -> bool:
    return isinstance(value, str) and len(value) > 0


def is_non_null_object(value: Any) -> bool:
    """Mappings only: ``None``, lists and scalars are rejected."""
    return isinstance(value, Mapping)


def is_array(value: Any) -> bool:
    return isinstance(value, (list, tuple))


def is_number(value: Any) -> bool:
    """Ints and floats, including ``inf``/``nan``. ``bool`` is not a number here."""
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def is_boolean(value: Any) -> bool:
    return isinstance(value, bool)


def is_integer_like(value: Any) -> bool:
    """
    Check whether a number or numeric string holds an integral value.

    ``"42"``, ``42``, ``42.0`` and ``"1e3"`` qualify; ``"3.5"``, ``3.5``,
    ``"abc"``, ``"1_000"``, non-ASCII digits, ``inf`` and ``nan`` do not.
    """
    if is_number(value):
        if isinstance(value, int):
            return True
        return math.isfinite(value) and float(value).is_integer()

    if not is_non_empty_string(value):
        return False

    text = value.strip()
    if _NUMERIC_RE.fullmatch(text) is None:
        return False

    try:
        int(text)
        return True
    except ValueError:
        pass

    try:
        number = float(text)
    except ValueError:
        return False
    return math.isfinite(number) and number.is_integer()


def parse_iso_date_string(value: Any) -> Optional[datetime]:
    """
    Parse an ISO-8601 extended date-time string into an aware datetime.

    Strings without an offset are taken as UTC. Fractions longer than
    microseconds are truncated.

    Returns:
        The parsed instant, or None if the value is not an ISO date string.
    """
    if not is_non_empty_string(value):
        return None

    match = _ISO_DATE_RE.match(value)
    if match is None:
        return None

    fraction = (match.group("fraction") or "")[:6].ljust(6, "0")
    tz = match.group("tz") or "Z"
    offset = "+00:00" if tz == "Z" else tz
    normalized = f"{match.group('date')}T{match.group('time')}.{fraction}{offset}"

    try:
        parsed = datetime.fromisoformat(normalized)
        # instants that cannot be expressed in UTC are rejected
        parsed.astimezone(timezone.utc)
    except (ValueError, OverflowError):
        return None
    return parsed


def is_iso_date_string(value: Any) -> bool:
    return parse_iso_date_string(value) is not None


def is_utc_date_string(value: Any) -> bool:
    """
    Check whether a string is already in UTC display format.

    The string must survive a parse/re-render cycle unchanged, so
    ``"Mon, 30 Nov 2020 22:38:16 GMT"`` qualifies while a wrong weekday or a
    non-GMT offset does not.
    """
    if not is_non_empty_string(value):
        return False

    try:
        parsed = parsedate_to_datetime(value)
    except (TypeError, ValueError, IndexError):
        return False
    if parsed is None:
        return False

    return _render_utc(parsed) == value


def to_utc_string(value: datetime | str) -> str:
    """
    Render an instant in UTC display format.

    Args:
        value: A datetime (naive values are taken as UTC) or an ISO date string.

    Raises:
        ValueError: If a string value is not an ISO date string.
    """
    if isinstance(value, str):
        parsed = parse_iso_date_string(value)
        if parsed is None:
            raise ValueError(f"Not an ISO-8601 date string: {value!r}")
        value = parsed
    return _render_utc(value)


def to_iso_string(value: datetime | str) -> str:
    """
    Render an instant as ``YYYY-MM-DDTHH:MM:SS.mmmZ``.

    Args:
        value: A datetime (naive values are taken as UTC), a UTC display
            string or an ISO date string.

    Raises:
        ValueError: If a string value is in neither date format.
    """
    if isinstance(value, str):
        parsed = parse_iso_date_string(value)
        if parsed is None and is_utc_date_string(value):
            parsed = parsedate_to_datetime(value)
        if parsed is None:
            raise ValueError(f"Not a valid date string: {value!r}")
        value = parsed

    instant = _as_utc(value)
    millis = instant.microsecond // 1000
    return instant.strftime("%Y-%m-%dT%H:%M:%S") + f".{millis:03d}Z"


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def _render_utc(value: datetime) -> str:
    # format_datetime is locale independent, unlike strftime("%a")
    return format_datetime(_as_utc(value).replace(microsecond=0), usegmt=True)
