"""Date-string parsing for datetime and date members."""

from __future__ import annotations

import datetime
import enum
import re

from pyjson2obj._errors import ERR_MSG_INVALID_DATE, TypeCoercionError


class DateFormat(enum.StrEnum):
    ISO_8601 = "iso8601"
    ROUND_TRIP = "roundtrip"


# /Date(1234567890000)/, \/Date(1234567890000+0100)\/, new Date(1234567890000)
_MS_DATE_RE = re.compile(
    r"^(?:\\?/Date\((?P<ms>-?\d+)(?P<offset>[+-]\d{4})?\)\\?/"
    r"|new Date\((?P<new_ms>-?\d+)\))$"
)

_EPOCH = datetime.datetime(1970, 1, 1, tzinfo=datetime.timezone.utc)


def _parse_ms_date(match: re.Match[str]) -> datetime.datetime:
    ms = int(match.group("ms") or match.group("new_ms"))
    value = _EPOCH + datetime.timedelta(milliseconds=ms)
    offset = match.group("offset")
    if offset:
        sign = -1 if offset[0] == "-" else 1
        delta = datetime.timedelta(hours=int(offset[1:3]), minutes=int(offset[3:5]))
        value = value.astimezone(datetime.timezone(sign * delta))
    return value


def parse_json_date(
    text: str, date_format: DateFormat | str | None = None
) -> datetime.datetime:
    """Parse a JSON date string into a datetime.

    Microsoft JSON dates (``/Date(ms)/`` and ``new Date(ms)``) are accepted
    regardless of ``date_format``. Otherwise the hint selects the parser:

    - ``DateFormat.ISO_8601`` (default): ISO-8601, offset kept when present.
    - ``DateFormat.ROUND_TRIP``: ISO-8601, naive values taken as UTC.
    - any other string: a ``strptime`` pattern.

    Raises:
        TypeCoercionError: If the text does not match the expected format.
    """
    text = text.strip()
    if date_format is None:
        date_format = DateFormat.ISO_8601

    try:
        match = _MS_DATE_RE.match(text)
        if match:
            return _parse_ms_date(match)
        if date_format == DateFormat.ISO_8601:
            return datetime.datetime.fromisoformat(text)
        if date_format == DateFormat.ROUND_TRIP:
            value = datetime.datetime.fromisoformat(text)
            if value.tzinfo is None:
                value = value.replace(tzinfo=datetime.timezone.utc)
            return value
        return datetime.datetime.strptime(text, date_format)
    except (ValueError, OverflowError) as e:
        raise TypeCoercionError(
            ERR_MSG_INVALID_DATE,
            f"cannot parse {text!r} with date format {str(date_format)!r}",
            wrapped=e,
        ) from e
