from datetime import date, datetime, timedelta
import math
import re
from typing import Any

from dateutil import parser as date_parser

from landrecords.columns import is_blank


UUID_RE = re.compile(r"^[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}$", re.IGNORECASE)
EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
MOBILE_RE = re.compile(r"^\+\d{1,3}-?\d{3,4}-?\d{3,4}-?\d{3,4}$")
ISO_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")
YEAR_RE = re.compile(r"^\d{4}$")

FALLBACK_DATE = "1990-01-01"
# Day zero of spreadsheet serial dates (accounts for the phantom 1900-02-29).
SPREADSHEET_EPOCH = datetime(1899, 12, 30)
# Supplies whatever free text leaves out: "March 2020" is 2020-03-01.
PARSE_DEFAULT = datetime(2001, 1, 1)
UUID_PLACEHOLDERS = ("PASTE", "optional", "UUID")


def is_valid_uuid(value: Any) -> bool:
    return isinstance(value, str) and bool(UUID_RE.match(value.strip()))


def is_valid_email(value: Any) -> bool:
    return bool(EMAIL_RE.match(str(value).strip()))


def is_valid_mobile(value: Any) -> bool:
    return bool(MOBILE_RE.match(str(value).strip()))


def is_iso_date(value: Any) -> bool:
    text = str(value).strip()
    if not ISO_DATE_RE.match(text):
        return False
    try:
        date.fromisoformat(text)
    except ValueError:
        return False
    return True


def clean_uuid(value: Any) -> str | None:
    """Drop template placeholders and anything that is not a UUID."""
    if is_blank(value):
        return None
    text = str(value).strip()
    if any(placeholder in text for placeholder in UUID_PLACEHOLDERS) or not is_valid_uuid(text):
        return None
    return text


def to_number(value: Any) -> float | None:
    if is_blank(value) or isinstance(value, bool):
        return None
    try:
        number = float(str(value).strip().replace(",", ""))
    except ValueError:
        return None
    if math.isnan(number) or math.isinf(number):
        return None
    return number


def to_int(value: Any) -> int | None:
    number = to_number(value)
    if number is None or not number.is_integer():
        return None
    return int(number)


def to_bool(value: Any, default: bool) -> bool:
    if is_blank(value):
        return default
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in {"true", "yes", "y", "1"}:
        return True
    if text in {"false", "no", "n", "0"}:
        return False
    return default


def convert_spreadsheet_date(value: Any) -> str | None:
    """Coerce a spreadsheet date cell to ``YYYY-MM-DD``.

    Accepts ISO strings, bare years, serial day numbers and free text. Blank
    cells give None; anything unparseable gives ``FALLBACK_DATE``.
    """
    if is_blank(value):
        return None
    if isinstance(value, datetime):
        return value.date().isoformat()
    if isinstance(value, date):
        return value.isoformat()

    if isinstance(value, str):
        text = value.strip()
        if is_iso_date(text):
            return text
        if YEAR_RE.match(text):
            return f"{text}-01-01"

    serial = to_number(value)
    if serial is not None and serial > 1000:
        try:
            return (SPREADSHEET_EPOCH + timedelta(days=serial)).date().isoformat()
        except OverflowError:
            return FALLBACK_DATE

    if isinstance(value, str):
        try:
            return date_parser.parse(value.strip(), default=PARSE_DEFAULT).date().isoformat()
        except (ValueError, OverflowError):
            return FALLBACK_DATE

    return FALLBACK_DATE


def normalize_gender(value: Any) -> str:
    if is_blank(value):
        return "MALE"
    cleaned = str(value).strip().upper()
    if cleaned in {"FEMALE", "FEMAL", "F", "WOMAN"}:
        return "FEMALE"
    return "MALE"
