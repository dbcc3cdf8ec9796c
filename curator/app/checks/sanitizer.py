"""
Input sanitization primitives.

InputSanitizer is the utility builder layers call before writing a value
into a document. Each method either returns a cleaned value or None when
the input cannot be made safe. Nothing here raises for bad input.

The security advisor reuses the stripping primitives so that what it
reports and what a builder would write agree.
"""

from __future__ import annotations

import html
import math
import re
from datetime import date, datetime, time, timezone
from typing import Any, List, Optional, Sequence
from urllib.parse import urlsplit

from curator.app.config import CuratorConfig
from curator.app.utils.numbers import round_half_away_from_zero


MAX_EMAIL_LENGTH = 254
MAX_PHONE_LENGTH = 50
MAX_SKU_LENGTH = 100
MAX_LANGUAGE_CODE_LENGTH = 10
MAX_LIST_ITEMS = 100

LANGUAGE_CODE_PATTERN = re.compile(r"^[a-z]{2}(-[A-Z]{2})?$")
PHONE_PATTERN = re.compile(r"^[+]?[0-9\s\-().]+$")
SKU_PATTERN = re.compile(r"^[a-zA-Z0-9\-_]+$")
EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")

SCRIPT_BLOCK_PATTERN = re.compile(
    r"<script\b[^>]*>.*?</script\s*>",
    re.IGNORECASE | re.DOTALL,
)
HTML_TAG_PATTERN = re.compile(r"<[^>]*>")
SCRIPT_PROTOCOL_PATTERN = re.compile(r"javascript:", re.IGNORECASE)
# Only inside markup or right after a quote; "online = free" is prose
EVENT_HANDLER_PATTERN = re.compile(
    r"(?P<context><[a-z][^<>]*?\s|[\"']\s*)on[a-z]{3,}\s*=",
    re.IGNORECASE,
)
DATA_URI_PATTERN = re.compile(r"^data:", re.IGNORECASE)

_WHITESPACE = re.compile(r"\s+")

_EARLIEST_YEAR = 1900
_FUTURE_YEARS = 100


# ---------------------------------------------------------------------------
# Stripping primitives
# ---------------------------------------------------------------------------


def strip_script_blocks(text: str) -> str:
    return SCRIPT_BLOCK_PATTERN.sub("", text)


def strip_html_tags(text: str) -> str:
    return HTML_TAG_PATTERN.sub("", text)


def strip_script_protocols(text: str) -> str:
    return SCRIPT_PROTOCOL_PATTERN.sub("", text)


def strip_event_handlers(text: str) -> str:
    return EVENT_HANDLER_PATTERN.sub(r"\g<context>", text)


class InputSanitizer:
    """
    Field-level sanitizer configured from CuratorConfig limits.
    """

    def __init__(self, config: Optional[CuratorConfig] = None) -> None:
        self._config = config or CuratorConfig()

    @property
    def allowed_schemes(self) -> Sequence[str]:
        return self._config.ALLOWED_URL_SCHEMES

    # ------------------------------------------------------------------
    # Text
    # ------------------------------------------------------------------

    def sanitize_string(
        self,
        value: Any,
        *,
        max_length: Optional[int] = None,
        allow_html: bool = False,
        normalize_whitespace: bool = True,
    ) -> str:
        """
        Trim, cap, strip script content and (unless allow_html) markup,
        escape HTML-significant characters, collapse whitespace.

        None becomes the empty string.
        """
        if value is None:
            return ""

        text = str(value).strip()

        limit = max_length or self._config.MAX_STRING_LENGTH
        if len(text) > limit:
            text = text[:limit]

        text = strip_script_blocks(text)
        if not allow_html:
            text = strip_html_tags(text)
        text = strip_script_protocols(text)

        if not allow_html:
            text = html.escape(text, quote=True)

        if normalize_whitespace:
            text = _WHITESPACE.sub(" ", text)

        return text

    def sanitize_string_list(
        self,
        values: Any,
        *,
        max_items: int = MAX_LIST_ITEMS,
        allow_html: bool = False,
    ) -> List[str]:
        if not isinstance(values, (list, tuple)):
            return []

        cleaned = (
            self.sanitize_string(item, allow_html=allow_html)
            for item in values[:max_items]
        )
        return [item for item in cleaned if item]

    # ------------------------------------------------------------------
    # Identifiers
    # ------------------------------------------------------------------

    def sanitize_url(self, value: Any) -> Optional[str]:
        """
        Return the URL if it is absolute, uses an allowed scheme and fits
        the length limit; None otherwise.
        """
        if not isinstance(value, str) or not value.strip():
            return None

        url = value.strip()
        if len(url) > self._config.MAX_URL_LENGTH:
            return None

        if HTML_TAG_PATTERN.search(url) or _WHITESPACE.search(url):
            return None

        if SCRIPT_PROTOCOL_PATTERN.search(url) or DATA_URI_PATTERN.match(url):
            return None

        parts = urlsplit(url)
        if parts.scheme.lower() not in self.allowed_schemes:
            return None

        if parts.scheme.lower() in ("http", "https") and not parts.netloc:
            return None

        return url

    def sanitize_email(self, value: Any) -> Optional[str]:
        if not isinstance(value, str) or not value:
            return None

        email = self.sanitize_string(value, max_length=MAX_EMAIL_LENGTH)
        if not EMAIL_PATTERN.match(email):
            return None
        return email.lower()

    def sanitize_phone(self, value: Any) -> Optional[str]:
        if not isinstance(value, str) or not value:
            return None

        phone = self.sanitize_string(value, max_length=MAX_PHONE_LENGTH)
        if not PHONE_PATTERN.match(phone):
            return None
        return phone

    def sanitize_language_code(self, value: Any) -> Optional[str]:
        """
        BCP-47 subset: 'en' or 'en-US'. Case is preserved.
        """
        if not isinstance(value, str) or not value:
            return None

        code = self.sanitize_string(value, max_length=MAX_LANGUAGE_CODE_LENGTH)
        if not LANGUAGE_CODE_PATTERN.match(code):
            return None
        return code

    def sanitize_sku(self, value: Any) -> Optional[str]:
        if not isinstance(value, str) or not value:
            return None

        sku = self.sanitize_string(value, max_length=MAX_SKU_LENGTH)
        if not SKU_PATTERN.match(sku):
            return None
        return sku

    # ------------------------------------------------------------------
    # Numbers and dates
    # ------------------------------------------------------------------

    def sanitize_number(
        self,
        value: Any,
        *,
        minimum: Optional[float] = None,
        maximum: Optional[float] = None,
        decimals: Optional[int] = None,
    ) -> Optional[float]:
        if value is None or isinstance(value, bool):
            return None

        try:
            number = float(value)
        except (TypeError, ValueError):
            return None

        if not math.isfinite(number):
            return None
        if minimum is not None and number < minimum:
            return None
        if maximum is not None and number > maximum:
            return None

        if decimals is not None:
            return round_half_away_from_zero(number, decimals)

        if isinstance(value, int):
            return value
        return number

    def sanitize_date(self, value: Any) -> Optional[str]:
        """
        Normalize a date or timestamp to UTC ISO 8601 with milliseconds
        ('2024-01-01T00:00:00.000Z'). Dates outside 1900 .. now+100y are
        rejected.
        """
        moment = _coerce_datetime(value, self)
        if moment is None:
            return None

        latest_year = datetime.now(timezone.utc).year + _FUTURE_YEARS
        earliest = datetime(_EARLIEST_YEAR, 1, 1, tzinfo=timezone.utc)
        latest = datetime(latest_year, 12, 31, tzinfo=timezone.utc)
        if not earliest <= moment <= latest:
            return None

        return (
            moment.strftime("%Y-%m-%dT%H:%M:%S")
            + f".{moment.microsecond // 1000:03d}Z"
        )


def _coerce_datetime(value: Any, sanitizer: InputSanitizer) -> Optional[datetime]:
    if isinstance(value, datetime):
        moment = value
    elif isinstance(value, date):
        moment = datetime.combine(value, time())
    elif isinstance(value, str) and value.strip():
        text = sanitizer.sanitize_string(value)
        if text.endswith(("Z", "z")):
            text = text[:-1] + "+00:00"
        try:
            moment = datetime.fromisoformat(text)
        except ValueError:
            return None
    else:
        return None

    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(timezone.utc)
