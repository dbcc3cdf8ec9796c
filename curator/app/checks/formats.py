"""
String format checking used by the structural validator.

FORMAT_CHECKER is a jsonschema FormatChecker limited to the formats a
profile may declare. The library's draft 7 checks do the parsing; two
refinements are layered on top:

- values spanning a line break never conform (several library checks
  anchor with '$', which tolerates a trailing newline)
- 'email' requires a dotted domain and no whitespace
"""

from __future__ import annotations

import re

from jsonschema import Draft7Validator, FormatChecker

from curator.app.schemas.profile_definition import ConstraintFormat


_EMAIL = re.compile(r"[^\s@]+@[^\s@]+\.[^\s@]+")

_LIBRARY_CHECKER = Draft7Validator.FORMAT_CHECKER

FORMAT_CHECKER = FormatChecker(())


def _single_line(fmt: str):
    def check(instance: object) -> bool:
        if not isinstance(instance, str):
            return True
        if "\n" in instance or "\r" in instance:
            return False
        return _LIBRARY_CHECKER.conforms(instance, fmt)

    return check


for _fmt in ConstraintFormat:
    FORMAT_CHECKER.checks(_fmt.value)(_single_line(_fmt.value))


@FORMAT_CHECKER.checks(ConstraintFormat.EMAIL.value)
def _is_email(instance: object) -> bool:
    if not isinstance(instance, str):
        return True
    return _EMAIL.fullmatch(instance) is not None


def matches_format(value: str, fmt: ConstraintFormat) -> bool:
    return FORMAT_CHECKER.conforms(value, fmt.value)


def is_date(value: str) -> bool:
    return matches_format(value, ConstraintFormat.DATE)


def is_date_time(value: str) -> bool:
    """RFC 3339 timestamp: seconds and a zone designator are mandatory."""
    return matches_format(value, ConstraintFormat.DATE_TIME)


def is_uri(value: str) -> bool:
    return matches_format(value, ConstraintFormat.URI)


def is_uri_reference(value: str) -> bool:
    return matches_format(value, ConstraintFormat.URI_REFERENCE)


def is_email(value: str) -> bool:
    return matches_format(value, ConstraintFormat.EMAIL)
