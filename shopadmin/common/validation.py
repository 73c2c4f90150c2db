"""Syntactic checks for customer identifiers."""

import re

EMAIL_RE = re.compile(r"^[A-Za-z0-9._%+-]+@[A-Za-z0-9-]+(\.[A-Za-z0-9-]+)+$")


def is_numeric_id(value: str) -> bool:
    return value.isascii() and value.isdigit()


def is_email(value: str) -> bool:
    return len(value) <= 254 and EMAIL_RE.fullmatch(value) is not None


def is_valid_id_or_email(value: str) -> bool:
    """True when `value` looks like a customer ID or an email address."""

    return is_numeric_id(value) or is_email(value)
