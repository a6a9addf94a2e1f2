"""Stateless predicates over transaction fields.

Every predicate returns False for absent or malformed input instead of
raising.
"""

import re
from typing import Any

EMAIL_PATTERN = re.compile(r"^[A-Za-z0-9+_.-]+@(.+)$")
PHONE_PATTERN = re.compile(r"^\d{10}$", re.ASCII)
ACCOUNT_PATTERN = re.compile(r"^\d{8,16}$", re.ASCII)

MAX_TRANSACTION_AMOUNT = 1_000_000.0


def is_not_null(value: Any) -> bool:
    return value is not None


def is_not_empty(value: Any) -> bool:
    return isinstance(value, str) and bool(value.strip())


def is_valid_email(email: Any) -> bool:
    if not is_not_empty(email):
        return False
    return EMAIL_PATTERN.fullmatch(email) is not None


def is_valid_phone_number(phone: Any) -> bool:
    if not is_not_empty(phone):
        return False
    return PHONE_PATTERN.fullmatch(phone.replace("-", "")) is not None


def is_valid_account_number(account: Any) -> bool:
    if not is_not_empty(account):
        return False
    return ACCOUNT_PATTERN.fullmatch(account) is not None


def is_valid_amount(amount: Any) -> bool:
    """True for a number in (0, 1_000_000]."""
    if isinstance(amount, bool) or not isinstance(amount, (int, float)):
        return False
    return 0 < amount <= MAX_TRANSACTION_AMOUNT


def is_valid_transaction(from_account: Any, to_account: Any, amount: Any) -> bool:
    return (
        is_valid_account_number(from_account)
        and is_valid_account_number(to_account)
        and is_valid_amount(amount)
        and from_account != to_account
    )
