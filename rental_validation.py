"""
Car Rental Desk - Input Validation Module

Turns raw text from the entry fields into the types the ledger expects.
Catches bad input before it reaches the ledger.
"""

import re
from typing import Optional

from rental_rules import InvalidDays, ValidationError

MSG_SELECT_CAR_TO_RENT = "Please select a car to rent."
MSG_SELECT_CAR_TO_RETURN = "Please select a car to return."
MSG_ENTER_NAME = "Please enter customer name."
MSG_INVALID_DAYS = "Please enter a valid number of days."

_INT_PATTERN = re.compile(r'^[+-]?\d+$')


def validate_customer_name(name: Optional[str]) -> str:
    """
    Strip a customer name and make sure something is left.

    Args:
        name: Raw text from the name field

    Returns:
        str: Trimmed name

    Raises:
        ValidationError: If the name is missing or blank
    """
    cleaned = (name or "").strip()
    if not cleaned:
        raise ValidationError("Customer name is empty", user_message=MSG_ENTER_NAME)
    return cleaned


def parse_int(text: Optional[str]) -> Optional[int]:
    """Plain decimal integer with optional sign, or None (no '1_0', '2.5', '')."""
    cleaned = (text or "").strip()
    if not _INT_PATTERN.match(cleaned):
        return None
    return int(cleaned)


def parse_days(days_text: Optional[str]) -> int:
    """
    Parse the rental days field as a positive integer.

    Accepts surrounding whitespace and an optional sign, the same as
    integer parsing in most form toolkits. Decimals are rejected.

    Args:
        days_text: Raw text from the days field

    Returns:
        int: Number of days (> 0)

    Raises:
        InvalidDays: If the text is empty, not an integer, or not positive
    """
    days = parse_int(days_text)
    if days is None:
        raise InvalidDays(f"Not an integer: {days_text!r}", user_message=MSG_INVALID_DAYS)
    if days <= 0:
        raise InvalidDays(f"Days must be positive: {days}", user_message=MSG_INVALID_DAYS)
    return days


def require_selection(car_id: Optional[str], message: str) -> str:
    """Raise a ValidationError carrying `message` when no row is selected."""
    if not car_id:
        raise ValidationError("No row selected", user_message=message)
    return car_id
