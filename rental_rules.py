"""
Car Rental Desk - Rental Rules Module

Plain records for cars, customers and rentals plus the pricing rule.
No side effects (no file I/O, no GUI callbacks).
Safe for unit testing.
"""

from dataclasses import dataclass
from typing import Optional


class RentalError(Exception):
    """Base class for every failure the rental desk reports to the user."""

    default_message = "The rental operation could not be completed."

    def __init__(self, message: Optional[str] = None, user_message: Optional[str] = None):
        super().__init__(message or self.default_message)
        self.user_message = user_message or self.default_message


class ValidationError(RentalError, ValueError):
    """Bad user input. Nothing in the ledger has been touched."""

    default_message = "Invalid input."


class InvalidDays(ValidationError):
    default_message = "Please enter a valid number of days."


class DomainError(RentalError):
    """A ledger rule was violated. Ledger state is unchanged."""


class CarUnavailable(DomainError):
    default_message = "Selected car is not available."


class NoActiveRental(DomainError):
    default_message = "Selected car is not currently rented."


class DuplicateId(DomainError):
    default_message = "That id is already in use."


class UnknownCar(DomainError):
    default_message = "Selected car is not available."


class LedgerInconsistent(DomainError):
    default_message = "Rental records are out of sync with the fleet."


class Car:
    """
    A vehicle in the fleet.

    Identity and pricing are fixed at construction; only the
    availability flag changes, and only through the ledger.
    """

    def __init__(self, car_id: str, brand: str, model: str,
                 base_price_per_day: float, available: bool = True):
        if base_price_per_day < 0:
            raise ValueError(f"Price per day cannot be negative: {base_price_per_day}")
        self._car_id = car_id
        self._brand = brand
        self._model = model
        self._base_price_per_day = float(base_price_per_day)
        self.available = available

    @property
    def car_id(self) -> str:
        return self._car_id

    @property
    def brand(self) -> str:
        return self._brand

    @property
    def model(self) -> str:
        return self._model

    @property
    def base_price_per_day(self) -> float:
        return self._base_price_per_day

    def calculate_price(self, days: int) -> float:
        return calculate_price(self, days)

    def __repr__(self):
        state = "available" if self.available else "rented"
        return f"Car({self._car_id!r}, {self._brand} {self._model}, {state})"


@dataclass(frozen=True)
class Customer:
    """Immutable customer record. A fresh one is created on every rent."""
    customer_id: str
    name: str


@dataclass
class Rental:
    """Active association between one car and one customer."""
    car: Car
    customer: Customer
    days: int

    def __post_init__(self):
        """Validate the day count is a positive integer."""
        if isinstance(self.days, bool) or not isinstance(self.days, int) or self.days <= 0:
            raise InvalidDays(f"Rental days must be a positive integer: {self.days!r}")

    @property
    def total_price(self) -> float:
        return calculate_price(self.car, self.days)


def calculate_price(car: Car, days: int) -> float:
    """
    Total price for renting a car for a number of days.

    Linear model: base price per day times days. No discounts, taxes or
    late fees, and no rounding (formatting happens at display time).

    Args:
        car: Car being priced
        days: Number of rental days (non-negative)

    Returns:
        float: base_price_per_day * days
    """
    return car.base_price_per_day * days


def format_money(amount: float, currency_symbol: str = "$") -> str:
    """Format an amount for display, e.g. 90 -> '$90.00'."""
    return f"{currency_symbol}{amount:.2f}"
