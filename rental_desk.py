"""
Car Rental Desk - Desk Controller Module

Sits between the Tkinter window and the ledger: renders ledger snapshots
into table rows and turns button presses into ledger calls plus the
message the user should see. Holds no Tk state, so it can be tested
without a display.
"""

from typing import List, NamedTuple, Optional, Tuple

from logging_config import get_logger
from rental_ledger import RentalLedger
from rental_rules import CarUnavailable, Rental, RentalError, UnknownCar, format_money
from rental_validation import (
    MSG_SELECT_CAR_TO_RENT,
    MSG_SELECT_CAR_TO_RETURN,
    parse_days,
    parse_int,
    require_selection,
    validate_customer_name,
)

logger = get_logger(__name__)

CAR_COLUMNS = ("Car ID", "Brand", "Model", "Price per Day", "Status")
RENTAL_COLUMNS = ("Car ID", "Brand", "Model", "Customer", "Days")

STATUS_AVAILABLE = "Available"
STATUS_RENTED = "Rented"

MSG_RENTED = "Car rented successfully!"
MSG_RETURNED = "Car returned successfully!"


class ActionResult(NamedTuple):
    """Outcome of a successful rent or return."""
    message: str
    rental: Rental


class RentalDesk:
    """Presentation controller over a single ledger."""

    def __init__(self, ledger: RentalLedger, currency_symbol: str = "$"):
        self.ledger = ledger
        self.currency_symbol = currency_symbol

    def car_rows(self) -> List[Tuple[str, str, str, str, str]]:
        """Rows for the fleet table, in seed order."""
        return [
            (
                car.car_id,
                car.brand,
                car.model,
                format_money(car.base_price_per_day, self.currency_symbol),
                STATUS_AVAILABLE if car.available else STATUS_RENTED,
            )
            for car in self.ledger.list_cars()
        ]

    def rental_rows(self) -> List[Tuple[str, str, str, str, int]]:
        """Rows for the active rentals table, oldest rental first."""
        return [
            (r.car.car_id, r.car.brand, r.car.model, r.customer.name, r.days)
            for r in self.ledger.list_rentals()
        ]

    def quote(self, car_id: Optional[str], days_text: Optional[str]) -> str:
        """
        Live total for the price label.

        Falls back to zero whenever there is nothing sensible to price:
        no selection, empty or non-numeric days, or an unknown car.
        Non-positive day counts are priced as typed; the rent action
        rejects them.

        Returns:
            str: Formatted total, e.g. '$90.00'
        """
        zero = format_money(0.0, self.currency_symbol)
        days = parse_int(days_text)
        if not car_id or days is None:
            return zero

        car = self.ledger.find_car_by_id(car_id)
        if car is None:
            return zero
        return format_money(self.ledger.calculate_price(car, days), self.currency_symbol)

    def rent(self, car_id: Optional[str], customer_name: Optional[str],
             days_text: Optional[str]) -> ActionResult:
        """
        Rent the selected car to a new customer.

        Checks run in the order the user fills the form: selection, car
        availability, name, days. The customer is only added once every
        check has passed, so a failed rent leaves no trace.

        Args:
            car_id: Id from the selected fleet row, or None
            customer_name: Raw name field text
            days_text: Raw days field text

        Returns:
            ActionResult with the new Rental

        Raises:
            ValidationError: Missing selection, blank name, bad days
            DomainError: Car unknown or already rented
        """
        car_id = require_selection(car_id, MSG_SELECT_CAR_TO_RENT)

        car = self.ledger.find_car_by_id(car_id)
        if car is None:
            raise UnknownCar(f"No car with id {car_id}")
        if not car.available:
            raise CarUnavailable(f"Car {car_id} is already rented")

        name = validate_customer_name(customer_name)
        days = parse_days(days_text)

        customer = self.ledger.new_customer(name)
        rental = self.ledger.rent_car(car, customer, days)
        self.ledger.add_customer(customer)
        return ActionResult(MSG_RENTED, rental)

    def return_(self, car_id: Optional[str]) -> ActionResult:
        """
        Return the car on the selected rental row.

        Raises:
            ValidationError: Nothing selected
            DomainError: Unknown car or no active rental for it
        """
        car_id = require_selection(car_id, MSG_SELECT_CAR_TO_RETURN)

        car = self.ledger.find_car_by_id(car_id)
        if car is None:
            raise UnknownCar(f"No car with id {car_id}", user_message=MSG_SELECT_CAR_TO_RETURN)

        rental = self.ledger.return_car(car)
        return ActionResult(MSG_RETURNED, rental)

    def describe_error(self, error: RentalError) -> str:
        """Log a failed action and return the text for the dialog."""
        logger.warning(f"Action rejected: {error} ({type(error).__name__})")
        return error.user_message
