"""
Car Rental Desk - Ledger Module

In-memory store of the fleet, customers and active rentals.
Every mutation is a single all-or-nothing step.
"""

from typing import Dict, Iterable, List, Optional, Tuple

from logging_config import get_logger
from rental_rules import (
    Car,
    CarUnavailable,
    Customer,
    DuplicateId,
    InvalidDays,
    LedgerInconsistent,
    NoActiveRental,
    Rental,
    UnknownCar,
    calculate_price,
)

logger = get_logger(__name__)

DEFAULT_CUSTOMER_PREFIX = "CUS"


class RentalLedger:
    """
    Owns the cars, customers and rentals for one running desk.

    Cars are seeded once at construction and never added or removed.
    Customers only grow. Rentals are appended on rent and removed on return.
    """

    def __init__(self, cars: Iterable[Car], customer_prefix: str = DEFAULT_CUSTOMER_PREFIX):
        """
        Args:
            cars: Fleet in display order. Car ids must be unique.
            customer_prefix: Tag placed in front of generated customer ids
        """
        self._cars: List[Car] = []
        self._cars_by_id: Dict[str, Car] = {}
        for car in cars:
            if car.car_id in self._cars_by_id:
                raise DuplicateId(f"Duplicate car id in fleet: {car.car_id}")
            if not car.available:
                # No rentals exist yet, so every seeded car starts available
                raise LedgerInconsistent(f"Seeded car {car.car_id} is marked as rented")
            self._cars.append(car)
            self._cars_by_id[car.car_id] = car

        self._customers: List[Customer] = []
        self._customer_ids = set()
        self._rentals: List[Rental] = []
        self._customer_prefix = customer_prefix
        self._customer_seq = 0

        logger.info(f"Ledger ready with {len(self._cars)} cars")

    # === QUERIES ===

    def list_cars(self) -> Tuple[Car, ...]:
        return tuple(self._cars)

    def list_available_cars(self) -> Tuple[Car, ...]:
        return tuple(car for car in self._cars if car.available)

    def find_car_by_id(self, car_id: str) -> Optional[Car]:
        return self._cars_by_id.get(car_id)

    def list_customers(self) -> Tuple[Customer, ...]:
        return tuple(self._customers)

    def list_rentals(self) -> Tuple[Rental, ...]:
        return tuple(self._rentals)

    def find_rental_for_car(self, car: Car) -> Optional[Rental]:
        for rental in self._rentals:
            if rental.car.car_id == car.car_id:
                return rental
        return None

    # === MUTATIONS ===

    def new_customer(self, name: str) -> Customer:
        """
        Build a customer with the next generated id.

        The counter only moves forward, so ids are never reused even if
        a generated customer is never added.

        Args:
            name: Customer display name

        Returns:
            Customer not yet added to the ledger
        """
        self._customer_seq += 1
        customer_id = f"{self._customer_prefix}{self._customer_seq}"
        while customer_id in self._customer_ids:
            self._customer_seq += 1
            customer_id = f"{self._customer_prefix}{self._customer_seq}"
        return Customer(customer_id, name)

    def add_customer(self, customer: Customer) -> None:
        """
        Append a customer.

        Raises:
            DuplicateId: If a customer with the same id exists
        """
        if customer.customer_id in self._customer_ids:
            raise DuplicateId(f"Customer id already exists: {customer.customer_id}")
        self._customers.append(customer)
        self._customer_ids.add(customer.customer_id)
        logger.info(f"Added customer {customer.customer_id} ({customer.name})")

    def rent_car(self, car: Car, customer: Customer, days: int) -> Rental:
        """
        Rent an available car to a customer.

        Args:
            car: Car from this ledger's fleet
            customer: Renting customer
            days: Positive number of rental days

        Returns:
            The new Rental

        Raises:
            InvalidDays: If days is not a positive integer
            UnknownCar: If the car is not part of this fleet
            CarUnavailable: If the car is already rented
        """
        if isinstance(days, bool) or not isinstance(days, int) or days <= 0:
            raise InvalidDays(f"Rental days must be a positive integer: {days!r}")
        if self._cars_by_id.get(car.car_id) is not car:
            raise UnknownCar(f"Car {car.car_id} is not part of this fleet")
        if not car.available:
            raise CarUnavailable(f"Car {car.car_id} is already rented")

        rental = Rental(car, customer, days)
        car.available = False
        self._rentals.append(rental)

        logger.info(
            f"Rented {car.car_id} to {customer.customer_id} for {days} days "
            f"(total {rental.total_price:.2f})"
        )
        self._log_invariants()
        return rental

    def return_car(self, car: Car) -> Rental:
        """
        Close the active rental for a car and make it available again.

        Returns:
            The Rental that was removed

        Raises:
            NoActiveRental: If no active rental references the car
        """
        rental = self.find_rental_for_car(car)
        if rental is None:
            raise NoActiveRental(f"Car {car.car_id} has no active rental")

        self._rentals.remove(rental)
        rental.car.available = True

        logger.info(f"Returned {car.car_id} from {rental.customer.customer_id}")
        self._log_invariants()
        return rental

    # === PRICING & CHECKS ===

    @staticmethod
    def calculate_price(car: Car, days: int) -> float:
        return calculate_price(car, days)

    def check_invariants(self) -> None:
        """
        Verify each car is unavailable iff exactly one rental references it.

        Raises:
            LedgerInconsistent: On the first car that disagrees
        """
        counts = {car.car_id: 0 for car in self._cars}
        for rental in self._rentals:
            counts[rental.car.car_id] = counts.get(rental.car.car_id, 0) + 1

        for car in self._cars:
            n = counts[car.car_id]
            if car.available and n != 0:
                raise LedgerInconsistent(f"{car.car_id} is available but has {n} rentals")
            if not car.available and n != 1:
                raise LedgerInconsistent(f"{car.car_id} is rented but has {n} rentals")

    def _log_invariants(self):
        """Report the post-mutation check; the mutation itself has already committed."""
        try:
            self.check_invariants()
        except LedgerInconsistent as e:
            logger.error(f"Ledger invariant broken: {e}")
            return
        logger.debug("Ledger invariants hold")
