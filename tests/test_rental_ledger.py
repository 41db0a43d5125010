"""Tests for the in-memory rental ledger."""

from __future__ import annotations

import pytest

from rental_ledger import RentalLedger
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


def _unavailable_iff_one_rental(ledger: RentalLedger) -> bool:
    for car in ledger.list_cars():
        n = sum(1 for r in ledger.list_rentals() if r.car.car_id == car.car_id)
        if car.available == (n != 0) or n > 1:
            return False
    return True


# ------------------------------------------------------------------
# Queries
# ------------------------------------------------------------------


class TestQueries:
    def test_list_cars_in_seed_order(self, ledger: RentalLedger) -> None:
        assert [c.car_id for c in ledger.list_cars()] == ["C1", "C2", "C3"]

    def test_list_cars_is_snapshot(self, ledger: RentalLedger) -> None:
        cars = ledger.list_cars()
        assert isinstance(cars, tuple)
        assert len(ledger.list_cars()) == 3

    def test_find_car_by_id(self, ledger: RentalLedger, corolla: Car) -> None:
        assert ledger.find_car_by_id("C1") is corolla
        assert ledger.find_car_by_id("nope") is None

    def test_starts_empty(self, ledger: RentalLedger) -> None:
        assert ledger.list_customers() == ()
        assert ledger.list_rentals() == ()

    def test_duplicate_car_ids_rejected(self) -> None:
        with pytest.raises(DuplicateId):
            RentalLedger([Car("C1", "A", "B", 1.0), Car("C1", "C", "D", 2.0)])


# ------------------------------------------------------------------
# Customers
# ------------------------------------------------------------------


class TestCustomers:
    def test_add_customer(self, ledger: RentalLedger) -> None:
        ledger.add_customer(Customer("CUS1", "Alice"))
        assert ledger.list_customers() == (Customer("CUS1", "Alice"),)

    def test_duplicate_customer_id(self, ledger: RentalLedger) -> None:
        ledger.add_customer(Customer("CUS1", "Alice"))
        with pytest.raises(DuplicateId):
            ledger.add_customer(Customer("CUS1", "Bob"))
        assert len(ledger.list_customers()) == 1

    def test_generated_ids_increase(self, ledger: RentalLedger) -> None:
        first = ledger.new_customer("Alice")
        second = ledger.new_customer("Alice")
        assert (first.customer_id, second.customer_id) == ("CUS1", "CUS2")

    def test_generated_ids_skip_taken(self, ledger: RentalLedger) -> None:
        ledger.add_customer(Customer("CUS1", "Manual"))
        assert ledger.new_customer("Bob").customer_id == "CUS2"

    def test_custom_prefix(self) -> None:
        ledger = RentalLedger([], customer_prefix="R-")
        assert ledger.new_customer("Zed").customer_id == "R-1"


# ------------------------------------------------------------------
# Rent / return
# ------------------------------------------------------------------


class TestRentAndReturn:
    def test_corolla_scenario(self) -> None:
        car = Car("C1", "Toyota", "Corolla", 30.0)
        ledger = RentalLedger([car])
        alice = ledger.new_customer("Alice")
        ledger.add_customer(alice)

        rental = ledger.rent_car(car, alice, 3)

        assert ledger.list_rentals() == (rental,)
        assert (rental.car.car_id, rental.customer.name, rental.days) == ("C1", "Alice", 3)
        assert ledger.calculate_price(car, 3) == 90.0
        assert rental.total_price == 90.0
        assert car.available is False

        returned = ledger.return_car(car)
        assert returned is rental
        assert ledger.list_rentals() == ()
        assert car.available is True

    def test_rent_unavailable_car(self, ledger: RentalLedger, corolla: Car) -> None:
        ledger.rent_car(corolla, Customer("CUS1", "Alice"), 2)
        before = ledger.list_rentals()

        with pytest.raises(CarUnavailable):
            ledger.rent_car(corolla, Customer("CUS2", "Bob"), 5)

        assert ledger.list_rentals() == before
        assert corolla.available is False

    @pytest.mark.parametrize("days", [0, -1, 2.5, "3", True])
    def test_rent_invalid_days(self, ledger: RentalLedger, corolla: Car, days) -> None:
        with pytest.raises(InvalidDays):
            ledger.rent_car(corolla, Customer("CUS1", "Alice"), days)
        assert ledger.list_rentals() == ()
        assert corolla.available is True

    def test_invalid_days_checked_before_availability(self, ledger: RentalLedger, corolla: Car) -> None:
        ledger.rent_car(corolla, Customer("CUS1", "Alice"), 1)
        with pytest.raises(InvalidDays):
            ledger.rent_car(corolla, Customer("CUS2", "Bob"), 0)

    def test_rent_foreign_car(self, ledger: RentalLedger) -> None:
        stranger = Car("C1", "Toyota", "Corolla", 30.0)
        with pytest.raises(UnknownCar):
            ledger.rent_car(stranger, Customer("CUS1", "Alice"), 1)
        assert stranger.available is True

    def test_return_without_rental(self, ledger: RentalLedger, corolla: Car) -> None:
        with pytest.raises(NoActiveRental):
            ledger.return_car(corolla)
        assert corolla.available is True

    def test_return_twice(self, ledger: RentalLedger, corolla: Car) -> None:
        ledger.rent_car(corolla, Customer("CUS1", "Alice"), 1)
        ledger.return_car(corolla)
        with pytest.raises(NoActiveRental):
            ledger.return_car(corolla)
        assert corolla.available is True

    def test_find_rental_for_car(self, ledger: RentalLedger, corolla: Car) -> None:
        assert ledger.find_rental_for_car(corolla) is None
        rental = ledger.rent_car(corolla, Customer("CUS1", "Alice"), 1)
        assert ledger.find_rental_for_car(corolla) is rental

    def test_available_cars(self, ledger: RentalLedger, corolla: Car) -> None:
        ledger.rent_car(corolla, Customer("CUS1", "Alice"), 1)
        assert [c.car_id for c in ledger.list_available_cars()] == ["C2", "C3"]

    def test_invariant_holds_through_sequence(self, ledger: RentalLedger) -> None:
        c1, c2, c3 = ledger.list_cars()
        steps = [
            lambda: ledger.rent_car(c1, Customer("CUS1", "A"), 1),
            lambda: ledger.rent_car(c2, Customer("CUS2", "B"), 2),
            lambda: ledger.return_car(c1),
            lambda: ledger.rent_car(c3, Customer("CUS3", "C"), 3),
            lambda: ledger.rent_car(c1, Customer("CUS4", "D"), 4),
            lambda: ledger.return_car(c2),
            lambda: ledger.return_car(c3),
        ]
        for step in steps:
            step()
            assert _unavailable_iff_one_rental(ledger)
            ledger.check_invariants()

    def test_check_invariants_detects_drift(self, ledger: RentalLedger, corolla: Car) -> None:
        corolla.available = False
        with pytest.raises(LedgerInconsistent):
            ledger.check_invariants()

    def test_seeding_rented_car_rejected(self) -> None:
        with pytest.raises(LedgerInconsistent):
            RentalLedger([Car("C1", "Toyota", "Corolla", 30.0), Car("C9", "Kia", "Rio", 20.0, available=False)])

    def test_rent_commits_even_if_other_car_drifted(self, ledger: RentalLedger, corolla: Car) -> None:
        c2 = ledger.find_car_by_id("C2")
        c2.available = False  # flipped behind the ledger's back

        rental = ledger.rent_car(corolla, Customer("CUS1", "Alice"), 3)

        assert ledger.list_rentals() == (rental,)
        assert corolla.available is False

    def test_return_commits_even_if_other_car_drifted(self, ledger: RentalLedger, corolla: Car) -> None:
        ledger.rent_car(corolla, Customer("CUS1", "Alice"), 3)
        ledger.find_car_by_id("C2").available = False

        ledger.return_car(corolla)

        assert ledger.list_rentals() == ()
        assert corolla.available is True


# ------------------------------------------------------------------
# Pricing
# ------------------------------------------------------------------


class TestPricing:
    @pytest.mark.parametrize("days", [0, 1, 3, 7, 30, 365])
    def test_price_is_exact_product(self, days: int) -> None:
        car = Car("X", "Kia", "Rio", 45.5)
        assert calculate_price(car, days) == 45.5 * days
        assert RentalLedger.calculate_price(car, days) == 45.5 * days
        assert car.calculate_price(days) == 45.5 * days

    def test_negative_price_rejected(self) -> None:
        with pytest.raises(ValueError):
            Car("X", "Kia", "Rio", -1.0)

    def test_rental_rejects_non_positive_days(self, corolla: Car) -> None:
        with pytest.raises(InvalidDays):
            Rental(corolla, Customer("CUS1", "Alice"), 0)

    def test_car_identity_is_read_only(self, corolla: Car) -> None:
        with pytest.raises(AttributeError):
            corolla.car_id = "C9"  # type: ignore[misc]
