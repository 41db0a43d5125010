"""Shared fixtures: a small seeded ledger and a desk over it."""

from __future__ import annotations

import pytest

from rental_desk import RentalDesk
from rental_ledger import RentalLedger
from rental_rules import Car


@pytest.fixture
def corolla() -> Car:
    return Car("C1", "Toyota", "Corolla", 30.0)


@pytest.fixture
def ledger(corolla: Car) -> RentalLedger:
    return RentalLedger([corolla, Car("C2", "Honda", "Accord", 70.0), Car("C3", "Ford", "Focus", 45.5)])


@pytest.fixture
def desk(ledger: RentalLedger) -> RentalDesk:
    return RentalDesk(ledger)
