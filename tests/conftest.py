from __future__ import annotations

import itertools
from collections.abc import Callable

import pytest

from pymileage.models.person import PersonRole
from pymileage.state.store import StateStore


@pytest.fixture
def id_factory() -> Callable[[], str]:
    counter = itertools.count(1)
    return lambda: f"id-{next(counter)}"


@pytest.fixture
def store() -> StateStore:
    return StateStore()


@pytest.fixture
def marco(store: StateStore):
    return store.add_person(name="Marco", surname="Rossi", role=PersonRole.TEACHER, email="marco.rossi@itfv.it")


@pytest.fixture
def fiat(store: StateStore, marco):
    return store.add_vehicle(person_id=marco.id, make="Fiat", model="500", plate="AB123CD", reimbursement_rate=0.35)
