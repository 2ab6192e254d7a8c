from datetime import date

import pytest

from lending.domain.models import Book, Dvd, Magazine, Member
from lending.domain.policies import StandardFinePolicy, StandardLoanPolicy
from lending.services.library_service import Library
from lending.utils.clock import FixedClock


@pytest.fixture
def clock():
    return FixedClock(date(2024, 1, 1))


@pytest.fixture
def library(clock):
    return Library(StandardLoanPolicy(14), StandardFinePolicy(50), clock=clock)


@pytest.fixture
def hobbit():
    return Book(title="The Hobbit", author="J.R.R. Tolkien", year=1937, categories=["Fantasy"])


@pytest.fixture
def alice():
    return Member(name="Alice Smith", email="alice@example.com")


@pytest.fixture
def bob():
    return Member(name="Bob Jones", email="bob@example.com")


@pytest.fixture
def stocked(library, hobbit, alice, bob):
    """Library with one book, one DVD, one magazine and two active members."""
    library.add_item(hobbit)
    library.add_item(Dvd(title="Alien", year=1979, duration=117, rating="18"))
    library.add_item(Magazine(title="Wired", publisher="Conde Nast", year=2023))
    library.add_member(alice)
    library.add_member(bob)
    return library
