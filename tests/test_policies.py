"""Tests for the due date and fine policies."""
from datetime import date, timedelta

import pytest

from lending.domain.policies import (
    FinePolicy,
    LoanPolicy,
    StandardFinePolicy,
    StandardLoanPolicy,
)


def test_due_date_is_loan_date_plus_loan_days():
    policy = StandardLoanPolicy(14)
    assert policy.calculate_due_date(date(2024, 1, 1)) == date(2024, 1, 15)


def test_due_date_crosses_month_and_leap_day():
    policy = StandardLoanPolicy(14)
    start = date(2024, 2, 20)
    for offset in range(30):
        loan_date = start + timedelta(days=offset)
        assert policy.calculate_due_date(loan_date) == loan_date + timedelta(days=14)
    assert policy.calculate_due_date(date(2024, 2, 20)) == date(2024, 3, 5)


def test_zero_loan_days_is_due_same_day():
    assert StandardLoanPolicy(0).calculate_due_date(date(2024, 5, 5)) == date(2024, 5, 5)


def test_due_date_requires_loan_date():
    with pytest.raises(ValueError):
        StandardLoanPolicy(14).calculate_due_date(None)


def test_negative_loan_days_rejected():
    with pytest.raises(ValueError):
        StandardLoanPolicy(-1)


def test_fine_is_days_late_times_rate():
    policy = StandardFinePolicy(50)
    assert policy.calculate_fine(date(2024, 1, 15), date(2024, 1, 20)) == 250


def test_no_fine_on_or_before_due_date():
    policy = StandardFinePolicy(50)
    due = date(2024, 1, 15)
    assert policy.calculate_fine(due, due) == 0
    assert policy.calculate_fine(due, date(2024, 1, 1)) == 0
    for days in range(-40, 40):
        assert policy.calculate_fine(due, due + timedelta(days=days)) >= 0


@pytest.mark.parametrize("rate", [0, -10])
def test_fine_rate_must_be_positive(rate):
    with pytest.raises(ValueError):
        StandardFinePolicy(rate)


def test_fine_requires_both_dates():
    policy = StandardFinePolicy(50)
    with pytest.raises(ValueError):
        policy.calculate_fine(None, date(2024, 1, 1))
    with pytest.raises(ValueError):
        policy.calculate_fine(date(2024, 1, 1), None)


def test_standard_policies_implement_interfaces():
    assert isinstance(StandardLoanPolicy(7), LoanPolicy)
    assert isinstance(StandardFinePolicy(10), FinePolicy)
    with pytest.raises(TypeError):
        LoanPolicy()


@pytest.mark.parametrize("loan_days", ["fourteen", None, [14], True, 1.5])
def test_loan_days_must_be_a_whole_number(loan_days):
    with pytest.raises(ValueError):
        StandardLoanPolicy(loan_days)


def test_numeric_strings_are_accepted():
    assert StandardLoanPolicy("14").loan_days == 14
    assert StandardFinePolicy("50").pence_per_day == 50
    with pytest.raises(ValueError):
        StandardFinePolicy("free")
