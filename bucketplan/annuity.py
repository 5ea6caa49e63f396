"""Annuity and amortization formulas."""

from __future__ import annotations


def amortized_payment(principal: float, periodic_rate: float, periods: float) -> float:
    """Level payment that retires ``principal`` over ``periods`` at ``periodic_rate``.

    Horizons shorter than one period pay the principal back as an immediate lump
    sum. A zero rate falls back to straight-line division.
    """
    if periods < 1.0:
        return principal
    if periodic_rate == 0:
        return principal / periods
    return principal * periodic_rate / (1 - (1 + periodic_rate) ** (-periods))


def contribution_future_value(annual_contribution: float, rate: float, years: float) -> float:
    """Future value of an ordinary annuity of yearly deposits."""
    if rate > 0:
        return annual_contribution * (((1 + rate) ** years - 1) / rate)
    return annual_contribution * years
