"""Retirement bucket projections for couples."""

__version__ = "0.1.0"
