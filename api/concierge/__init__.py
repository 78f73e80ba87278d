"""Concierge operations backend: inbox ranking and payout settlement core."""

__version__ = '0.1.0'
