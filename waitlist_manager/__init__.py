"""Venue waitlist and reservation manager."""

__version__ = "1.0.0"
