"""
Repository-layer exceptions for the donor and volunteer store.
"""

from __future__ import annotations


class StoreError(Exception):
    """Base exception for donor/volunteer store failures."""


class InvalidRecordError(StoreError, ValueError):
    """Raised when a record to write is missing required values."""


class DonorNotFoundError(StoreError):
    """Raised when an update targets a donor that does not exist."""


class VolunteerNotFoundError(StoreError):
    """Raised when an update targets a volunteer that does not exist."""
