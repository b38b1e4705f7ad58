"""
Exceptions raised by the record store and the gateway.

A missing row is not an error: update and delete report it by
returning ``0`` rows affected.
"""


class PetCatalogError(Exception):
    """Base class for all pet catalog errors."""


class ValidationError(PetCatalogError, ValueError):
    """A pet field, projection or sort order failed validation."""


class InvalidAddressError(PetCatalogError, ValueError):
    """An address names an unknown authority or collection, or is malformed."""


class CursorClosedError(PetCatalogError, RuntimeError):
    """A cursor was used after ``close()``."""
