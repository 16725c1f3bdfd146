"""
Error taxonomy for the listing core.

Routers translate these into HTTP responses (see main.py); services raise
them and never coerce a failure into a success value.
"""
from typing import Optional, Sequence


class ListingError(Exception):
     """Base exception for all listing errors."""

     status_code = 500

     def __init__(self, message: str):
          super().__init__(message)
          self.message = message


class ValidationError(ListingError):
     """Bad input shape or range. User-fixable."""

     status_code = 400

     def __init__(self, message: str, field: Optional[str] = None):
          super().__init__(message)
          self.field = field


class NotFoundError(ListingError):
     """Referenced entity does not exist."""

     status_code = 404


class AuthorizationError(ListingError):
     """Caller is missing or lacks the required role (401 / 403)."""

     def __init__(self, message: str, status_code: int = 403):
          super().__init__(message)
          self.status_code = status_code


class StorageUnavailable(ListingError):
     """Transient database failure (timeout, lost connection). Retryable."""

     status_code = 503


class IntegrityAnomaly(ListingError):
     """A property with zero or more than one type-detail row."""

     def __init__(self, property_id: int, tables: Sequence[str]):
          found = ", ".join(tables) if tables else "none"
          super().__init__(
               f"Property {property_id} has {len(tables)} detail rows (tables: {found})"
          )
          self.property_id = property_id
          self.tables = list(tables)
