"""Tests for the error taxonomy."""

import pytest

from errors import (
    AuthorizationError,
    IntegrityAnomaly,
    ListingError,
    NotFoundError,
    StorageUnavailable,
    ValidationError,
)


@pytest.mark.parametrize(
    "exc,status_code",
    [
        (ValidationError("bad price", field="price"), 400),
        (NotFoundError("missing"), 404),
        (AuthorizationError("who are you", status_code=401), 401),
        (AuthorizationError("not allowed"), 403),
        (StorageUnavailable("db down"), 503),
        (IntegrityAnomaly(7, []), 500),
    ],
)
def test_status_codes(exc, status_code) -> None:
    assert isinstance(exc, ListingError)
    assert exc.status_code == status_code


def test_validation_error_carries_field() -> None:
    exc = ValidationError("Price must be positive", field="price")
    assert exc.field == "price"
    assert str(exc) == "Price must be positive"


def test_integrity_anomaly_message() -> None:
    exc = IntegrityAnomaly(12, ["apartment", "land"])

    assert exc.property_id == 12
    assert exc.tables == ["apartment", "land"]
    assert exc.message == "Property 12 has 2 detail rows (tables: apartment, land)"
    assert str(IntegrityAnomaly(3, [])) == "Property 3 has 0 detail rows (tables: none)"
