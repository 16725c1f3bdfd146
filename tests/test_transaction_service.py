"""Tests for sale recording."""

from datetime import datetime
from decimal import Decimal

import pytest

from errors import NotFoundError, ValidationError
from models import SaleTransaction
from models.property import PropertyStatus
from services.property_store import PropertyStore
from services.transaction_service import TransactionService


class TestRecordSale:
    def test_records_and_marks_sold(self, db, make_listing, admin) -> None:
        prop = make_listing(status="rented")
        when = datetime(2026, 10, 1, 12, 0)

        sale = TransactionService.record_sale(db, admin.user_id, prop.property_id, Decimal("240000"), when)

        assert sale.transaction_id is not None
        assert sale.date == when
        assert PropertyStore.get_property(db, prop.property_id).status == PropertyStatus.SOLD

    def test_already_sold(self, db, make_listing, admin) -> None:
        prop = make_listing()
        TransactionService.record_sale(db, admin.user_id, prop.property_id, Decimal("1"))

        with pytest.raises(ValidationError):
            TransactionService.record_sale(db, admin.user_id, prop.property_id, Decimal("1"))
        assert db.query(SaleTransaction).count() == 1

    def test_unknown_buyer(self, db, make_listing) -> None:
        prop = make_listing()

        with pytest.raises(NotFoundError):
            TransactionService.record_sale(db, 9999, prop.property_id, Decimal("1"))
        assert PropertyStore.get_property(db, prop.property_id).status == PropertyStatus.AVAILABLE

    def test_unknown_property(self, db, admin) -> None:
        with pytest.raises(NotFoundError):
            TransactionService.record_sale(db, admin.user_id, 9999, Decimal("1"))
        assert db.query(SaleTransaction).count() == 0

    def test_deleting_listing_removes_sales(self, db, make_listing, admin) -> None:
        from services.listing_command import ListingCommandEngine

        prop = make_listing()
        TransactionService.record_sale(db, admin.user_id, prop.property_id, Decimal("5"))

        ListingCommandEngine.delete_listing(db, prop.property_id)

        assert db.query(SaleTransaction).count() == 0

    def test_property_row_is_locked_for_the_sale(self, db, make_listing, admin, monkeypatch) -> None:
        prop = make_listing()
        real_get_property = PropertyStore.get_property
        lock_requests = []

        def recording_get_property(session, property_id, for_update=False):
            lock_requests.append(for_update)
            return real_get_property(session, property_id, for_update=for_update)

        monkeypatch.setattr(PropertyStore, "get_property", staticmethod(recording_get_property))

        TransactionService.record_sale(db, admin.user_id, prop.property_id, Decimal("10"))

        assert lock_requests[0] is True
