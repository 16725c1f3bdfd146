"""Tests for the property and type-detail tables."""

from decimal import Decimal

import pytest

from errors import NotFoundError, ValidationError
from models import DETAIL_MODELS, Apartment, Land, Property
from models.property import PropertyStatus, PropertyType
from services.property_store import PropertyStore, validate_price


def _insert(db, owner_id, price=1000, status="available", property_type=PropertyType.LAND) -> Property:
    return PropertyStore.insert_property(db, owner_id, "Plot 7", price, status, "Hill Road", property_type)


class TestInsertProperty:
    def test_flushes_and_assigns_id(self, db, member) -> None:
        prop = _insert(db, member.user_id, price="1500.25")

        assert prop.property_id is not None
        assert prop.price == Decimal("1500.25")
        assert prop.status == PropertyStatus.AVAILABLE
        assert prop.property_type == PropertyType.LAND

    def test_does_not_commit(self, db, member) -> None:
        _insert(db, member.user_id)
        db.rollback()
        assert db.query(Property).count() == 0

    @pytest.mark.parametrize("price", [0, -1, "-0.01", "NaN", "Infinity"])
    def test_rejects_non_positive_price(self, db, member, price) -> None:
        with pytest.raises(ValidationError) as exc_info:
            _insert(db, member.user_id, price=price)
        assert exc_info.value.field == "price"

    def test_rejects_non_numeric_price(self, db, member) -> None:
        with pytest.raises(ValidationError):
            _insert(db, member.user_id, price="lots")

    @pytest.mark.parametrize("status", ["sold", "pending", None])
    def test_rejects_unlistable_status(self, db, member, status) -> None:
        with pytest.raises(ValidationError) as exc_info:
            _insert(db, member.user_id, status=status)
        assert exc_info.value.field == "status"

    def test_accepts_rented(self, db, member) -> None:
        assert _insert(db, member.user_id, status="rented").status == PropertyStatus.RENTED

    def test_unknown_owner(self, db) -> None:
        with pytest.raises(NotFoundError):
            _insert(db, 404)


class TestDetails:
    def test_insert_detail_uses_mapped_table(self, db, member) -> None:
        prop = _insert(db, member.user_id, property_type=PropertyType.APARTMENT)

        row = PropertyStore.insert_detail(
            db, prop.property_id, PropertyType.APARTMENT, {"rooms": 2, "bathrooms": 1, "carpet_area": 800}
        )
        db.commit()

        assert isinstance(row, Apartment)
        assert PropertyStore.detail_tables_for(db, prop.property_id) == [PropertyType.APARTMENT]
        assert PropertyStore.get_detail(db, prop).rooms == 2

    def test_get_detail_missing(self, db, member) -> None:
        prop = _insert(db, member.user_id)
        db.commit()
        assert PropertyStore.get_detail(db, prop) is None

    def test_delete_details_counts_every_table(self, db, member) -> None:
        prop = _insert(db, member.user_id)
        db.add(Land(property_id=prop.property_id, area=100))
        db.add(Apartment(property_id=prop.property_id, rooms=1, bathrooms=1, carpet_area=300))
        db.commit()

        assert PropertyStore.delete_details(db, prop.property_id) == 2
        db.commit()
        for model in DETAIL_MODELS.values():
            assert db.query(model).count() == 0

    def test_cascade_removes_detail_with_property(self, db, member) -> None:
        prop = _insert(db, member.user_id)
        PropertyStore.insert_detail(db, prop.property_id, PropertyType.LAND, {"area": 100, "zone": None})
        db.commit()

        PropertyStore.delete_property(db, prop.property_id)
        db.commit()

        assert db.query(Land).count() == 0


class TestDeleteAndStatus:
    def test_delete_missing_property(self, db) -> None:
        with pytest.raises(NotFoundError):
            PropertyStore.delete_property(db, 77)

    def test_update_status(self, db, member) -> None:
        prop = _insert(db, member.user_id)
        db.commit()

        PropertyStore.update_status(db, prop.property_id, PropertyStatus.SOLD)
        db.commit()

        assert PropertyStore.get_property(db, prop.property_id).status == PropertyStatus.SOLD

    def test_update_status_unknown_value(self, db, member) -> None:
        prop = _insert(db, member.user_id)
        with pytest.raises(ValidationError):
            PropertyStore.update_status(db, prop.property_id, "demolished")

    def test_update_status_missing_property(self, db) -> None:
        with pytest.raises(NotFoundError):
            PropertyStore.update_status(db, 55, "sold")

    def test_get_property_for_update(self, db, member) -> None:
        prop = _insert(db, member.user_id)

        assert PropertyStore.get_property(db, prop.property_id, for_update=True) is prop
        assert PropertyStore.get_property(db, prop.property_id + 1, for_update=True) is None


class TestValidatePrice:
    @pytest.mark.parametrize("price", ["0.01", "12.5", "100.00", "9999999999.99", 250000])
    def test_fits_numeric_12_2(self, price) -> None:
        assert validate_price(price) == Decimal(str(price))

    @pytest.mark.parametrize("price", ["0.004", "19.999", "0.001"])
    def test_rejects_more_than_two_decimals(self, price) -> None:
        with pytest.raises(ValidationError, match="decimal places") as exc_info:
            validate_price(price)
        assert exc_info.value.field == "price"

    @pytest.mark.parametrize("price", ["10000000000", "1e13", "123456789012345678901234567890"])
    def test_rejects_more_than_ten_integer_digits(self, price) -> None:
        with pytest.raises(ValidationError, match="below") as exc_info:
            validate_price(price)
        assert exc_info.value.field == "price"

    def test_insert_property_uses_the_same_rules(self, db, member) -> None:
        with pytest.raises(ValidationError):
            _insert(db, member.user_id, price="0.004")
