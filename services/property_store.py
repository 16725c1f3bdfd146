"""
Property Store - the properties table and its four type-detail tables.

Methods take the caller's Session and never commit; the caller decides the
transaction boundary (see database.atomic).
"""
import logging
from decimal import Decimal, InvalidOperation
from typing import Optional

from sqlalchemy.orm import Session

from errors import NotFoundError, ValidationError
from models import Property, User, DETAIL_MODELS
from models.property import LISTABLE_STATUSES, PropertyStatus, PropertyType

logger = logging.getLogger(__name__)


def _as_decimal(value, field: str) -> Decimal:
     try:
          return Decimal(str(value))
     except (InvalidOperation, ValueError, TypeError):
          raise ValidationError(f"{field} must be a number", field=field)


# properties.price is Numeric(12, 2)
PRICE_QUANTUM = Decimal("0.01")
PRICE_LIMIT = Decimal("1E10")


def validate_price(value) -> Decimal:
     """
     Parse a price and check it fits the price column.

     Raises:
          ValidationError: not a number, not positive, more than 2 decimal
               places or more than 10 integer digits
     """
     price = _as_decimal(value, "price")
     if not price.is_finite() or price <= 0:
          raise ValidationError("Price must be positive", field="price")
     if price >= PRICE_LIMIT:
          raise ValidationError("Price must be below 10,000,000,000", field="price")
     if price != price.quantize(PRICE_QUANTUM):
          raise ValidationError("Price can have at most 2 decimal places", field="price")
     return price


def _as_status(value, allowed=tuple(PropertyStatus)) -> PropertyStatus:
     try:
          status = PropertyStatus(value)
     except ValueError:
          status = None
     if status not in allowed:
          names = ", ".join(s.value for s in allowed)
          raise ValidationError(f"Invalid status '{value}': must be one of {names}", field="status")
     return status


class PropertyStore:
     """Persistence for Property rows and their type-detail rows."""

     @staticmethod
     def owner_exists(db: Session, owner_id: int) -> bool:
          return db.query(User.user_id).filter(User.user_id == owner_id).first() is not None

     @staticmethod
     def insert_property(
          db: Session,
          owner_id: int,
          title: str,
          price,
          status,
          address: str,
          property_type: PropertyType
     ) -> Property:
          """
          Insert a parent property row.

          Flushes so property_id is populated; does not commit.

          Raises:
               ValidationError: price rejected by validate_price or status not
                    available/rented
               NotFoundError: owner_id is not an existing user
          """
          price = validate_price(price)
          status = _as_status(status, LISTABLE_STATUSES)

          if not PropertyStore.owner_exists(db, owner_id):
               raise NotFoundError(f"User with ID {owner_id} not found")

          prop = Property(
               owner_id=owner_id,
               title=title,
               price=price,
               status=status,
               address=address,
               property_type=PropertyType(property_type)
          )
          db.add(prop)
          db.flush()
          return prop

     @staticmethod
     def insert_detail(db: Session, property_id: int, property_type: PropertyType, details: dict):
          """Insert the single detail row in the table mapped from property_type."""
          model = DETAIL_MODELS[PropertyType(property_type)]
          row = model(property_id=property_id, **details)
          db.add(row)
          db.flush()
          return row

     @staticmethod
     def get_property(db: Session, property_id: int, for_update: bool = False) -> Optional[Property]:
          """The property row, or None. for_update locks it until the transaction ends."""
          query = db.query(Property).filter(Property.property_id == property_id)
          if for_update:
               query = query.with_for_update()
          return query.first()

     @staticmethod
     def get_detail(db: Session, prop: Property):
          """The detail row for the property's declared type, or None."""
          model = DETAIL_MODELS[prop.property_type]
          return db.query(model).filter(model.property_id == prop.property_id).first()

     @staticmethod
     def detail_tables_for(db: Session, property_id: int) -> list:
          """Every PropertyType whose detail table holds a row for this id."""
          return [
               property_type
               for property_type, model in DETAIL_MODELS.items()
               if db.query(model.property_id).filter(model.property_id == property_id).first() is not None
          ]

     @staticmethod
     def delete_details(db: Session, property_id: int) -> int:
          """
          Delete from all four detail tables.

          At most one should match; returns the number of rows removed.
          """
          removed = 0
          for model in DETAIL_MODELS.values():
               removed += (
                    db.query(model)
                    .filter(model.property_id == property_id)
                    .delete(synchronize_session=False)
               )
          return removed

     @staticmethod
     def delete_property(db: Session, property_id: int) -> None:
          """
          Delete a property row.

          Raises:
               NotFoundError: no such property
          """
          deleted = (
               db.query(Property)
               .filter(Property.property_id == property_id)
               .delete(synchronize_session=False)
          )
          if not deleted:
               raise NotFoundError(f"Property with ID {property_id} not found")

     @staticmethod
     def update_status(db: Session, property_id: int, new_status) -> None:
          """
          Change a property's status (a sale marks it SOLD).

          Raises:
               NotFoundError: no such property
               ValidationError: unknown status
          """
          status = _as_status(new_status)
          prop = PropertyStore.get_property(db, property_id)
          if prop is None:
               raise NotFoundError(f"Property with ID {property_id} not found")
          prop.status = status
          db.flush()
          logger.info("Property %s status -> %s", property_id, status.value)
