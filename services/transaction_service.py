"""
Transaction Service - records a sale and marks the property SOLD.

Payment itself happens elsewhere; this only writes the ledger row.
"""
import logging
from datetime import datetime
from decimal import Decimal
from typing import Optional

from sqlalchemy.orm import Session

from database import atomic
from errors import NotFoundError, ValidationError
from models import SaleTransaction, User
from models.property import PropertyStatus
from services.property_store import PropertyStore

logger = logging.getLogger(__name__)


class TransactionService:
     """Service class for sale recording."""

     @staticmethod
     def record_sale(
          db: Session,
          buyer_id: int,
          property_id: int,
          amount: Decimal,
          date: Optional[datetime] = None
     ) -> SaleTransaction:
          """
          Insert a sale row and set the property's status to SOLD, atomically.

          Raises:
               NotFoundError: buyer or property does not exist
               ValidationError: property already sold
          """
          with atomic(db):
               if db.query(User.user_id).filter(User.user_id == buyer_id).first() is None:
                    raise NotFoundError(f"User with ID {buyer_id} not found")
               # Row lock so two concurrent sales cannot both see it unsold
               prop = PropertyStore.get_property(db, property_id, for_update=True)
               if prop is None:
                    raise NotFoundError(f"Property with ID {property_id} not found")
               if prop.status == PropertyStatus.SOLD:
                    raise ValidationError("Property already sold", field="property_id")

               sale = SaleTransaction(
                    buyer_id=buyer_id,
                    property_id=property_id,
                    amount=amount,
                    date=date or datetime.now()
               )
               db.add(sale)
               db.flush()
               PropertyStore.update_status(db, property_id, PropertyStatus.SOLD)

          logger.info("Recorded sale %s of property %s to buyer %s", sale.transaction_id, property_id, buyer_id)
          return sale
