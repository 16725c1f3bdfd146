"""
Listing Query Engine - read-side views over properties, details and images.

Every view that shows one image per property uses the representative image
(lowest image_id), and properties without images still appear with
image_url = None.
"""
import logging
from typing import List, Tuple

from sqlalchemy import exists, or_
from sqlalchemy.orm import Session

from database import with_retry
from errors import IntegrityAnomaly, NotFoundError, ValidationError
from models import Property, PropertyImage, DETAIL_MODELS
from models.property import PropertyType
from models.property_detail import detail_to_dict
from schemas.property import ListingFilter, PropertySummary
from services.image_store import ImageStore
from services.property_store import PropertyStore

logger = logging.getLogger(__name__)


def _property_type(value) -> PropertyType:
     try:
          return PropertyType(value)
     except ValueError:
          names = ", ".join(t.value for t in PropertyType)
          raise ValidationError(f"Invalid property type '{value}': must be one of {names}", field="type")


def _escape_like(term: str) -> str:
     return term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def _with_representative_image(query):
     first_image = ImageStore.representative_image_subquery()
     return (
          query
          .outerjoin(first_image, first_image.c.property_id == Property.property_id)
          .outerjoin(PropertyImage, PropertyImage.image_id == first_image.c.image_id)
     )


def _summaries(rows) -> List[PropertySummary]:
     return [PropertySummary(**prop.to_dict(), image_url=image_url) for prop, image_url in rows]


class ListingQueryEngine:
     """Service class for listing read queries."""

     @staticmethod
     @with_retry()
     def list_properties(db: Session, filters: ListingFilter = None) -> List[PropertySummary]:
          """
          All properties matching the filters, each with its representative image.

          Filters combine with AND; a missing key adds no constraint, so an
          empty filter returns every property whatever its status.
          """
          filters = filters or ListingFilter()
          query = _with_representative_image(db.query(Property, PropertyImage.image_url))

          if filters.status is not None:
               query = query.filter(Property.status == filters.status)
          if filters.search:
               pattern = f"%{_escape_like(filters.search)}%"
               query = query.filter(or_(
                    Property.title.ilike(pattern, escape="\\"),
                    Property.address.ilike(pattern, escape="\\")
               ))
          if filters.type is not None:
               model = DETAIL_MODELS[_property_type(filters.type)]
               query = query.filter(exists().where(model.property_id == Property.property_id))
          if filters.price_min is not None:
               query = query.filter(Property.price >= filters.price_min)
          if filters.price_max is not None:
               query = query.filter(Property.price <= filters.price_max)

          return _summaries(query.order_by(Property.property_id).all())

     @staticmethod
     @with_retry()
     def list_by_type(db: Session, property_type) -> List[dict]:
          """
          Properties of one type with their detail fields and representative image.

          Inner join on the detail table, so only properties that have a row
          there are returned.
          """
          property_type = _property_type(property_type)
          model = DETAIL_MODELS[property_type]
          query = _with_representative_image(
               db.query(Property, model, PropertyImage.image_url)
               .join(model, model.property_id == Property.property_id)
          )

          listings = []
          for prop, detail, image_url in query.order_by(Property.property_id).all():
               listing = prop.to_dict()
               listing.update(detail_to_dict(detail))
               listing["type"] = property_type.value
               listing["image_url"] = image_url
               listings.append(listing)
          return listings

     @staticmethod
     @with_retry()
     def get_property_detail(db: Session, property_id: int) -> dict:
          """
          A property with its type and detail fields merged in.

          Raises:
               NotFoundError: the property does not exist

          A property with no detail row is still returned (type None, no
          detail fields); the anomaly is logged at ERROR.
          """
          prop = PropertyStore.get_property(db, property_id)
          if prop is None:
               raise NotFoundError(f"Property with ID {property_id} not found")

          listing = prop.to_dict()
          detail = PropertyStore.get_detail(db, prop)
          if detail is None:
               found = PropertyStore.detail_tables_for(db, property_id)
               anomaly = IntegrityAnomaly(property_id, [t.value for t in found])
               logger.error("Integrity anomaly: %s (declared type %s)", anomaly, prop.property_type.value)
               listing["type"] = None
          else:
               listing.update(detail_to_dict(detail))
               listing["type"] = prop.property_type.value

          listing["image_url"] = ImageStore.representative_image(db, property_id)
          return listing

     @staticmethod
     @with_retry()
     def list_by_owner(db: Session, owner_id: int) -> List[PropertySummary]:
          """Properties owned by owner_id, each with its representative image."""
          query = _with_representative_image(
               db.query(Property, PropertyImage.image_url)
               .filter(Property.owner_id == owner_id)
          )
          return _summaries(query.order_by(Property.property_id).all())

     @staticmethod
     @with_retry()
     def find_integrity_anomalies(db: Session) -> List[Tuple[int, List[PropertyType]]]:
          """
          Properties whose detail rows don't match their declared type.

          Returns (property_id, types found) for every property with zero
          detail rows, more than one, or one in the wrong table.
          """
          ids_by_type = {
               property_type: {row.property_id for row in db.query(model.property_id).all()}
               for property_type, model in DETAIL_MODELS.items()
          }

          anomalies = []
          for prop_id, declared in db.query(Property.property_id, Property.property_type).order_by(Property.property_id):
               found = [t for t, ids in ids_by_type.items() if prop_id in ids]
               if found != [declared]:
                    anomalies.append((prop_id, found))
          for prop_id, found in anomalies:
               logger.error("Integrity anomaly: %s", IntegrityAnomaly(prop_id, [t.value for t in found]))
          return anomalies
