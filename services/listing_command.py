"""
Listing Command Engine - validated create/delete of whole listings.

A listing spans three tables (properties, one detail table, property_images)
plus files on disk. Each command runs its writes in a single transaction so
readers never see a property without its detail row or the reverse.
"""
import logging
from typing import Optional, Sequence

from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.orm import Session

from database import atomic, storage_guard
from errors import NotFoundError, ValidationError
from models import Property
from models.property import LISTABLE_STATUSES, PropertyStatus, PropertyType
from schemas.property import DETAIL_SCHEMAS, ImageUpload
from services.image_store import ImageStore, validate_uploads
from services.property_store import PropertyStore, validate_price

logger = logging.getLogger(__name__)


def _require_text(value, field: str) -> str:
     if not isinstance(value, str) or not value.strip():
          raise ValidationError(f"{field} is required", field=field)
     return value.strip()


def _validate_status(value) -> PropertyStatus:
     try:
          status = PropertyStatus(value)
     except ValueError:
          status = None
     if status not in LISTABLE_STATUSES:
          raise ValidationError("Invalid status: must be available or rented", field="status")
     return status


def _validate_type(value) -> PropertyType:
     try:
          return PropertyType(value)
     except ValueError:
          raise ValidationError("Invalid property type", field="type")


def _validate_details(property_type: PropertyType, details) -> dict:
     """
     Check type_details against the schema for property_type.

     Returns the normalized detail fields; unknown keys are dropped.
     """
     if not isinstance(details, dict):
          raise ValidationError("details must be an object", field="details")
     schema = DETAIL_SCHEMAS[property_type]
     try:
          return schema.model_validate(details).model_dump()
     except PydanticValidationError as exc:
          first = exc.errors()[0]
          field = str(first["loc"][0]) if first["loc"] else "details"
          raise ValidationError(
               f"{property_type.value.capitalize()} requires a valid {field}: {first['msg']}",
               field=field
          )


def _owner_key(owner_id) -> int:
     try:
          return int(owner_id)
     except (TypeError, ValueError):
          raise NotFoundError(f"User with ID {owner_id} not found")


class ListingCommandEngine:
     """Service class for the listing create/delete lifecycle."""

     @staticmethod
     def create_listing(
          db: Session,
          owner_id,
          title: str,
          price,
          status,
          address: str,
          property_type,
          type_details: dict,
          images: Optional[Sequence[ImageUpload]] = None
     ) -> Property:
          """
          Create a property, its detail row and its images atomically.

          Args:
               db: SQLAlchemy database session
               owner_id: ID of the listing user (trusted, from the session)
               title, price, status, address: parent-table fields
               property_type: apartment, bungalow, commercial or land
               type_details: detail fields for property_type
               images: up to 5 image payloads, stored in the given order

          Returns:
               The created Property (detail and images not merged)

          Raises:
               ValidationError: first invalid field, bad details or bad images
               NotFoundError: owner_id is not an existing user
               StorageUnavailable: the database could not be reached
          """
          title = _require_text(title, "title")
          price = validate_price(price)
          status = _validate_status(status)
          address = _require_text(address, "address")
          property_type = _validate_type(property_type)
          details = _validate_details(property_type, type_details)
          images = list(images or [])
          validate_uploads(images)

          owner_id = _owner_key(owner_id)
          with storage_guard():
               owner_found = PropertyStore.owner_exists(db, owner_id)
          if not owner_found:
               raise NotFoundError(f"User with ID {owner_id} not found")

          written = []
          try:
               with atomic(db):
                    prop = PropertyStore.insert_property(
                         db, owner_id, title, price, status, address, property_type
                    )
                    PropertyStore.insert_detail(db, prop.property_id, property_type, details)
                    ImageStore.attach_images(db, prop.property_id, images, written=written)
          except Exception:
               # Rows are rolled back; files written so far would be orphans
               ImageStore.remove_files(written)
               raise

          logger.info(
               "Created %s listing %s for owner %s with %d image(s)",
               property_type.value, prop.property_id, owner_id, len(written)
          )
          return prop

     @staticmethod
     def delete_listing(db: Session, property_id: int) -> None:
          """
          Delete a property with its images and detail row.

          Image files are removed after the commit, best-effort.

          Raises:
               NotFoundError: the property does not exist
          """
          with atomic(db):
               if PropertyStore.get_property(db, property_id) is None:
                    raise NotFoundError(f"Property with ID {property_id} not found")
               image_urls = ImageStore.delete_all_images(db, property_id, cleanup_files=False)
               details_removed = PropertyStore.delete_details(db, property_id)
               PropertyStore.delete_property(db, property_id)

          if details_removed != 1:
               logger.warning("Property %s had %d detail rows at deletion", property_id, details_removed)
          ImageStore.remove_files(image_urls)
          logger.info("Deleted listing %s (%d image(s))", property_id, len(image_urls))
