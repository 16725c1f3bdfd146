"""
Property listing API routes.

Browsing is public. Creating a listing trusts the owner_id sent by the
client (checked only for existence); deleting requires the owner or admin role.
"""
import json
from typing import Optional, List
from fastapi import APIRouter, Depends, File, Form, Query, UploadFile, status as http_status
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.orm import Session

from database import get_session, storage_guard
from dependencies import require_role
from errors import NotFoundError, ValidationError
from models import User
from models.property import PropertyType
from models.user import ROLE_ADMIN, ROLE_OWNER
from schemas.property import (
     ImageUpload,
     ListingFilter,
     MessageResponse,
     PropertyDetailResponse,
     PropertyImageResponse,
     PropertyResponse,
     PropertySummary,
)
from services.image_store import MAX_IMAGE_BYTES, MAX_IMAGES, ImageStore, validate_uploads
from services.listing_command import ListingCommandEngine
from services.listing_query import ListingQueryEngine
from services.property_store import PropertyStore

router = APIRouter(prefix="/api", tags=["properties"])


# ---------------------------------------------------------------------------
# Request translation helpers
# ---------------------------------------------------------------------------

def _build_filter(**params) -> ListingFilter:
     """Turn query-string values into a ListingFilter; blank values are ignored."""
     values = {k: v for k, v in params.items() if v not in (None, "")}
     try:
          return ListingFilter(**values)
     except PydanticValidationError as exc:
          first = exc.errors()[0]
          field = str(first["loc"][0])
          raise ValidationError(f"Invalid {field}: {first['msg']}", field=field)


def _parse_details(details: Optional[str]) -> dict:
     if not details:
          return {}
     try:
          parsed = json.loads(details)
     except json.JSONDecodeError:
          raise ValidationError("details must be a JSON object", field="details")
     if not isinstance(parsed, dict):
          raise ValidationError("details must be a JSON object", field="details")
     return parsed


def _read_uploads(images: List[UploadFile]) -> List[ImageUpload]:
     """
     Read multipart images, rejecting bad batches before any file is stored.

     Each file is read at most one byte past the limit.
     """
     images = [image for image in images if image.filename]
     if len(images) > MAX_IMAGES:
          raise ValidationError(f"At most {MAX_IMAGES} images are allowed, got {len(images)}", field="images")

     uploads = []
     for image in images:
          if not (image.content_type or "").startswith("image/"):
               raise ValidationError("Only images are allowed", field="images")
          data = image.file.read(MAX_IMAGE_BYTES + 1)
          uploads.append(ImageUpload(filename=image.filename, content_type=image.content_type, data=data))
     validate_uploads(uploads)
     return uploads


# ---------------------------------------------------------------------------
# Listings
# ---------------------------------------------------------------------------

@router.get(
     "/properties",
     response_model=List[PropertySummary],
     summary="List properties with filters"
)
def list_properties(
     status: Optional[str] = Query(None, description="available, rented or sold"),
     search: Optional[str] = Query(None, description="Substring of title or address"),
     type: Optional[str] = Query(None, description="apartment, bungalow, commercial or land"),
     price_min: Optional[str] = Query(None, description="Minimum price (inclusive)"),
     price_max: Optional[str] = Query(None, description="Maximum price (inclusive)"),
     db: Session = Depends(get_session)
):
     """
     Retrieve properties, each with its first image.

     Filters combine with AND; omit a filter to leave it unconstrained.
     """
     filters = _build_filter(
          status=status, search=search, type=type, price_min=price_min, price_max=price_max
     )
     return ListingQueryEngine.list_properties(db, filters)


@router.get(
     "/properties/{property_id}",
     response_model=PropertyDetailResponse,
     summary="Get a property with its type details"
)
def get_property(property_id: int, db: Session = Depends(get_session)):
     return ListingQueryEngine.get_property_detail(db, property_id)


@router.post(
     "/properties",
     response_model=PropertyResponse,
     status_code=http_status.HTTP_201_CREATED,
     summary="Create a listing"
)
def create_property(
     owner_id: str = Form(""),
     title: str = Form(""),
     price: str = Form(""),
     status: str = Form(""),
     address: str = Form(""),
     type: str = Form(""),
     details: Optional[str] = Form(None, description="JSON object of type-specific fields"),
     images: List[UploadFile] = File([]),
     db: Session = Depends(get_session)
):
     """
     Create a property, its type details and up to 5 images in one step.

     - **details**: JSON, e.g. {"rooms": 2, "bathrooms": 1, "carpet_area": 900}
     - **images**: image files, 2MB each at most
     """
     uploads = _read_uploads(images)
     return ListingCommandEngine.create_listing(
          db,
          owner_id=owner_id,
          title=title,
          price=price,
          status=status,
          address=address,
          property_type=type,
          type_details=_parse_details(details),
          images=uploads,
     )


@router.delete(
     "/properties/{property_id}",
     response_model=MessageResponse,
     summary="Delete a listing"
)
def delete_property(
     property_id: int,
     db: Session = Depends(get_session),
     user: User = Depends(require_role(ROLE_OWNER, ROLE_ADMIN))
):
     ListingCommandEngine.delete_listing(db, property_id)
     return MessageResponse(message="Property deleted")


@router.get(
     "/properties/{property_id}/images",
     response_model=List[PropertyImageResponse],
     summary="List a property's images in upload order"
)
def get_property_images(property_id: int, db: Session = Depends(get_session)):
     with storage_guard():
          if PropertyStore.get_property(db, property_id) is None:
               raise NotFoundError(f"Property with ID {property_id} not found")
          return ImageStore.list_images(db, property_id)


# ---------------------------------------------------------------------------
# By-type listings
# ---------------------------------------------------------------------------

@router.get("/apartments", response_model=List[PropertyDetailResponse], summary="List apartments")
def list_apartments(db: Session = Depends(get_session)):
     return ListingQueryEngine.list_by_type(db, PropertyType.APARTMENT)


@router.get("/bungalows", response_model=List[PropertyDetailResponse], summary="List bungalows")
def list_bungalows(db: Session = Depends(get_session)):
     return ListingQueryEngine.list_by_type(db, PropertyType.BUNGALOW)


@router.get("/commercial", response_model=List[PropertyDetailResponse], summary="List commercial complexes")
def list_commercial(db: Session = Depends(get_session)):
     return ListingQueryEngine.list_by_type(db, PropertyType.COMMERCIAL)


@router.get("/land", response_model=List[PropertyDetailResponse], summary="List land parcels")
def list_land(db: Session = Depends(get_session)):
     return ListingQueryEngine.list_by_type(db, PropertyType.LAND)
