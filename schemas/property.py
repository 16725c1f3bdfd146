"""
Pydantic schemas for property listing request/response validation.
"""
from dataclasses import dataclass
from decimal import Decimal
from typing import Optional, List
from pydantic import BaseModel, Field, ConfigDict

from models.property import PropertyStatus, PropertyType


class ApartmentDetails(BaseModel):
     """Apartment-specific attributes."""
     rooms: int = Field(..., gt=0)
     bathrooms: int = Field(..., gt=0)
     kitchen: bool = False
     carpet_area: Decimal = Field(..., gt=0, max_digits=10, decimal_places=2)
     super_built_up: Optional[Decimal] = Field(None, gt=0, max_digits=10, decimal_places=2)
     floor_number: Optional[int] = None


class BungalowDetails(BaseModel):
     """Bungalow-specific attributes."""
     bedrooms: int = Field(..., gt=0)
     bathrooms: int = Field(..., gt=0)
     kitchen: bool = False
     garden: bool = False
     parking: bool = False
     total_area: Decimal = Field(..., gt=0, max_digits=10, decimal_places=2)


class CommercialDetails(BaseModel):
     """Commercial complex attributes."""
     floors: int = Field(..., gt=0)
     total_area: Decimal = Field(..., gt=0, max_digits=10, decimal_places=2)
     parking_space: bool = False
     lift_available: bool = False


class LandDetails(BaseModel):
     """Land parcel attributes."""
     area: Decimal = Field(..., gt=0, max_digits=12, decimal_places=2)
     zone: Optional[str] = Field(None, max_length=100)


DETAIL_SCHEMAS = {
     PropertyType.APARTMENT: ApartmentDetails,
     PropertyType.BUNGALOW: BungalowDetails,
     PropertyType.COMMERCIAL: CommercialDetails,
     PropertyType.LAND: LandDetails,
}


@dataclass
class ImageUpload:
     """An image payload received at the HTTP boundary."""
     filename: str
     content_type: str
     data: bytes

     @property
     def size(self) -> int:
          return len(self.data)


class ListingFilter(BaseModel):
     """Query-string filters for GET /api/properties. Every key is optional."""
     status: Optional[PropertyStatus] = None
     search: Optional[str] = None
     type: Optional[PropertyType] = None
     price_min: Optional[Decimal] = Field(None, ge=0)
     price_max: Optional[Decimal] = Field(None, ge=0)


class PropertyResponse(BaseModel):
     """Parent-table fields of a property."""
     property_id: int
     owner_id: int
     title: str
     price: Decimal
     status: PropertyStatus
     address: str

     model_config = ConfigDict(
          from_attributes=True,
          json_schema_extra={
               "example": {
                    "property_id": 1,
                    "owner_id": 2,
                    "title": "Sea-facing 2BHK",
                    "price": 250000.00,
                    "status": "available",
                    "address": "12 Marine Drive"
               }
          }
     )


class PropertySummary(PropertyResponse):
     """List-view row: property plus its representative image."""
     image_url: Optional[str] = None


class PropertyImageResponse(BaseModel):
     """Schema for an attached image."""
     image_id: int
     image_url: str

     model_config = ConfigDict(from_attributes=True)


class PropertyDetailResponse(PropertyResponse):
     """
     A property with its type and type-detail fields merged in.

     Detail fields vary by type, so they are carried as extra keys.
     """
     type: Optional[PropertyType] = None
     image_url: Optional[str] = None

     model_config = ConfigDict(extra="allow")


class MessageResponse(BaseModel):
     message: str


