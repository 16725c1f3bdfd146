import enum
from sqlalchemy import Column, Integer, String, Numeric, DateTime, ForeignKey, Enum, func
from sqlalchemy.orm import relationship
from .base import Base


class PropertyStatus(str, enum.Enum):
     """Listing availability."""
     AVAILABLE = "available"
     RENTED = "rented"
     SOLD = "sold"


class PropertyType(str, enum.Enum):
     """Which detail table holds the type-specific attributes."""
     APARTMENT = "apartment"
     BUNGALOW = "bungalow"
     COMMERCIAL = "commercial"
     LAND = "land"


# Statuses a new listing may be created with; SOLD is only reached via a sale
LISTABLE_STATUSES = (PropertyStatus.AVAILABLE, PropertyStatus.RENTED)


def _enum_values(enum_cls):
     return [member.value for member in enum_cls]


class Property(Base):
     """
     Property model - the parent record shared by every listing type.

     Exactly one row in the detail table selected by property_type belongs
     to each property.
     """
     __tablename__ = "properties"

     property_id = Column(Integer, primary_key=True, autoincrement=True)
     owner_id = Column(
          Integer,
          ForeignKey("users.user_id"),
          nullable=False,
          index=True
     )

     title = Column(String(255), nullable=False)
     price = Column(Numeric(12, 2), nullable=False)
     status = Column(
          Enum(PropertyStatus, name="property_status", values_callable=_enum_values, create_constraint=True),
          default=PropertyStatus.AVAILABLE,
          nullable=False,
          index=True
     )
     address = Column(String(500), nullable=False)
     property_type = Column(
          Enum(PropertyType, name="property_type", values_callable=_enum_values, create_constraint=True),
          nullable=False,
          index=True
     )

     # Timestamps
     created_at = Column(DateTime, server_default=func.now(), nullable=False)

     # Relationships
     owner = relationship("User", back_populates="properties")
     images = relationship(
          "PropertyImage",
          back_populates="property",
          order_by="PropertyImage.image_id",
          cascade="all, delete-orphan",
          passive_deletes=True
     )

     def __repr__(self):
          return f"<Property(property_id={self.property_id}, title='{self.title}', type='{self.property_type}')>"

     def to_dict(self) -> dict:
          """Parent-table fields as a plain dict (no detail or images)."""
          return {
               "property_id": self.property_id,
               "owner_id": self.owner_id,
               "title": self.title,
               "price": self.price,
               "status": self.status.value,
               "address": self.address,
          }
