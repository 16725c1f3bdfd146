"""
Type-detail models - one table per listing type.

Each detail row shares its primary key with the owning property and is
removed with it (ON DELETE CASCADE). DETAIL_MODELS is the only place a
table is picked from a PropertyType.
"""
from sqlalchemy import Column, Integer, String, Numeric, Boolean, ForeignKey
from .base import Base
from .property import PropertyType


def _property_fk():
     return Column(
          Integer,
          ForeignKey("properties.property_id", ondelete="CASCADE"),
          primary_key=True
     )


class Apartment(Base):
     __tablename__ = "apartments"

     property_id = _property_fk()
     rooms = Column(Integer, nullable=False)
     bathrooms = Column(Integer, nullable=False)
     kitchen = Column(Boolean, default=False, nullable=False)
     carpet_area = Column(Numeric(10, 2), nullable=False)
     super_built_up = Column(Numeric(10, 2), nullable=True)
     floor_number = Column(Integer, nullable=True)

     def __repr__(self):
          return f"<Apartment(property_id={self.property_id}, rooms={self.rooms})>"


class Bungalow(Base):
     __tablename__ = "bungalows"

     property_id = _property_fk()
     bedrooms = Column(Integer, nullable=False)
     bathrooms = Column(Integer, nullable=False)
     kitchen = Column(Boolean, default=False, nullable=False)
     garden = Column(Boolean, default=False, nullable=False)
     parking = Column(Boolean, default=False, nullable=False)
     total_area = Column(Numeric(10, 2), nullable=False)

     def __repr__(self):
          return f"<Bungalow(property_id={self.property_id}, bedrooms={self.bedrooms})>"


class CommercialComplex(Base):
     __tablename__ = "commercial_complexes"

     property_id = _property_fk()
     floors = Column(Integer, nullable=False)
     total_area = Column(Numeric(10, 2), nullable=False)
     parking_space = Column(Boolean, default=False, nullable=False)
     lift_available = Column(Boolean, default=False, nullable=False)

     def __repr__(self):
          return f"<CommercialComplex(property_id={self.property_id}, floors={self.floors})>"


class Land(Base):
     __tablename__ = "lands"

     property_id = _property_fk()
     area = Column(Numeric(12, 2), nullable=False)
     zone = Column(String(100), nullable=True)

     def __repr__(self):
          return f"<Land(property_id={self.property_id}, area={self.area})>"


DETAIL_MODELS = {
     PropertyType.APARTMENT: Apartment,
     PropertyType.BUNGALOW: Bungalow,
     PropertyType.COMMERCIAL: CommercialComplex,
     PropertyType.LAND: Land,
}


def detail_columns(model) -> list:
     """Detail column names, excluding the shared primary key."""
     return [c.name for c in model.__table__.columns if c.name != "property_id"]


def detail_to_dict(row) -> dict:
     return {name: getattr(row, name) for name in detail_columns(type(row))}
