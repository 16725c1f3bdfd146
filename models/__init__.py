from .base import Base
from .user import User
from .property import Property, PropertyStatus, PropertyType
from .property_detail import Apartment, Bungalow, CommercialComplex, Land, DETAIL_MODELS
from .property_image import PropertyImage
from .review import Review
from .sale_transaction import SaleTransaction

__all__ = [
     "Base",
     "User",
     "Property",
     "PropertyStatus",
     "PropertyType",
     "Apartment",
     "Bungalow",
     "CommercialComplex",
     "Land",
     "DETAIL_MODELS",
     "PropertyImage",
     "Review",
     "SaleTransaction",
]
