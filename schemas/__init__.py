from .property import (
     ApartmentDetails,
     BungalowDetails,
     CommercialDetails,
     LandDetails,
     DETAIL_SCHEMAS,
     ImageUpload,
     ListingFilter,
     PropertyResponse,
     PropertySummary,
     PropertyImageResponse,
     PropertyDetailResponse,
     MessageResponse,
)
from .review import ReviewCreate, ReviewResponse
from .transaction import SaleCreate, SaleResponse
from .user import LoginRequest, SignupRequest, RoleUpdate, UserResponse, SessionResponse

__all__ = [
     "ApartmentDetails",
     "BungalowDetails",
     "CommercialDetails",
     "LandDetails",
     "DETAIL_SCHEMAS",
     "ImageUpload",
     "ListingFilter",
     "PropertyResponse",
     "PropertySummary",
     "PropertyImageResponse",
     "PropertyDetailResponse",
     "MessageResponse",
     "ReviewCreate",
     "ReviewResponse",
     "SaleCreate",
     "SaleResponse",
     "LoginRequest",
     "SignupRequest",
     "RoleUpdate",
     "UserResponse",
     "SessionResponse",
]
