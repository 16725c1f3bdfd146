from .property_store import PropertyStore
from .image_store import ImageStore, validate_uploads
from .listing_query import ListingQueryEngine
from .listing_command import ListingCommandEngine
from .session_store import SessionStore, SessionRecord
from .transaction_service import TransactionService

__all__ = [
     "PropertyStore",
     "ImageStore",
     "validate_uploads",
     "ListingQueryEngine",
     "ListingCommandEngine",
     "SessionStore",
     "SessionRecord",
     "TransactionService",
]
