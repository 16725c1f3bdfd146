from .auth import router as auth_router
from .properties import router as properties_router
from .reviews import router as reviews_router
from .transactions import router as transactions_router
from .users import router as users_router

__all__ = [
     "auth_router",
     "properties_router",
     "reviews_router",
     "transactions_router",
     "users_router",
]
