"""
User API routes.

Listing users is limited to owners and admins; only owners change roles.
A role change drops the user's sessions so the new role applies at once.
"""
from typing import List
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from database import atomic, get_session, storage_guard
from dependencies import get_session_store, require_role
from errors import NotFoundError, ValidationError
from models import User
from models.user import ROLE_ADMIN, ROLE_OWNER
from schemas.property import MessageResponse, PropertySummary
from schemas.user import RoleUpdate, UserResponse
from services.listing_query import ListingQueryEngine
from services.session_store import SessionStore

router = APIRouter(prefix="/api/users", tags=["users"])


def _get_user_or_404(db: Session, user_id: int) -> User:
     with storage_guard():
          user = db.query(User).filter(User.user_id == user_id).first()
     if not user:
          raise NotFoundError(f"User with ID {user_id} not found")
     return user


@router.get("", response_model=List[UserResponse], summary="List all users")
def list_users(
     db: Session = Depends(get_session),
     caller: User = Depends(require_role(ROLE_OWNER, ROLE_ADMIN))
):
     with storage_guard():
          return db.query(User).order_by(User.user_id).all()


@router.get("/{user_id}", response_model=UserResponse, summary="Get a user")
def get_user(user_id: int, db: Session = Depends(get_session)):
     return _get_user_or_404(db, user_id)


@router.patch("/{user_id}/role", response_model=MessageResponse, summary="Promote or demote a user")
def update_user_role(
     user_id: int,
     body: RoleUpdate,
     db: Session = Depends(get_session),
     store: SessionStore = Depends(get_session_store),
     caller: User = Depends(require_role(ROLE_OWNER))
):
     with atomic(db):
          user = _get_user_or_404(db, user_id)
          if user.role == ROLE_OWNER:
               raise ValidationError("Cannot modify Owner role", field="role_name")
          user.role = body.role_name.lower()

     store.invalidate_user(user_id)
     return MessageResponse(message=f"User role updated to {body.role_name}")


@router.get("/{user_id}/listings", response_model=List[PropertySummary], summary="List a user's properties")
def get_user_listings(user_id: int, db: Session = Depends(get_session)):
     return ListingQueryEngine.list_by_owner(db, user_id)
