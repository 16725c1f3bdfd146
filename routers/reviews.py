"""
Review API routes.
"""
from typing import List
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from database import atomic, get_session, storage_guard
from errors import NotFoundError
from models import Review, User
from schemas.review import ReviewCreate, ReviewResponse
from services.property_store import PropertyStore

router = APIRouter(prefix="/api", tags=["reviews"])


@router.get(
     "/properties/{property_id}/reviews",
     response_model=List[ReviewResponse],
     summary="List reviews for a property"
)
def list_reviews(property_id: int, db: Session = Depends(get_session)):
     with storage_guard():
          if PropertyStore.get_property(db, property_id) is None:
               raise NotFoundError(f"Property with ID {property_id} not found")
          return (
               db.query(Review)
               .filter(Review.property_id == property_id)
               .order_by(Review.review_id)
               .all()
          )


@router.post(
     "/reviews",
     response_model=ReviewResponse,
     status_code=status.HTTP_201_CREATED,
     summary="Submit a review"
)
def create_review(body: ReviewCreate, db: Session = Depends(get_session)):
     with atomic(db):
          if PropertyStore.get_property(db, body.property_id) is None:
               raise NotFoundError(f"Property with ID {body.property_id} not found")
          if db.query(User.user_id).filter(User.user_id == body.user_id).first() is None:
               raise NotFoundError(f"User with ID {body.user_id} not found")
          review = Review(**body.model_dump())
          db.add(review)
          db.flush()
     return review
