"""
Pydantic schemas for property reviews.
"""
from typing import Optional
from pydantic import BaseModel, Field, ConfigDict


class ReviewCreate(BaseModel):
     property_id: int = Field(..., gt=0)
     user_id: int = Field(..., gt=0)
     rating: int = Field(..., ge=1, le=5)
     comment: Optional[str] = Field(None, max_length=2000)


class ReviewResponse(BaseModel):
     review_id: int
     property_id: int
     user_id: int
     rating: int
     comment: Optional[str] = None

     model_config = ConfigDict(from_attributes=True)
