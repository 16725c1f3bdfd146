"""
Pydantic schemas for sale recording.
"""
from datetime import datetime
from decimal import Decimal
from typing import Optional
from pydantic import BaseModel, Field, ConfigDict


class SaleCreate(BaseModel):
     """Body of POST /api/transactions."""
     buyer_id: int = Field(..., gt=0)
     property_id: int = Field(..., gt=0)
     amount: Decimal = Field(..., gt=0, max_digits=12, decimal_places=2)
     date: Optional[datetime] = None

     model_config = ConfigDict(
          json_schema_extra={
               "example": {
                    "buyer_id": 3,
                    "property_id": 1,
                    "amount": 250000.00
               }
          }
     )


class SaleResponse(BaseModel):
     transaction_id: int
     buyer_id: int
     property_id: int
     amount: Decimal
     date: datetime

     model_config = ConfigDict(from_attributes=True)
