"""
Sale recording API.

POST /api/transactions stores the sale and marks the property sold.
"""
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from database import get_session
from schemas.transaction import SaleCreate, SaleResponse
from services.transaction_service import TransactionService

router = APIRouter(prefix="/api/transactions", tags=["transactions"])


@router.post(
     "",
     response_model=SaleResponse,
     status_code=status.HTTP_201_CREATED,
     summary="Record a sale"
)
def record_transaction(body: SaleCreate, db: Session = Depends(get_session)):
     return TransactionService.record_sale(
          db,
          buyer_id=body.buyer_id,
          property_id=body.property_id,
          amount=body.amount,
          date=body.date,
     )
