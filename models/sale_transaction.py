"""
SaleTransaction model - ledger row recorded when a property is bought.
No money moves here; recording a sale flips the property to SOLD.
"""
from sqlalchemy import Column, Integer, Numeric, DateTime, ForeignKey, func
from .base import Base


class SaleTransaction(Base):
     __tablename__ = "transactions"

     transaction_id = Column(Integer, primary_key=True, autoincrement=True)
     buyer_id = Column(Integer, ForeignKey("users.user_id"), nullable=False, index=True)
     property_id = Column(
          Integer,
          ForeignKey("properties.property_id", ondelete="CASCADE"),
          nullable=False,
          index=True
     )
     amount = Column(Numeric(12, 2), nullable=False)
     date = Column(DateTime, server_default=func.now(), nullable=False)

     def __repr__(self):
          return f"<SaleTransaction(transaction_id={self.transaction_id}, property_id={self.property_id}, amount={self.amount})>"
