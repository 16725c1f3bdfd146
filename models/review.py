from sqlalchemy import Column, Integer, Text, DateTime, ForeignKey, CheckConstraint, func
from .base import Base


class Review(Base):
     """Review model - a user's rating of a property."""
     __tablename__ = "reviews"

     review_id = Column(Integer, primary_key=True, autoincrement=True)
     property_id = Column(
          Integer,
          ForeignKey("properties.property_id", ondelete="CASCADE"),
          nullable=False,
          index=True
     )
     user_id = Column(Integer, ForeignKey("users.user_id", ondelete="CASCADE"), nullable=False)
     rating = Column(Integer, nullable=False)
     comment = Column(Text, nullable=True)
     created_at = Column(DateTime, server_default=func.now(), nullable=False)

     __table_args__ = (
          CheckConstraint("rating BETWEEN 1 AND 5", name="rating_range"),
     )

     def __repr__(self):
          return f"<Review(review_id={self.review_id}, property_id={self.property_id}, rating={self.rating})>"
