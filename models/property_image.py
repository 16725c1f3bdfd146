from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, func
from sqlalchemy.orm import relationship
from .base import Base


class PropertyImage(Base):
     """
     Image attached to a property.

     image_id is strictly increasing in insertion order; the lowest id is the
     property's representative image.
     """
     __tablename__ = "property_images"
     # Without AUTOINCREMENT, SQLite reuses the highest rowid after a delete
     __table_args__ = {"sqlite_autoincrement": True}

     image_id = Column(Integer, primary_key=True, autoincrement=True)
     property_id = Column(
          Integer,
          ForeignKey("properties.property_id", ondelete="CASCADE"),
          nullable=False,
          index=True
     )
     image_url = Column(String(500), nullable=False)  # /uploads/<file>

     created_at = Column(DateTime, server_default=func.now(), nullable=False)

     # Relationships
     property = relationship("Property", back_populates="images")

     def __repr__(self):
          return f"<PropertyImage(image_id={self.image_id}, property_id={self.property_id})>"
