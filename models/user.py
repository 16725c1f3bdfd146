from sqlalchemy import Column, Integer, String, DateTime, func
from sqlalchemy.orm import relationship
from .base import Base


# Role names as stored; "owner" is the site owner and can only be set in the database
ROLE_OWNER = "owner"
ROLE_ADMIN = "admin"
ROLE_USER = "user"


class User(Base):
     """
     User model - marketplace members and staff.
     Login is a name + email lookup; there are no passwords.
     """
     __tablename__ = "users"

     user_id = Column(Integer, primary_key=True, autoincrement=True)
     name = Column(String(200), nullable=False)
     email = Column(String(255), unique=True, nullable=False, index=True)
     phone = Column(String(50), nullable=True)
     role = Column(String(20), default=ROLE_USER, nullable=False)  # owner, admin, user
     created_at = Column(DateTime, server_default=func.now(), nullable=False)

     # Relationships
     properties = relationship("Property", back_populates="owner")

     def __repr__(self):
          return f"<User(user_id={self.user_id}, email='{self.email}', role='{self.role}')>"

     def to_dict(self) -> dict:
          return {
               "user_id": self.user_id,
               "name": self.name,
               "email": self.email,
               "phone": self.phone,
               "role": self.role,
          }
