"""
Pydantic schemas for the session and user endpoints.
"""
from typing import Optional, Literal
from pydantic import BaseModel, Field, ConfigDict


class LoginRequest(BaseModel):
     """Name + email lookup; there are no passwords."""
     name: str = Field(..., min_length=1)
     email: str = Field(..., min_length=3)


class SignupRequest(BaseModel):
     name: str = Field(..., min_length=1, max_length=200)
     email: str = Field(..., min_length=3, max_length=255)
     phone: Optional[str] = Field(None, max_length=50)
     role: Literal["user", "admin"] = "user"


class RoleUpdate(BaseModel):
     """Owners may promote a user to Admin or demote back to User."""
     role_name: Literal["User", "Admin"]


class UserResponse(BaseModel):
     user_id: int
     name: str
     email: str
     phone: Optional[str] = None
     role: str

     model_config = ConfigDict(from_attributes=True)


class SessionResponse(UserResponse):
     """Returned on login/signup; session_key goes in the X-Session-Key header."""
     session_key: str
