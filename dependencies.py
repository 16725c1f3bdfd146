"""
Shared FastAPI dependencies: session store access and role checks.

The caller is identified by the X-Session-Key header (issued at login) or,
for API clients, the X-User-Id header. Identity is trusted; there are no
credentials to verify.
"""
from typing import Callable, Optional

from fastapi import Depends, Header, Request
from sqlalchemy.orm import Session

from database import get_session, storage_guard
from errors import AuthorizationError
from models import User
from services.session_store import SessionStore


def get_session_store(request: Request) -> SessionStore:
     return request.app.state.session_store


def current_user(
     db: Session = Depends(get_session),
     store: SessionStore = Depends(get_session_store),
     x_session_key: Optional[str] = Header(None),
     x_user_id: Optional[str] = Header(None),
) -> User:
     """Resolve the calling user, or raise AuthorizationError (401)."""
     user_id = None
     if x_session_key:
          record = store.get(x_session_key)
          if record is None:
               raise AuthorizationError("Session expired or invalid", status_code=401)
          user_id = record.user_id
     elif x_user_id:
          try:
               user_id = int(x_user_id)
          except ValueError:
               raise AuthorizationError("User not found", status_code=401)
     else:
          raise AuthorizationError("User ID required", status_code=401)

     with storage_guard():
          user = db.query(User).filter(User.user_id == user_id).first()
     if user is None:
          raise AuthorizationError("User not found", status_code=401)
     return user


def require_role(*roles: str) -> Callable[..., User]:
     """
     Dependency factory that admits only users holding one of roles.

     Usage:
          @router.delete("/{id}")
          def remove(id: int, user: User = Depends(require_role("owner", "admin"))):
               ...
     """

     def checker(user: User = Depends(current_user)) -> User:
          if user.role not in roles:
               raise AuthorizationError("Insufficient permissions", status_code=403)
          return user

     return checker
