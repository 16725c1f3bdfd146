"""
Session API routes: login, signup, logout and session lookup.

Login is a name + email match; the returned session_key identifies the
caller on later requests (X-Session-Key header).
"""
from fastapi import APIRouter, Depends, Header, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from database import atomic, get_session, storage_guard
from dependencies import current_user, get_session_store
from errors import AuthorizationError, ValidationError
from models import User
from schemas.property import MessageResponse
from schemas.user import LoginRequest, SessionResponse, SignupRequest, UserResponse
from services.session_store import SessionStore

router = APIRouter(prefix="/api", tags=["auth"])


def _session_response(user: User, store: SessionStore) -> SessionResponse:
     record = store.create(user)
     return SessionResponse(**user.to_dict(), session_key=record.session_key)


@router.post("/login", response_model=SessionResponse, summary="Log in by name and email")
def login(
     body: LoginRequest,
     db: Session = Depends(get_session),
     store: SessionStore = Depends(get_session_store)
):
     with storage_guard():
          user = db.query(User).filter(User.name == body.name, User.email == body.email).first()
     if not user:
          raise AuthorizationError("Invalid credentials", status_code=401)
     return _session_response(user, store)


@router.post(
     "/signup",
     response_model=SessionResponse,
     status_code=status.HTTP_201_CREATED,
     summary="Create an account"
)
def signup(
     body: SignupRequest,
     db: Session = Depends(get_session),
     store: SessionStore = Depends(get_session_store)
):
     """The owner role can only be assigned in the database."""
     user = User(name=body.name, email=body.email, phone=body.phone, role=body.role)
     try:
          with atomic(db):
               db.add(user)
               db.flush()
     except IntegrityError:
          raise ValidationError("Email already registered", field="email")
     return _session_response(user, store)


@router.post("/logout", response_model=MessageResponse, summary="End the current session")
def logout(
     x_session_key: str = Header(...),
     store: SessionStore = Depends(get_session_store)
):
     store.invalidate(x_session_key)
     return MessageResponse(message="Logged out")


@router.get("/session", response_model=UserResponse, summary="Validate the current session")
def get_current_session(user: User = Depends(current_user)):
     return user
