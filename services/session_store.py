"""
Session store - server-side login sessions keyed by an opaque token.

Sessions are created on login/signup and invalidated on logout, when the
user's role changes, or once they are older than the store's TTL, so a
stale role is never served from a session.
"""
import os
import secrets
import threading
import time
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Callable, Dict, Optional

SESSION_TTL_SECONDS = int(os.getenv("SESSION_TTL_SECONDS", str(24 * 60 * 60)))


@dataclass
class SessionRecord:
     session_key: str
     user_id: int
     name: str
     email: str
     role: str
     expires_at: float = 0.0
     created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


class SessionStore:
     """
     In-process key -> SessionRecord map. One instance per application.

     Expired sessions are dropped on lookup and pruned whenever a new
     session is created, so the map stays bounded by live sessions.
     """

     def __init__(
          self,
          ttl_seconds: float = SESSION_TTL_SECONDS,
          clock: Callable[[], float] = time.monotonic
     ):
          self._sessions: Dict[str, SessionRecord] = {}
          self._lock = threading.Lock()
          self._ttl = ttl_seconds
          self._clock = clock

     def _prune(self, now: float) -> None:
          expired = [k for k, s in self._sessions.items() if s.expires_at <= now]
          for key in expired:
               del self._sessions[key]

     def create(self, user) -> SessionRecord:
          now = self._clock()
          record = SessionRecord(
               session_key=secrets.token_urlsafe(32),
               user_id=user.user_id,
               name=user.name,
               email=user.email,
               role=user.role,
               expires_at=now + self._ttl,
          )
          with self._lock:
               self._prune(now)
               self._sessions[record.session_key] = record
          return record

     def get(self, session_key: str) -> Optional[SessionRecord]:
          with self._lock:
               record = self._sessions.get(session_key)
               if record is not None and record.expires_at <= self._clock():
                    del self._sessions[session_key]
                    return None
               return record

     def invalidate(self, session_key: str) -> bool:
          with self._lock:
               return self._sessions.pop(session_key, None) is not None

     def invalidate_user(self, user_id: int) -> int:
          """Drop every session of a user; returns how many were removed."""
          with self._lock:
               keys = [k for k, s in self._sessions.items() if s.user_id == user_id]
               for key in keys:
                    del self._sessions[key]
          return len(keys)

     def __len__(self) -> int:
          with self._lock:
               return len(self._sessions)
