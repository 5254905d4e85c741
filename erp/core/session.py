"""
Login sessions.

A Session is created on login and handed to endpoints explicitly through the
`get_current_session` dependency. The store has an explicit lifecycle:
`hydrate()` once at startup, `save()` on login, `clear()` on logout.
"""

import json
import logging
import secrets
from pathlib import Path
from typing import Optional

from pydantic import BaseModel

from erp.core.config import settings
from erp.core.roles import Role

logger = logging.getLogger(__name__)


class Session(BaseModel):
    token: str
    user_id: int
    email: str
    role: Role

    @classmethod
    def open(cls, user_id: int, email: str, role: Role) -> "Session":
        return cls(token=secrets.token_urlsafe(32), user_id=user_id, email=email, role=role)


class SessionStore:
    """Token -> Session map, optionally mirrored to a JSON file."""

    def __init__(self, path: Optional[str] = None):
        self._path = Path(path) if path else None
        self._sessions: dict[str, Session] = {}

    def hydrate(self) -> int:
        """Load persisted sessions. Unreadable files are discarded."""
        self._sessions = {}
        if self._path is None or not self._path.exists():
            return 0
        try:
            raw = json.loads(self._path.read_text(encoding="utf-8"))
            for item in raw:
                session = Session.model_validate(item)
                self._sessions[session.token] = session
        except (OSError, ValueError) as e:
            logger.warning("Discarding unreadable session file %s: %s", self._path, e)
            self._sessions = {}
            self._path.unlink(missing_ok=True)
        logger.info("Hydrated %d session(s)", len(self._sessions))
        return len(self._sessions)

    def get(self, token: str) -> Optional[Session]:
        return self._sessions.get(token)

    def save(self, session: Session) -> None:
        self._sessions[session.token] = session
        self._flush()

    def clear(self, token: str) -> bool:
        removed = self._sessions.pop(token, None) is not None
        if removed:
            self._flush()
        return removed

    def _flush(self) -> None:
        if self._path is None:
            return
        payload = [s.model_dump(mode="json") for s in self._sessions.values()]
        self._path.write_text(json.dumps(payload), encoding="utf-8")


_session_store: SessionStore | None = None


def get_session_store() -> SessionStore:
    global _session_store
    if _session_store is None:
        _session_store = SessionStore(settings.SESSION_FILE)
    return _session_store
