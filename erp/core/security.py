"""
Security module — password verification, bearer-token sessions, role guard.

Auth Flow:
1. Client posts email + password to /api/auth/login
2. Backend fetches the users row by email and checks the bcrypt hash
3. Backend opens a Session (random token) and stores it
4. Client sends the token as a Bearer credential
5. `get_current_session` resolves the token back to the Session
6. `require_role` gates endpoints on the canonical Role
"""

import bcrypt
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from erp.core.roles import Role
from erp.core.session import Session, SessionStore, get_session_store

security_scheme = HTTPBearer()


def verify_password(plain_password: str, hashed_password: str) -> bool:
    try:
        return bcrypt.checkpw(
            plain_password.encode('utf-8'),
            hashed_password.encode('utf-8')
        )
    except ValueError:
        # malformed hash
        return False


def get_password_hash(password: str) -> str:
    salt = bcrypt.gensalt()
    hashed = bcrypt.hashpw(password.encode('utf-8'), salt)
    return hashed.decode('utf-8')


# ---------------------------------------------------------------------------
# Token resolution
# ---------------------------------------------------------------------------
async def get_current_session(
    credentials: HTTPAuthorizationCredentials = Depends(security_scheme),
    store: SessionStore = Depends(get_session_store),
) -> Session:
    """Resolve the Bearer token to the Session opened at login."""
    session = store.get(credentials.credentials)
    if session is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired session. Please log in again.",
        )
    return session


# ---------------------------------------------------------------------------
# Role guard dependency
# ---------------------------------------------------------------------------
def require_role(allowed_roles: list[Role]):
    """
    Usage:
        @router.get("/faculty-only")
        async def endpoint(session=Depends(require_role([Role.FACULTY]))):
    """

    async def role_checker(
        session: Session = Depends(get_current_session),
    ) -> Session:
        if session.role not in allowed_roles:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=f"Role '{session.role.value}' not authorized. Required: {[r.value for r in allowed_roles]}",
            )
        return session

    return role_checker
