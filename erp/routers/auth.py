"""
Auth router — login, logout, current user.

Users live in the `users` table with a bcrypt `password_hash`. A successful
login opens a Session whose token the client sends back as a Bearer token.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials

from erp.core.roles import Role
from erp.core.security import get_current_session, security_scheme, verify_password
from erp.core.session import Session, SessionStore, get_session_store
from erp.crud.identity import get_user_by_email
from erp.schemas.auth import SessionUser, UserLogin
from erp.utils.response import success_response

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/auth", tags=["Authentication"])


@router.post("/login")
async def login(body: UserLogin, store: SessionStore = Depends(get_session_store)):
    email = body.email.strip().lower()
    user_data = get_user_by_email(email)

    if not user_data or not verify_password(body.password, user_data.get("password_hash") or ""):
        logger.info("Rejected login for %s", email)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid email or password.",
        )

    try:
        role = Role.parse(user_data.get("role"))
    except ValueError:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="This account has no student or faculty role.",
        )

    session = Session.open(user_id=user_data["user_id"], email=user_data["email"], role=role)
    store.save(session)
    logger.info("User %s logged in as %s", session.user_id, role.value)

    return success_response(
        data={
            "token": session.token,
            "user": SessionUser(user_id=session.user_id, email=session.email, role=session.role),
        },
        message=f"Welcome back, {role.value}!",
    )


@router.post("/logout")
async def logout(
    credentials: HTTPAuthorizationCredentials = Depends(security_scheme),
    store: SessionStore = Depends(get_session_store),
):
    store.clear(credentials.credentials)
    return success_response(message="You have been successfully logged out")


@router.get("/me")
async def me(session: Session = Depends(get_current_session)):
    return success_response(
        data=SessionUser(user_id=session.user_id, email=session.email, role=session.role)
    )
