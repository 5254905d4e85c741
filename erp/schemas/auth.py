"""
Pydantic schemas for authentication.
"""

from pydantic import BaseModel

from erp.core.roles import Role


class UserLogin(BaseModel):
    email: str
    password: str


class SessionUser(BaseModel):
    user_id: int
    email: str
    role: Role
