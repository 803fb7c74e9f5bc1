from typing import Literal, Optional
from pydantic import BaseModel

from unileave.schemas.common import CamelModel


class UserLogin(BaseModel):
    email: str
    password: str
    role: Literal["staff", "admin"] = "staff"


class AuthUser(CamelModel):
    id: str
    name: str
    email: str
    role: str
    department: str


class LoginResponse(CamelModel):
    success: bool = True
    user: AuthUser
    access_token: Optional[str] = None
    token_type: str = "bearer"
