"""
Staff Pydantic Schemas - API Request/Response Models
"""
from typing import Optional
from pydantic import EmailStr, Field

from unileave.schemas.common import CamelModel


class StaffBase(CamelModel):
    name: str = Field(..., min_length=1)
    email: EmailStr
    department: str = Field(..., min_length=1)
    position: str = Field(..., min_length=1)
    phone: Optional[str] = None


class StaffCreate(StaffBase):
    id: Optional[str] = None
    total_leave: int = Field(..., ge=0)
    password: Optional[str] = None
    annual_leave: Optional[int] = None
    sick_leave: Optional[int] = None
    maternity_leave: Optional[int] = None
    paternity_leave: Optional[int] = None
    emergency_leave: Optional[int] = None


class StaffUpdate(CamelModel):
    name: Optional[str] = None
    email: Optional[EmailStr] = None
    department: Optional[str] = None
    position: Optional[str] = None
    phone: Optional[str] = None
    total_leave: Optional[int] = Field(default=None, ge=0)
    annual_leave: Optional[int] = None
    sick_leave: Optional[int] = None
    maternity_leave: Optional[int] = None
    paternity_leave: Optional[int] = None
    emergency_leave: Optional[int] = None


class StaffResponse(CamelModel):
    id: str
    name: str
    email: str
    department: str
    position: str
    phone: Optional[str] = None
    total_leave: int
    used_leave: int
    pending_leave: int
    remaining_leave: int
    annual_leave: Optional[int] = None
    sick_leave: Optional[int] = None
    maternity_leave: Optional[int] = None
    paternity_leave: Optional[int] = None
    emergency_leave: Optional[int] = None


class StaffStats(CamelModel):
    total_leave: int
    used_leave: int
    pending_leave: int
    remaining_leave: int


class PasswordChange(CamelModel):
    current_password: str
    new_password: str
