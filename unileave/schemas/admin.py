"""
Admin Settings Schemas
"""
from typing import Optional
from pydantic import ConfigDict, Field
from pydantic.alias_generators import to_camel

from unileave.schemas.common import CamelModel


class AdminSettingsResponse(CamelModel):
    institution_name: str
    system_email: str
    max_leave_days: int
    min_advance_notice: int
    fiscal_year_start: str
    max_carry_over_days: int
    auto_approval: bool
    email_notifications: bool
    min_password_length: int
    password_expiry: int
    session_timeout: int
    max_login_attempts: int


class AdminSettingsUpdate(CamelModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="forbid",
    )

    institution_name: Optional[str] = None
    system_email: Optional[str] = None
    max_leave_days: Optional[int] = Field(default=None, ge=1)
    min_advance_notice: Optional[int] = Field(default=None, ge=0)
    fiscal_year_start: Optional[str] = None
    max_carry_over_days: Optional[int] = Field(default=None, ge=0)
    auto_approval: Optional[bool] = None
    email_notifications: Optional[bool] = None
    min_password_length: Optional[int] = Field(default=None, ge=1)
    password_expiry: Optional[int] = Field(default=None, ge=0)
    session_timeout: Optional[int] = Field(default=None, ge=1)
    max_login_attempts: Optional[int] = Field(default=None, ge=1)


class AdminPasswordChange(CamelModel):
    current_password: str
    new_password: str
