"""
Admin Setting Model

Global key/value table holding institution policy knobs and the admin
password hash. Not staff-scoped.
"""

from sqlalchemy import Column, String, Text

from unileave.db.base import Base


class AdminSetting(Base):
    __tablename__ = "admin_settings"

    key = Column(String(100), primary_key=True)
    value = Column(Text, nullable=False)

    def __repr__(self) -> str:
        return f"<AdminSetting key={self.key}>"
