"""SQLAlchemy model for locally persisted key/value entries."""

from sqlalchemy import Column, DateTime, String, Text

from blogpush.infrastructure.database import Base
from blogpush.utils import now_in_app_timezone


class LocalSettingModel(Base):
    """Single key/value entry, the equivalent of a browser local storage slot."""

    __tablename__ = "local_setting"

    key = Column(String(120), primary_key=True)
    value = Column(Text, nullable=False)
    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=now_in_app_timezone,
        onupdate=now_in_app_timezone,
    )


__all__ = ["LocalSettingModel"]
