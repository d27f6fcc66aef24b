from datetime import datetime, timezone

from sqlalchemy import Boolean, Column, DateTime, String

from app.core.constants import SYNC_STATUS_IDLE
from app.database.base import Base


class SalesChannel(Base):
    __tablename__ = "sales_channels"

    id = Column(String(64), primary_key=True)
    name = Column(String(120), nullable=False)
    name_key = Column(String(120), nullable=False, unique=True)
    type = Column(String(20), nullable=False)

    api_key = Column(String)
    api_secret = Column(String)
    store_url = Column(String)

    is_active = Column(Boolean, nullable=False, default=True)
    last_synced_at = Column(DateTime(timezone=True))
    sync_status = Column(String(20), nullable=False, default=SYNC_STATUS_IDLE)
    sync_error = Column(String)
    sync_started_at = Column(DateTime(timezone=True))

    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )


__all__ = ["SalesChannel"]
