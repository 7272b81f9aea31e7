from datetime import timezone as tz
from datetime import datetime

from sqlalchemy import JSON, Column, DateTime, Index, Integer, String, func
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import declarative_base

Base = declarative_base()


def utc_now():
    return datetime.now(tz.utc)


class WebhookEntry(Base):
    __tablename__ = "webhooks"
    id = Column(Integer, primary_key=True)
    payload = Column(JSON().with_variant(JSONB(), "postgresql"), nullable=False)
    event = Column(String, nullable=False)
    email = Column(String, nullable=False)
    status = Column(String, nullable=False, default="received", server_default="received")
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=utc_now,
        server_default=func.now(),
    )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "payload": self.payload,
            "event": self.event,
            "email": self.email,
            "status": self.status,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }

    __table_args__ = (
        Index("ix_webhooks_event", "event"),
        Index("ix_webhooks_email", "email"),
    )
