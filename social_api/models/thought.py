import uuid
from datetime import datetime, timezone
from sqlalchemy import Column, String, Text, JSON

from social_api.db.base import Base
from social_api.db.types import UTCDateTime


class Thought(Base):
    __tablename__ = "thoughts"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    thought_text = Column(Text, nullable=False)
    username = Column(String, nullable=False)
    created_at = Column(
        UTCDateTime(),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    # Ordered reaction ids
    reactions = Column(JSON, nullable=False, default=list)
