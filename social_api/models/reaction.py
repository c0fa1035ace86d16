import uuid
from datetime import datetime, timezone
from sqlalchemy import Column, String, Text

from social_api.db.base import Base
from social_api.db.types import UTCDateTime


class Reaction(Base):
    __tablename__ = "reactions"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    reaction_body = Column(Text, nullable=False)
    username = Column(String, nullable=False)
    created_at = Column(
        UTCDateTime(),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
