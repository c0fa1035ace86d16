import uuid
from sqlalchemy import Column, String, JSON

from social_api.db.base import Base


class User(Base):
    __tablename__ = "users"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    username = Column(String, nullable=False)
    email = Column(String, unique=True, nullable=False, index=True)
    password_hash = Column(String, nullable=False)

    # Reference arrays of ids, never validated against their collections
    thoughts = Column(JSON, nullable=False, default=list)
    friends = Column(JSON, nullable=False, default=list)
