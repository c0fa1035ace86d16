from datetime import datetime
from pydantic import BaseModel, Field


class ReactionCreate(BaseModel):
    """Reaction creation request"""
    reactionBody: str = Field(..., min_length=1)
    username: str = Field(..., min_length=1)


class ReactionOut(BaseModel):
    """Reaction response"""
    id: str
    reactionBody: str
    createdAt: datetime
    username: str
