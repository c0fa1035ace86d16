from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel, Field

from social_api.schemas.reaction import ReactionOut


class ThoughtCreate(BaseModel):
    """Thought creation request"""
    thoughtText: str = Field(..., min_length=1)
    username: str = Field(..., min_length=1)
    # Author to link the new thought to
    userId: Optional[str] = None


class ThoughtUpdate(BaseModel):
    """Thought update request, only the supplied fields are replaced"""
    thoughtText: Optional[str] = Field(None, min_length=1)
    username: Optional[str] = Field(None, min_length=1)


class ThoughtOut(BaseModel):
    """Thought response with reaction ids"""
    id: str
    thoughtText: str
    createdAt: datetime
    username: str
    reactions: List[str] = []


class ThoughtDetailOut(BaseModel):
    """Thought response with reactions expanded"""
    id: str
    thoughtText: str
    createdAt: datetime
    username: str
    reactions: List[ReactionOut] = []
