from typing import List, Optional
from pydantic import BaseModel, Field

from social_api.schemas.thought import ThoughtOut


class UserCreate(BaseModel):
    """User creation request"""
    username: str = Field(..., min_length=1)
    email: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)
    thoughts: List[str] = []
    friends: List[str] = []


class UserUpdate(BaseModel):
    """
    User update request.

    Only the supplied fields are replaced. A supplied password is hashed
    before it is stored.
    """
    username: Optional[str] = Field(None, min_length=1)
    email: Optional[str] = Field(None, min_length=1)
    password: Optional[str] = Field(None, min_length=1)
    thoughts: Optional[List[str]] = None
    friends: Optional[List[str]] = None


class UserOut(BaseModel):
    """User response with reference ids. The password hash is never returned."""
    id: str
    username: str
    email: str
    thoughts: List[str] = []
    friends: List[str] = []


class UserDetailOut(BaseModel):
    """User response with thoughts and friends expanded one level"""
    id: str
    username: str
    email: str
    thoughts: List[ThoughtOut] = []
    friends: List[UserOut] = []
