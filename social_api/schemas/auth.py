from datetime import datetime
from typing import Optional

from pydantic import BaseModel


class TokenData(BaseModel):
    """Verified JWT payload"""

    user_id: str
    username: Optional[str] = None
    expires_at: Optional[datetime] = None
