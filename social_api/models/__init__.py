from social_api.db.base import Base  # noqa: F401

from .user import User  # noqa: F401
from .thought import Thought  # noqa: F401
from .reaction import Reaction  # noqa: F401
