"""
User persistence - CRUD over the users collection and the friends set.
"""
import logging
from dataclasses import dataclass, field
from typing import Dict, List

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from social_api.core.exceptions import NotFoundError, ValidationError
from social_api.models.thought import Thought
from social_api.models.user import User
from social_api.services.auth import hash_password

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("username", "email", "password")
UPDATABLE_FIELDS = REQUIRED_FIELDS + ("thoughts", "friends")


@dataclass
class PopulatedUser:
    """A user together with its resolved thought and friend references."""

    user: User
    thoughts: List[Thought] = field(default_factory=list)
    friends: List[User] = field(default_factory=list)


def _require(fields: dict, names) -> None:
    missing = [name for name in names if not fields.get(name)]
    if missing:
        raise ValidationError(f"Missing required field(s): {', '.join(missing)}")


def _prepare_write(fields: dict) -> dict:
    """
    Map request fields onto user columns.

    The password is hashed here, and only when the write touches it.
    """
    values = {}
    for name in UPDATABLE_FIELDS:
        if name not in fields:
            continue
        if name == "password":
            values["password_hash"] = hash_password(fields["password"])
        elif name in ("thoughts", "friends"):
            values[name] = list(dict.fromkeys(fields[name] or []))
        else:
            values[name] = fields[name]
    return values


def _email_taken(db: Session, email: str, exclude_id: str = None) -> bool:
    query = db.query(User).filter(User.email == email)
    if exclude_id is not None:
        query = query.filter(User.id != exclude_id)
    return query.first() is not None


def _commit_user(db: Session, user: User) -> User:
    # The unique index backs up the pre-check when two writers race
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        raise ValidationError("Email is already in use") from e
    db.refresh(user)
    return user


def _populate(db: Session, users: List[User]) -> List[PopulatedUser]:
    """Resolve thought and friend ids in two batch queries, skipping dangling ids."""
    thought_ids = {tid for user in users for tid in user.thoughts or []}
    friend_ids = {fid for user in users for fid in user.friends or []}

    thoughts: Dict[str, Thought] = {}
    if thought_ids:
        thoughts = {
            t.id: t for t in db.query(Thought).filter(Thought.id.in_(list(thought_ids))).all()
        }
    friends: Dict[str, User] = {}
    if friend_ids:
        friends = {
            u.id: u for u in db.query(User).filter(User.id.in_(list(friend_ids))).all()
        }

    return [
        PopulatedUser(
            user=user,
            thoughts=[thoughts[tid] for tid in user.thoughts or [] if tid in thoughts],
            friends=[friends[fid] for fid in user.friends or [] if fid in friends],
        )
        for user in users
    ]


def get_user_or_404(db: Session, user_id: str) -> User:
    user = db.query(User).filter(User.id == user_id).first()
    if user is None:
        raise NotFoundError("User not found")
    return user


def create_user(db: Session, fields: dict) -> User:
    """
    Create a new user.

    Args:
        db: Database session
        fields: username, email and password, optionally initial
            thoughts/friends id lists

    Returns:
        Created User object

    Raises:
        ValidationError: If a required field is missing or the email is taken
    """
    _require(fields, REQUIRED_FIELDS)
    if _email_taken(db, fields["email"]):
        raise ValidationError("Email is already in use")

    user = User(**_prepare_write(fields))
    db.add(user)
    _commit_user(db, user)
    logger.info(f"Created user {user.id}")
    return user


def list_users(db: Session) -> List[PopulatedUser]:
    """All users with thoughts and friends expanded."""
    return _populate(db, db.query(User).all())


def get_user(db: Session, user_id: str) -> PopulatedUser:
    return _populate(db, [get_user_or_404(db, user_id)])[0]


def update_user(db: Session, user_id: str, fields: dict) -> User:
    """
    Replace the supplied fields of a user.

    Raises:
        NotFoundError: If the user does not exist
        ValidationError: If a required field is cleared or the new email is taken
    """
    user = get_user_or_404(db, user_id)

    cleared = [name for name in REQUIRED_FIELDS if name in fields and not fields[name]]
    if cleared:
        raise ValidationError(f"Required field(s) cannot be empty: {', '.join(cleared)}")
    if "email" in fields and _email_taken(db, fields["email"], exclude_id=user.id):
        raise ValidationError("Email is already in use")

    for name, value in _prepare_write(fields).items():
        setattr(user, name, value)
    return _commit_user(db, user)


def delete_user(db: Session, user_id: str) -> None:
    """Delete a user. Thoughts and other users' friend references are left as-is."""
    user = get_user_or_404(db, user_id)
    db.delete(user)
    db.commit()
    logger.info(f"Deleted user {user_id}")


def add_friend(db: Session, user_id: str, friend_id: str) -> User:
    """Add friend_id to the user's friends. The friend is not looked up."""
    user = get_user_or_404(db, user_id)
    if friend_id not in user.friends:
        user.friends = [*user.friends, friend_id]
        db.commit()
        db.refresh(user)
    return user


def remove_friend(db: Session, user_id: str, friend_id: str) -> User:
    """Remove friend_id from the user's friends; a non-member is a no-op."""
    user = get_user_or_404(db, user_id)
    if friend_id in user.friends:
        user.friends = [fid for fid in user.friends if fid != friend_id]
        db.commit()
        db.refresh(user)
    return user
