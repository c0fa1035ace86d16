"""
Users API endpoints.
"""
from typing import List

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from social_api.api.v1.thoughts import thought_out
from social_api.core.deps import get_db
from social_api.models.user import User
from social_api.schemas.user import UserCreate, UserUpdate, UserOut, UserDetailOut
from social_api.services import users as user_service
from social_api.services.users import PopulatedUser

router = APIRouter(prefix="/users", tags=["users"])


def user_out(user: User) -> UserOut:
    return UserOut(
        id=user.id,
        username=user.username,
        email=user.email,
        thoughts=list(user.thoughts or []),
        friends=list(user.friends or []),
    )


def _user_detail(populated: PopulatedUser) -> UserDetailOut:
    user = populated.user
    return UserDetailOut(
        id=user.id,
        username=user.username,
        email=user.email,
        thoughts=[thought_out(t) for t in populated.thoughts],
        friends=[user_out(f) for f in populated.friends],
    )


@router.get("", response_model=List[UserDetailOut])
def list_users(db: Session = Depends(get_db)):
    """
    List all users with their thoughts and friends expanded.
    """
    return [_user_detail(p) for p in user_service.list_users(db)]


@router.post("", response_model=UserOut, status_code=status.HTTP_201_CREATED)
def create_user(data: UserCreate, db: Session = Depends(get_db)):
    """
    Create a user.

    - **username**: Display name
    - **email**: Unique email address
    - **password**: Password, stored hashed and never returned
    """
    user = user_service.create_user(db, data.model_dump())
    return user_out(user)


@router.get("/{user_id}", response_model=UserDetailOut)
def get_user(user_id: str, db: Session = Depends(get_db)):
    return _user_detail(user_service.get_user(db, user_id))


@router.put("/{user_id}", response_model=UserOut)
def update_user(user_id: str, data: UserUpdate, db: Session = Depends(get_db)):
    """
    Replace the supplied fields of a user.

    A new password is hashed before it is stored.
    """
    user = user_service.update_user(db, user_id, data.model_dump(exclude_unset=True))
    return user_out(user)


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_user(user_id: str, db: Session = Depends(get_db)):
    user_service.delete_user(db, user_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post(
    "/{user_id}/friends/{friend_id}",
    response_model=UserOut,
    status_code=status.HTTP_201_CREATED,
)
def add_friend(user_id: str, friend_id: str, db: Session = Depends(get_db)):
    """
    Add a friend reference. The friend id is not checked.
    """
    return user_out(user_service.add_friend(db, user_id, friend_id))


@router.delete(
    "/{user_id}/friends/{friend_id}",
    status_code=status.HTTP_204_NO_CONTENT,
)
def remove_friend(user_id: str, friend_id: str, db: Session = Depends(get_db)):
    user_service.remove_friend(db, user_id, friend_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
