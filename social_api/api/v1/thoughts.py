"""
Thoughts API endpoints.
"""
from typing import List

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from social_api.api.v1.reactions import reaction_out
from social_api.core.deps import get_db
from social_api.models.thought import Thought
from social_api.schemas.reaction import ReactionCreate, ReactionOut
from social_api.schemas.thought import (
    ThoughtCreate,
    ThoughtUpdate,
    ThoughtOut,
    ThoughtDetailOut,
)
from social_api.services import thoughts as thought_service
from social_api.services.thoughts import PopulatedThought

router = APIRouter(prefix="/thoughts", tags=["thoughts"])


def thought_out(thought: Thought) -> ThoughtOut:
    return ThoughtOut(
        id=thought.id,
        thoughtText=thought.thought_text,
        createdAt=thought.created_at,
        username=thought.username,
        reactions=list(thought.reactions or []),
    )


def _thought_detail(populated: PopulatedThought) -> ThoughtDetailOut:
    thought = populated.thought
    return ThoughtDetailOut(
        id=thought.id,
        thoughtText=thought.thought_text,
        createdAt=thought.created_at,
        username=thought.username,
        reactions=[reaction_out(r) for r in populated.reactions],
    )


@router.get("", response_model=List[ThoughtDetailOut])
def list_thoughts(db: Session = Depends(get_db)):
    """
    List all thoughts with their reactions expanded.
    """
    return [_thought_detail(p) for p in thought_service.list_thoughts(db)]


@router.post("", response_model=ThoughtOut, status_code=status.HTTP_201_CREATED)
def create_thought(data: ThoughtCreate, db: Session = Depends(get_db)):
    """
    Create a thought.

    - **thoughtText**: Text of the thought
    - **username**: Author name
    - **userId**: Optional author id; the thought is added to that user's thoughts
    """
    thought = thought_service.create_thought(db, data.model_dump(exclude_none=True))
    return thought_out(thought)


@router.get("/{thought_id}", response_model=ThoughtDetailOut)
def get_thought(thought_id: str, db: Session = Depends(get_db)):
    return _thought_detail(thought_service.get_thought(db, thought_id))


@router.put("/{thought_id}", response_model=ThoughtOut)
def update_thought(thought_id: str, data: ThoughtUpdate, db: Session = Depends(get_db)):
    """
    Replace the supplied fields of a thought.
    """
    thought = thought_service.update_thought(db, thought_id, data.model_dump(exclude_unset=True))
    return thought_out(thought)


@router.delete("/{thought_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_thought(thought_id: str, db: Session = Depends(get_db)):
    """
    Delete a thought. Its reactions are not deleted.
    """
    thought_service.delete_thought(db, thought_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post(
    "/{thought_id}/reactions",
    response_model=ReactionOut,
    status_code=status.HTTP_201_CREATED,
)
def add_reaction(thought_id: str, data: ReactionCreate, db: Session = Depends(get_db)):
    """
    Create a reaction and attach it to the thought.

    Returns the created reaction.
    """
    reaction = thought_service.add_reaction(db, thought_id, data.model_dump())
    return reaction_out(reaction)


@router.delete(
    "/{thought_id}/reactions/{reaction_id}",
    status_code=status.HTTP_204_NO_CONTENT,
)
def remove_reaction(thought_id: str, reaction_id: str, db: Session = Depends(get_db)):
    """
    Detach a reaction from the thought and delete it.
    """
    thought_service.remove_reaction(db, thought_id, reaction_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
