"""
Reactions API endpoints.
"""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from social_api.core.deps import get_db
from social_api.models.reaction import Reaction
from social_api.schemas.reaction import ReactionOut
from social_api.services import thoughts as thought_service

router = APIRouter(prefix="/reactions", tags=["reactions"])


def reaction_out(reaction: Reaction) -> ReactionOut:
    return ReactionOut(
        id=reaction.id,
        reactionBody=reaction.reaction_body,
        createdAt=reaction.created_at,
        username=reaction.username,
    )


@router.get("/{reaction_id}", response_model=ReactionOut)
def get_reaction(reaction_id: str, db: Session = Depends(get_db)):
    """
    Get a single reaction, whether or not a thought still references it.
    """
    return reaction_out(thought_service.get_reaction(db, reaction_id))
