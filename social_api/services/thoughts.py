"""
Thought persistence - CRUD over thoughts and their reaction sequence.
"""
import logging
from dataclasses import dataclass, field
from typing import Dict, List

from sqlalchemy.orm import Session

from social_api.core.exceptions import NotFoundError, ValidationError
from social_api.models.reaction import Reaction
from social_api.models.thought import Thought
from social_api.services.users import get_user_or_404

logger = logging.getLogger(__name__)


@dataclass
class PopulatedThought:
    """A thought together with its resolved reactions, in stored order."""

    thought: Thought
    reactions: List[Reaction] = field(default_factory=list)


def _populate(db: Session, thoughts: List[Thought]) -> List[PopulatedThought]:
    reaction_ids = {rid for thought in thoughts for rid in thought.reactions or []}

    reactions: Dict[str, Reaction] = {}
    if reaction_ids:
        reactions = {
            r.id: r
            for r in db.query(Reaction).filter(Reaction.id.in_(list(reaction_ids))).all()
        }

    return [
        PopulatedThought(
            thought=thought,
            reactions=[reactions[rid] for rid in thought.reactions or [] if rid in reactions],
        )
        for thought in thoughts
    ]


def get_thought_or_404(db: Session, thought_id: str) -> Thought:
    thought = db.query(Thought).filter(Thought.id == thought_id).first()
    if thought is None:
        raise NotFoundError("Thought not found")
    return thought


def create_thought(db: Session, fields: dict) -> Thought:
    """
    Create a thought.

    When ``userId`` is supplied the new thought is also added to that
    user's thoughts, in the same commit.
    """
    missing = [name for name in ("thoughtText", "username") if not fields.get(name)]
    if missing:
        raise ValidationError(f"Missing required field(s): {', '.join(missing)}")

    author = None
    if fields.get("userId"):
        author = get_user_or_404(db, fields["userId"])

    thought = Thought(thought_text=fields["thoughtText"], username=fields["username"])
    db.add(thought)
    db.flush()

    if author is not None and thought.id not in author.thoughts:
        author.thoughts = [*author.thoughts, thought.id]

    db.commit()
    db.refresh(thought)
    logger.info(f"Created thought {thought.id}")
    return thought


def list_thoughts(db: Session) -> List[PopulatedThought]:
    """All thoughts with reactions expanded."""
    thoughts = db.query(Thought).order_by(Thought.created_at).all()
    return _populate(db, thoughts)


def get_thought(db: Session, thought_id: str) -> PopulatedThought:
    return _populate(db, [get_thought_or_404(db, thought_id)])[0]


def update_thought(db: Session, thought_id: str, fields: dict) -> Thought:
    thought = get_thought_or_404(db, thought_id)

    cleared = [name for name in ("thoughtText", "username") if name in fields and not fields[name]]
    if cleared:
        raise ValidationError(f"Required field(s) cannot be empty: {', '.join(cleared)}")

    if "thoughtText" in fields:
        thought.thought_text = fields["thoughtText"]
    if "username" in fields:
        thought.username = fields["username"]

    db.commit()
    db.refresh(thought)
    return thought


def delete_thought(db: Session, thought_id: str) -> None:
    """Delete a thought. Its reactions stay in the store."""
    thought = get_thought_or_404(db, thought_id)
    db.delete(thought)
    db.commit()
    logger.info(f"Deleted thought {thought_id}")


def get_reaction(db: Session, reaction_id: str) -> Reaction:
    reaction = db.query(Reaction).filter(Reaction.id == reaction_id).first()
    if reaction is None:
        raise NotFoundError("Reaction not found")
    return reaction


def add_reaction(db: Session, thought_id: str, fields: dict) -> Reaction:
    """
    Create a reaction and append it to the thought's reactions.

    Raises:
        NotFoundError: If the thought does not exist; nothing is created
    """
    thought = get_thought_or_404(db, thought_id)

    missing = [name for name in ("reactionBody", "username") if not fields.get(name)]
    if missing:
        raise ValidationError(f"Missing required field(s): {', '.join(missing)}")

    reaction = Reaction(reaction_body=fields["reactionBody"], username=fields["username"])
    db.add(reaction)
    db.flush()

    thought.reactions = [*thought.reactions, reaction.id]
    db.commit()
    db.refresh(reaction)
    logger.info(f"Added reaction {reaction.id} to thought {thought_id}")
    return reaction


def remove_reaction(db: Session, thought_id: str, reaction_id: str) -> None:
    """
    Detach a reaction from the thought and delete the reaction itself.

    The reaction row is deleted by id whether or not this thought references
    it, so a reaction attached to another thought is deleted too and leaves
    a dangling id there. An id that is no longer stored is a no-op.
    """
    thought = get_thought_or_404(db, thought_id)

    if reaction_id in thought.reactions:
        thought.reactions = [rid for rid in thought.reactions if rid != reaction_id]

    db.query(Reaction).filter(Reaction.id == reaction_id).delete(synchronize_session=False)
    db.commit()
    logger.info(f"Removed reaction {reaction_id} from thought {thought_id}")
