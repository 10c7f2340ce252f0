"""
Help-desk Comment Service

Flat conversation thread per ticket. The ticket id is a weak reference:
commenting on an id the store has never seen is accepted.
"""

import logging
import secrets
import string
from typing import List, Optional

from ..models.ticket import Comment
from ..store.memory import CommentRepository

logger = logging.getLogger(__name__)


ID_ALPHABET = string.digits + string.ascii_lowercase
ID_LENGTH = 9


def new_comment_id() -> str:
    """Random base-36 id, e.g. 'k3v9x0q2m'."""
    return "".join(secrets.choice(ID_ALPHABET) for _ in range(ID_LENGTH))


class CommentService:

    def __init__(self, comment_repo: CommentRepository):
        self.comment_repo = comment_repo

    async def add(
        self,
        ticket_id: str,
        user_id: Optional[str],
        user_name: Optional[str],
        text: Optional[str],
    ) -> Comment:
        comment = Comment(
            id=new_comment_id(),
            ticket_id=ticket_id,
            user_id=user_id,
            user_name=user_name,
            text=text,
        )
        await self.comment_repo.add(comment)
        logger.info("Comment %s added to %s by %s", comment.id, ticket_id, user_id)
        return comment

    async def list_by_ticket(self, ticket_id: str) -> List[Comment]:
        return await self.comment_repo.list_for_ticket(ticket_id)
