"""
Help-desk storage backends.
"""

from .memory import (
    TicketRepository,
    CommentRepository,
    InMemoryTicketRepository,
    InMemoryCommentRepository,
)

__all__ = [
    "TicketRepository", "CommentRepository",
    "InMemoryTicketRepository", "InMemoryCommentRepository",
]
