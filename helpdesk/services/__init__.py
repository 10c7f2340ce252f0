"""
Help-desk Services

Business logic for users, tickets and comments.
"""

from .errors import HelpdeskError, UserNotFoundError, TicketNotFoundError
from .directory import UserDirectory, seed_users
from .tickets import TicketService, HistoryActions
from .comments import CommentService

__all__ = [
    # Errors
    "HelpdeskError", "UserNotFoundError", "TicketNotFoundError",

    # Directory
    "UserDirectory", "seed_users",

    # Ticket lifecycle
    "TicketService", "HistoryActions",

    # Comment threads
    "CommentService",
]
