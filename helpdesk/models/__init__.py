"""
Help-desk Models
"""

from .user import UserRole, User
from .ticket import (
    # Enums
    TicketStatus,
    TicketPriority,
    TERMINAL_STATUSES,
    CATEGORIES,

    # Core models
    HistoryEntry,
    Ticket,
    Comment,

    # Aggregates
    TicketStats,
)

__all__ = [
    "UserRole", "User",
    "TicketStatus", "TicketPriority", "TERMINAL_STATUSES", "CATEGORIES",
    "HistoryEntry", "Ticket", "Comment",
    "TicketStats",
]
