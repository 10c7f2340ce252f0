"""
Help-desk In-Memory Store

Repository interfaces the services depend on, plus the process-local
implementations used when nothing is persisted.

Every mutation goes through a single lock per repository so the id
counter and the backing collections stay consistent even when the
host runs requests on a thread pool.
"""

import itertools
import threading
from abc import ABC, abstractmethod
from typing import Callable, Dict, List, Optional

from ..models.ticket import Comment, Ticket


# =============================================================================
# INTERFACES
# =============================================================================

class TicketRepository(ABC):
    """Ordered ticket collection keyed by ticket id."""

    @abstractmethod
    async def next_id(self) -> str:
        """Reserve the next ticket id."""

    @abstractmethod
    async def add(self, ticket: Ticket) -> None:
        ...

    @abstractmethod
    async def get(self, ticket_id: str) -> Optional[Ticket]:
        ...

    @abstractmethod
    async def update(self, ticket_id: str, mutate: Callable[[Ticket], None]) -> Optional[Ticket]:
        """
        Apply mutate to the stored ticket atomically.

        Returns None, without calling mutate, when the id is unknown.
        """

    @abstractmethod
    async def list_all(self) -> List[Ticket]:
        """All tickets in insertion order."""


class CommentRepository(ABC):
    """Flat comment collection."""

    @abstractmethod
    async def add(self, comment: Comment) -> None:
        ...

    @abstractmethod
    async def list_for_ticket(self, ticket_id: str) -> List[Comment]:
        ...


# =============================================================================
# IN-MEMORY IMPLEMENTATIONS
# =============================================================================

class InMemoryTicketRepository(TicketRepository):
    """
    Dict-backed ticket store.

    Python dicts keep insertion order, which is the listing order.
    Ids come from a monotonic counter, never from the collection size.
    """

    ID_PREFIX = "T-"

    def __init__(self, id_base: int = 1000):
        self._tickets: Dict[str, Ticket] = {}
        self._counter = itertools.count(id_base + 1)
        self._lock = threading.Lock()

    async def next_id(self) -> str:
        with self._lock:
            return f"{self.ID_PREFIX}{next(self._counter)}"

    async def add(self, ticket: Ticket) -> None:
        with self._lock:
            self._tickets[ticket.id] = ticket

    async def get(self, ticket_id: str) -> Optional[Ticket]:
        with self._lock:
            return self._tickets.get(ticket_id)

    async def update(self, ticket_id: str, mutate: Callable[[Ticket], None]) -> Optional[Ticket]:
        with self._lock:
            ticket = self._tickets.get(ticket_id)
            if ticket is None:
                return None
            mutate(ticket)
            return ticket

    async def list_all(self) -> List[Ticket]:
        with self._lock:
            return list(self._tickets.values())

    def __len__(self) -> int:
        return len(self._tickets)


class InMemoryCommentRepository(CommentRepository):
    """List-backed comment store."""

    def __init__(self):
        self._comments: List[Comment] = []
        self._lock = threading.Lock()

    async def add(self, comment: Comment) -> None:
        with self._lock:
            self._comments.append(comment)

    async def list_for_ticket(self, ticket_id: str) -> List[Comment]:
        with self._lock:
            return [c for c in self._comments if c.ticket_id == ticket_id]

    def __len__(self) -> int:
        return len(self._comments)
