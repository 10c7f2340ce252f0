"""
Help-desk Ticket Service

Ticket lifecycle on top of a TicketRepository:
- create: file a ticket, optionally pre-assigned to an agent
- list_for: role-based visibility (admin / agent / user)
- patch: status, priority and assignment changes with an audit line
- stats: dashboard counters, recomputed on every call

Every lifecycle event lands in ticket.history. Entries are appended,
never rewritten, so the list is chronological by construction.
"""

import logging
from typing import List, Optional

from ..models.ticket import (
    HistoryEntry,
    Ticket,
    TicketPriority,
    TicketStats,
    TicketStatus,
    TERMINAL_STATUSES,
    utcnow,
)
from ..models.user import UserRole
from ..store.memory import TicketRepository
from .errors import TicketNotFoundError

logger = logging.getLogger(__name__)


class HistoryActions:
    """Audit line templates, shown verbatim in the ticket timeline."""

    CREATED = "Ticket creado"
    ASSIGNED_AT_CREATION = "Asignado a {agent_name} al crear"
    UPDATED = "Ticket actualizado"
    STATUS_CHANGED = "Estado cambiado a {status}"
    ASSIGNED = "Asignado a {agent_name}"


class TicketService:
    """
    Owns every ticket mutation.

    Handlers never touch the repository directly, so swapping the
    in-memory store for a persistent one only changes construction.
    """

    def __init__(self, ticket_repo: TicketRepository):
        self.ticket_repo = ticket_repo

    async def create(
        self,
        title: Optional[str] = None,
        description: Optional[str] = None,
        priority: Optional[TicketPriority] = None,
        category: Optional[str] = None,
        creator_id: Optional[str] = None,
        creator_name: Optional[str] = None,
        creator_email: Optional[str] = None,
        creator_dept: Optional[str] = None,
        station: Optional[str] = None,
        area: Optional[str] = None,
        agent_id: Optional[str] = None,
        agent_name: Optional[str] = None,
    ) -> Ticket:
        """
        File a new ticket.

        A ticket created with an agent skips OPEN and starts IN_PROGRESS,
        with a second history line recording the assignment.
        """
        ticket_id = await self.ticket_repo.next_id()
        now = utcnow()

        history = [HistoryEntry(
            action=HistoryActions.CREATED,
            user_id=creator_id,
            user_name=creator_name,
            timestamp=now,
        )]
        if agent_id:
            history.append(HistoryEntry(
                action=HistoryActions.ASSIGNED_AT_CREATION.format(agent_name=agent_name),
                user_id=creator_id,
                user_name=creator_name,
                timestamp=now,
            ))

        ticket = Ticket(
            id=ticket_id,
            title=title,
            description=description,
            status=TicketStatus.IN_PROGRESS if agent_id else TicketStatus.OPEN,
            priority=priority,
            category=category,
            creator_id=creator_id,
            creator_name=creator_name,
            creator_email=creator_email,
            creator_dept=creator_dept,
            station=station,
            area=area,
            agent_id=agent_id,
            agent_name=agent_name,
            created_at=now,
            updated_at=now,
            history=history,
        )

        await self.ticket_repo.add(ticket)
        logger.info(
            "Ticket %s created by %s (status=%s)",
            ticket.id, creator_id, ticket.status.value,
        )
        return ticket

    async def get(self, ticket_id: str) -> Ticket:
        ticket = await self.ticket_repo.get(ticket_id)
        if ticket is None:
            logger.warning("Ticket %s not found", ticket_id)
            raise TicketNotFoundError(ticket_id)
        return ticket

    async def list_for(self, user_id: Optional[str], role: Optional[str]) -> List[Ticket]:
        """
        Tickets visible to the caller.

        - admin: everything
        - agent: tickets assigned to them
        - anyone else: tickets they created
        """
        tickets = await self.ticket_repo.list_all()

        if role == UserRole.ADMIN.value:
            return tickets
        if role == UserRole.AGENT.value:
            return [t for t in tickets if t.agent_id == user_id]
        return [t for t in tickets if t.creator_id == user_id]

    async def patch(
        self,
        ticket_id: str,
        status: Optional[TicketStatus] = None,
        agent_id: Optional[str] = None,
        agent_name: Optional[str] = None,
        priority: Optional[TicketPriority] = None,
        user_id: Optional[str] = None,
        user_name: Optional[str] = None,
    ) -> Ticket:
        """
        Partial update with a single audit line.

        The history action is picked in order, later rules winning:
        1. "Ticket actualizado"
        2. "Estado cambiado a X" when the status actually changed
        3. "Asignado a Y" when an agent was set

        Moving to RESOLVED or CLOSED stamps resolved_at, again on every
        such patch.
        """
        if status:
            status = TicketStatus(status)
        if priority:
            priority = TicketPriority(priority)

        def apply(ticket: Ticket) -> None:
            now = utcnow()
            old_status = ticket.status

            if status:
                ticket.status = status
            if agent_id:
                ticket.agent_id = agent_id
                ticket.agent_name = agent_name
            if priority:
                ticket.priority = priority

            ticket.updated_at = now

            action = HistoryActions.UPDATED
            if status and status != old_status:
                action = HistoryActions.STATUS_CHANGED.format(status=status.value)
            if agent_id:
                action = HistoryActions.ASSIGNED.format(agent_name=agent_name)

            ticket.history.append(HistoryEntry(
                action=action,
                user_id=user_id,
                user_name=user_name,
                timestamp=now,
            ))

            if status in TERMINAL_STATUSES:
                ticket.resolved_at = now

        ticket = await self.ticket_repo.update(ticket_id, apply)
        if ticket is None:
            logger.warning("Patch rejected: ticket %s not found", ticket_id)
            raise TicketNotFoundError(ticket_id)

        logger.info("Ticket %s patched by %s: %s", ticket_id, user_id, ticket.history[-1].action)
        return ticket

    async def stats(self) -> TicketStats:
        """Dashboard counters over the whole store."""
        tickets = await self.ticket_repo.list_all()

        stats = TicketStats(total=len(tickets))
        for ticket in tickets:
            if ticket.status == TicketStatus.OPEN:
                stats.open += 1
            elif ticket.status == TicketStatus.IN_PROGRESS:
                stats.in_progress += 1
            elif ticket.status in TERMINAL_STATUSES:
                stats.resolved += 1

            if ticket.priority is not None:
                stats.by_priority[ticket.priority.value] += 1

        return stats

    async def seed_sample(self) -> Ticket:
        """The demo ticket shipped with a fresh install."""
        return await self.create(
            title="Problema con acceso a VPN",
            description="No puedo conectar a la VPN desde mi casa. Sale error de tiempo de espera.",
            priority=TicketPriority.HIGH,
            category="Red",
            creator_id="u1",
            creator_name="Usuario 1",
            creator_email="user1@enterprise.com",
            creator_dept="Marketing",
        )
