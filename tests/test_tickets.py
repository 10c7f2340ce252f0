"""
Tests for the ticket lifecycle service.
"""

import asyncio
import logging
from concurrent.futures import ThreadPoolExecutor

import pytest

from helpdesk.models import TicketPriority, TicketStatus
from helpdesk.services import HistoryActions, TicketNotFoundError


async def test_create_without_agent_is_open(ticket_service):
    """A plain ticket starts OPEN with only the creation line."""
    ticket = await ticket_service.create(title="VPN", creator_id="u1", creator_name="Usuario 1")

    assert ticket.id == "T-1001"
    assert ticket.status == TicketStatus.OPEN
    assert len(ticket.history) == 1
    assert ticket.history[0].action == HistoryActions.CREATED
    assert ticket.history[0].user_id == "u1"
    assert ticket.created_at == ticket.updated_at
    assert ticket.resolved_at is None


async def test_create_with_agent_is_in_progress(ticket_service):
    """Pre-assigned tickets skip OPEN and record the assignment."""
    ticket = await ticket_service.create(
        title="Monitor", creator_id="u2", creator_name="Usuario 2",
        agent_id="a1", agent_name="Agente IT 1",
    )

    assert ticket.status == TicketStatus.IN_PROGRESS
    assert [h.action for h in ticket.history] == [
        "Ticket creado",
        "Asignado a Agente IT 1 al crear",
    ]
    assert ticket.history[-1].timestamp >= ticket.history[0].timestamp


async def test_create_tolerates_missing_fields(ticket_service):
    ticket = await ticket_service.create()

    assert ticket.title is None
    assert ticket.priority is None
    assert ticket.history


async def test_ids_are_sequential(ticket_service):
    ids = [(await ticket_service.create(title=str(i))).id for i in range(3)]
    assert ids == ["T-1001", "T-1002", "T-1003"]


async def test_list_for_user_only_own_tickets(ticket_service):
    """role=user sees only what they created, in insertion order."""
    first = await ticket_service.create(title="a", creator_id="u5")
    await ticket_service.create(title="b", creator_id="u6")
    third = await ticket_service.create(title="c", creator_id="u5")

    visible = await ticket_service.list_for("u5", "user")

    assert [t.id for t in visible] == [first.id, third.id]
    assert all(t.creator_id == "u5" for t in visible)


async def test_list_for_agent_only_assigned(ticket_service):
    await ticket_service.create(title="a", creator_id="u1", agent_id="a1", agent_name="Agente IT 1")
    await ticket_service.create(title="b", creator_id="u1", agent_id="a2", agent_name="Agente IT 2")
    await ticket_service.create(title="c", creator_id="u1")

    visible = await ticket_service.list_for("a1", "agent")

    assert [t.title for t in visible] == ["a"]


async def test_list_for_admin_sees_all(ticket_service):
    for i in range(3):
        await ticket_service.create(title=str(i), creator_id=f"u{i + 1}")

    assert len(await ticket_service.list_for("admin1", "admin")) == 3


async def test_list_for_missing_role_falls_back_to_creator(ticket_service):
    await ticket_service.create(title="a", creator_id="u1")

    assert len(await ticket_service.list_for("u1", None)) == 1
    assert await ticket_service.list_for(None, None) == []


async def test_patch_status_change(ticket_service):
    ticket = await ticket_service.create(title="a", creator_id="u1")

    patched = await ticket_service.patch(
        ticket.id, status=TicketStatus.IN_PROGRESS, user_id="a1", user_name="Agente IT 1",
    )

    assert patched.status == TicketStatus.IN_PROGRESS
    assert patched.history[-1].action == "Estado cambiado a En Proceso"
    assert patched.history[-1].user_name == "Agente IT 1"
    assert patched.updated_at >= patched.created_at


async def test_patch_same_status_is_generic_update(ticket_service):
    ticket = await ticket_service.create(title="a")

    patched = await ticket_service.patch(ticket.id, status=TicketStatus.OPEN)

    assert patched.history[-1].action == HistoryActions.UPDATED


async def test_patch_assignment_overrides_status_message(ticket_service):
    """Status and agent in one patch leave a single assignment line."""
    ticket = await ticket_service.create(title="a")

    patched = await ticket_service.patch(
        ticket.id,
        status=TicketStatus.IN_PROGRESS,
        agent_id="a3",
        agent_name="Agente IT 3",
        user_id="admin1",
    )

    assert len(patched.history) == 2
    assert patched.history[-1].action == "Asignado a Agente IT 3"
    assert patched.agent_id == "a3"
    assert patched.agent_name == "Agente IT 3"
    assert patched.status == TicketStatus.IN_PROGRESS


async def test_patch_priority_only(ticket_service):
    ticket = await ticket_service.create(title="a", priority=TicketPriority.LOW)

    patched = await ticket_service.patch(ticket.id, priority=TicketPriority.CRITICAL)

    assert patched.priority == TicketPriority.CRITICAL
    assert patched.history[-1].action == HistoryActions.UPDATED


async def test_resolved_at_is_reset_on_every_close(ticket_service):
    """Resolving then closing stamps resolved_at twice."""
    ticket = await ticket_service.create(title="a")

    resolved = await ticket_service.patch(ticket.id, status=TicketStatus.RESOLVED)
    first_stamp = resolved.resolved_at
    assert first_stamp is not None

    closed = await ticket_service.patch(ticket.id, status=TicketStatus.CLOSED)
    assert closed.resolved_at is not None
    assert closed.resolved_at >= first_stamp
    assert closed.resolved_at == closed.updated_at


async def test_non_terminal_status_leaves_resolved_at(ticket_service):
    ticket = await ticket_service.create(title="a")

    patched = await ticket_service.patch(ticket.id, status=TicketStatus.WAITING)

    assert patched.resolved_at is None


async def test_patch_unknown_ticket(ticket_service, ticket_repo):
    """Unknown ids raise and leave the store untouched."""
    ticket = await ticket_service.create(title="a")

    with pytest.raises(TicketNotFoundError) as exc_info:
        await ticket_service.patch("T-9999", status=TicketStatus.CLOSED)

    assert exc_info.value.ticket_id == "T-9999"
    assert exc_info.value.message == "Ticket no encontrado"
    assert len(ticket_repo) == 1
    stored = await ticket_service.get(ticket.id)
    assert stored.status == TicketStatus.OPEN
    assert len(stored.history) == 1


async def test_get_unknown_ticket(ticket_service):
    with pytest.raises(TicketNotFoundError):
        await ticket_service.get("T-1")


async def test_history_stays_chronological(ticket_service):
    ticket = await ticket_service.create(title="a", agent_id="a1", agent_name="Agente IT 1")
    for status in (TicketStatus.WAITING, TicketStatus.ESCALATED, TicketStatus.RESOLVED):
        ticket = await ticket_service.patch(ticket.id, status=status)

    stamps = [h.timestamp for h in ticket.history]
    assert stamps == sorted(stamps)
    assert len(stamps) == 5


async def test_stats_counts(ticket_service):
    """Three tickets Baja, Alta, Alta give two Alta."""
    await ticket_service.create(priority=TicketPriority.LOW)
    second = await ticket_service.create(priority=TicketPriority.HIGH)
    third = await ticket_service.create(priority=TicketPriority.HIGH, agent_id="a1", agent_name="x")
    await ticket_service.patch(second.id, status=TicketStatus.CLOSED)

    stats = await ticket_service.stats()

    assert stats.total == 3
    assert stats.open == 1
    assert stats.in_progress == 1
    assert stats.resolved == 1
    assert stats.by_priority == {"Baja": 1, "Media": 0, "Alta": 2, "Crítica": 0}
    assert third.status == TicketStatus.IN_PROGRESS


async def test_stats_empty_store(ticket_service):
    stats = await ticket_service.stats()

    assert stats.total == 0
    assert set(stats.by_priority) == {"Baja", "Media", "Alta", "Crítica"}


async def test_seed_sample(ticket_service):
    ticket = await ticket_service.seed_sample()

    assert ticket.id == "T-1001"
    assert ticket.priority == TicketPriority.HIGH
    assert ticket.creator_id == "u1"


async def test_patch_accepts_wire_labels(ticket_service):
    """Plain label strings behave like the enum members."""
    ticket = await ticket_service.create(title="a")

    patched = await ticket_service.patch(ticket.id, status="Resuelto", priority="Alta")

    assert patched.status == TicketStatus.RESOLVED
    assert patched.priority == TicketPriority.HIGH
    assert patched.history[-1].action == "Estado cambiado a Resuelto"
    assert patched.resolved_at is not None


async def test_get_unknown_ticket_logs_warning(ticket_service, caplog):
    with caplog.at_level(logging.WARNING, logger="helpdesk"):
        with pytest.raises(TicketNotFoundError):
            await ticket_service.get("T-404")

    assert any(
        r.levelno == logging.WARNING and "T-404" in r.getMessage()
        for r in caplog.records
    )


def test_concurrent_creates_get_distinct_ids(ticket_service, ticket_repo):
    """Creating from many threads never hands out the same id twice."""
    count = 200

    def create_one(i):
        return asyncio.run(ticket_service.create(title=f"t{i}", creator_id="u1")).id

    with ThreadPoolExecutor(max_workers=16) as pool:
        ids = list(pool.map(create_one, range(count)))

    assert len(set(ids)) == count
    assert len(ticket_repo) == count
    assert sorted(int(i[2:]) for i in ids) == list(range(1001, 1001 + count))
