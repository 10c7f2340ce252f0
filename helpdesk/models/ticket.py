"""
Help-desk Ticket Model

Core principles:
1. Ticket = incident filed by an end user
2. History is append-only, one entry per lifecycle event
3. Creator and agent identity are denormalized onto the ticket
4. Comments are a flat thread keyed by ticket id
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


# =============================================================================
# ENUMS
# =============================================================================

class TicketStatus(str, Enum):
    OPEN = "Abierto"
    IN_PROGRESS = "En Proceso"
    WAITING = "En Espera del Usuario"
    ESCALATED = "Escalado"
    RESOLVED = "Resuelto"
    CLOSED = "Cerrado"


class TicketPriority(str, Enum):
    LOW = "Baja"
    MEDIUM = "Media"
    HIGH = "Alta"
    CRITICAL = "Crítica"


# Statuses that stamp resolved_at when patched in
TERMINAL_STATUSES = (TicketStatus.RESOLVED, TicketStatus.CLOSED)

CATEGORIES = [
    "Computadora",
    "Sistema Operativo",
    "Internet",
    "Red",
    "Hardware",
    "Software",
    "Impresoras",
    "Accesos / Credenciales",
    "Otro",
]


# =============================================================================
# CORE MODELS
# =============================================================================

class CamelModel(BaseModel):
    """Base for records that travel as camelCase JSON."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class HistoryEntry(CamelModel):
    """
    One audit line on a ticket.

    Entries are never edited once appended.
    """
    action: str
    user_id: Optional[str] = None
    user_name: Optional[str] = None
    timestamp: datetime = Field(default_factory=utcnow)


class Ticket(CamelModel):
    """
    The core ticket entity.

    Missing fields on creation are kept as None rather than rejected,
    the client is trusted to send a complete form.
    """
    id: str

    # Core properties
    title: Optional[str] = None
    description: Optional[str] = None
    status: TicketStatus = TicketStatus.OPEN
    priority: Optional[TicketPriority] = None
    category: Optional[str] = None

    # Creator (denormalized, weak reference into the directory)
    creator_id: Optional[str] = None
    creator_name: Optional[str] = None
    creator_email: Optional[str] = None
    creator_dept: Optional[str] = None

    # Location
    station: Optional[str] = None
    area: Optional[str] = None

    # Assignment (denormalized)
    agent_id: Optional[str] = None
    agent_name: Optional[str] = None

    # Timestamps
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)
    resolved_at: Optional[datetime] = None

    history: List[HistoryEntry] = Field(default_factory=list)


class Comment(CamelModel):
    """Message on a ticket thread."""
    model_config = ConfigDict(frozen=True)

    id: str
    ticket_id: str
    user_id: Optional[str] = None
    user_name: Optional[str] = None
    text: Optional[str] = None
    created_at: datetime = Field(default_factory=utcnow)


# =============================================================================
# AGGREGATES
# =============================================================================

class TicketStats(CamelModel):
    """Admin dashboard counters."""
    total: int = 0
    open: int = 0
    in_progress: int = 0
    resolved: int = 0  # resolved + closed
    by_priority: Dict[str, int] = Field(
        default_factory=lambda: {p.value: 0 for p in TicketPriority}
    )
