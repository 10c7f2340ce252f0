import pytest
from fastapi.testclient import TestClient

from helpdesk.api.app import create_app
from helpdesk.config import Settings
from helpdesk.services import CommentService, TicketService, UserDirectory
from helpdesk.store import InMemoryCommentRepository, InMemoryTicketRepository


@pytest.fixture
def settings():
    return Settings(SEED_SAMPLE_TICKET=False, LOG_LEVEL="WARNING")


@pytest.fixture
def client(settings):
    with TestClient(create_app(settings)) as c:
        yield c


@pytest.fixture
def directory():
    return UserDirectory()


@pytest.fixture
def ticket_repo():
    return InMemoryTicketRepository()


@pytest.fixture
def ticket_service(ticket_repo):
    return TicketService(ticket_repo)


@pytest.fixture
def comment_service():
    return CommentService(InMemoryCommentRepository())


def ticket_payload(**overrides):
    """Form body as the web client posts it."""
    payload = {
        "title": "Impresora no imprime",
        "description": "La impresora del piso 3 no responde.",
        "priority": "Media",
        "category": "Impresoras",
        "creatorId": "u5",
        "creatorName": "Usuario 5",
        "creatorEmail": "user5@enterprise.com",
        "creatorDept": "Marketing",
    }
    payload.update(overrides)
    return payload


@pytest.fixture
def payload():
    return ticket_payload
