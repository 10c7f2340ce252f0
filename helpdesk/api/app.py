"""
Help-desk API

FastAPI application with:
- Username login against the seeded directory
- Ticket CRUD with role-based listing
- Comment threads per ticket
- Admin dashboard counters
"""

import logging
from contextlib import asynccontextmanager
from typing import List, Optional

from fastapi import APIRouter, Depends, FastAPI, Query, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from ..config import Settings, get_settings
from ..logs import configure_logging
from ..models import (
    CATEGORIES,
    Comment,
    Ticket,
    TicketPriority,
    TicketStats,
    TicketStatus,
    User,
)
from ..models.ticket import CamelModel
from ..services import (
    CommentService,
    HelpdeskError,
    TicketNotFoundError,
    TicketService,
    UserDirectory,
    UserNotFoundError,
)
from ..store import InMemoryCommentRepository, InMemoryTicketRepository

logger = logging.getLogger(__name__)


# =============================================================================
# REQUEST/RESPONSE MODELS
# =============================================================================

class LoginRequest(CamelModel):
    username: Optional[str] = None


class CreateTicketRequest(CamelModel):
    title: Optional[str] = None
    description: Optional[str] = None
    priority: Optional[TicketPriority] = None
    category: Optional[str] = None
    creator_id: Optional[str] = None
    creator_name: Optional[str] = None
    creator_email: Optional[str] = None
    creator_dept: Optional[str] = None
    station: Optional[str] = None
    area: Optional[str] = None
    agent_id: Optional[str] = None  # Pre-assign at creation
    agent_name: Optional[str] = None


class PatchTicketRequest(CamelModel):
    status: Optional[TicketStatus] = None
    agent_id: Optional[str] = None
    agent_name: Optional[str] = None
    priority: Optional[TicketPriority] = None

    # Actor, for the history line
    user_id: Optional[str] = None
    user_name: Optional[str] = None


class CreateCommentRequest(CamelModel):
    user_id: Optional[str] = None
    user_name: Optional[str] = None
    text: Optional[str] = None


class MessageResponse(CamelModel):
    message: str


# =============================================================================
# DEPENDENCIES
# =============================================================================

def get_directory(request: Request) -> UserDirectory:
    return request.app.state.directory


def get_ticket_service(request: Request) -> TicketService:
    return request.app.state.tickets


def get_comment_service(request: Request) -> CommentService:
    return request.app.state.comments


router = APIRouter()


# =============================================================================
# HEALTH CHECK
# =============================================================================

@router.get("/health")
async def health_check(request: Request):
    settings: Settings = request.app.state.settings
    return {
        "status": "healthy",
        "service": settings.APP_NAME,
        "version": settings.VERSION,
    }


# =============================================================================
# AUTH & DIRECTORY ENDPOINTS
# =============================================================================

@router.post(
    "/api/auth/login",
    response_model=User,
    responses={401: {"model": MessageResponse}},
)
async def login(body: LoginRequest, directory: UserDirectory = Depends(get_directory)):
    """
    Log in by username.

    No password and no token: the client keeps the returned user and
    sends its id and role on every later call.
    """
    return directory.login(body.username)


@router.get("/api/agents", response_model=List[User])
async def list_agents(directory: UserDirectory = Depends(get_directory)):
    return directory.list_agents()


# =============================================================================
# TICKET ENDPOINTS
# =============================================================================

@router.get("/api/tickets", response_model=List[Ticket])
async def list_tickets(
    user_id: Optional[str] = Query(None, alias="userId"),
    role: Optional[str] = None,
    tickets: TicketService = Depends(get_ticket_service),
):
    """
    Tickets visible to the caller.

    admin sees all, agent sees assigned, anyone else sees their own.
    """
    return await tickets.list_for(user_id, role)


@router.post("/api/tickets", response_model=Ticket, status_code=status.HTTP_201_CREATED)
async def create_ticket(
    body: CreateTicketRequest,
    tickets: TicketService = Depends(get_ticket_service),
):
    """
    Create a new ticket.

    With agentId set the ticket starts IN_PROGRESS instead of OPEN.
    """
    return await tickets.create(**body.model_dump())


@router.get(
    "/api/tickets/{ticket_id}",
    response_model=Ticket,
    responses={404: {"model": MessageResponse}},
)
async def get_ticket(ticket_id: str, tickets: TicketService = Depends(get_ticket_service)):
    return await tickets.get(ticket_id)


@router.patch(
    "/api/tickets/{ticket_id}",
    response_model=Ticket,
    responses={404: {"model": MessageResponse}},
)
async def patch_ticket(
    ticket_id: str,
    body: PatchTicketRequest,
    tickets: TicketService = Depends(get_ticket_service),
):
    """
    Change status, priority or assignment.

    Appends exactly one history entry attributed to userId/userName.
    """
    return await tickets.patch(ticket_id, **body.model_dump())


# =============================================================================
# COMMENT ENDPOINTS
# =============================================================================

@router.get("/api/tickets/{ticket_id}/comments", response_model=List[Comment])
async def list_comments(ticket_id: str, comments: CommentService = Depends(get_comment_service)):
    return await comments.list_by_ticket(ticket_id)


@router.post(
    "/api/tickets/{ticket_id}/comments",
    response_model=Comment,
    status_code=status.HTTP_201_CREATED,
)
async def add_comment(
    ticket_id: str,
    body: CreateCommentRequest,
    comments: CommentService = Depends(get_comment_service),
):
    return await comments.add(ticket_id, body.user_id, body.user_name, body.text)


# =============================================================================
# DASHBOARD ENDPOINTS
# =============================================================================

@router.get("/api/stats", response_model=TicketStats)
async def get_stats(tickets: TicketService = Depends(get_ticket_service)):
    """Counters for the admin dashboard, recomputed per request."""
    return await tickets.stats()


@router.get("/api/categories", response_model=List[str])
async def list_categories():
    return CATEGORIES


# =============================================================================
# ERROR HANDLERS
# =============================================================================

ERROR_STATUS = {
    UserNotFoundError: status.HTTP_401_UNAUTHORIZED,
    TicketNotFoundError: status.HTTP_404_NOT_FOUND,
}


async def helpdesk_error_handler(request: Request, exc: HelpdeskError) -> JSONResponse:
    code = ERROR_STATUS.get(type(exc), status.HTTP_400_BAD_REQUEST)
    return JSONResponse(status_code=code, content={"message": exc.message})


# =============================================================================
# APP SETUP
# =============================================================================

@asynccontextmanager
async def lifespan(app: FastAPI):
    settings: Settings = app.state.settings
    configure_logging(settings.LOG_LEVEL)
    if settings.SEED_SAMPLE_TICKET:
        await app.state.tickets.seed_sample()
    logger.info(
        "%s %s ready on http://%s:%s (%d accounts)",
        settings.APP_NAME, settings.VERSION, settings.HOST, settings.PORT,
        len(app.state.directory),
    )
    yield


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Build an application with fresh in-memory stores.

    Each call gets its own stores, so tests never share tickets.
    """
    settings = settings or get_settings()

    app = FastAPI(
        title=settings.APP_NAME,
        description="IT help-desk ticketing: incidents, assignment, history and comments",
        version=settings.VERSION,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.state.settings = settings
    app.state.directory = UserDirectory()
    app.state.tickets = TicketService(InMemoryTicketRepository(id_base=settings.TICKET_ID_BASE))
    app.state.comments = CommentService(InMemoryCommentRepository())

    app.add_exception_handler(HelpdeskError, helpdesk_error_handler)
    app.include_router(router)
    return app


app = create_app()


# =============================================================================
# RUN
# =============================================================================

if __name__ == "__main__":
    import uvicorn
    settings = get_settings()
    uvicorn.run(app, host=settings.HOST, port=settings.PORT)
