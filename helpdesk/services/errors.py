"""
Help-desk domain errors.

Services raise these; the API layer maps them to HTTP responses.
The message is user facing and travels as-is in the response body.
"""

from typing import Optional


class HelpdeskError(Exception):
    """Base for all help-desk domain errors."""

    message = "Error en la mesa de ayuda"

    def __init__(self, message: Optional[str] = None):
        super().__init__(message or self.message)
        self.message = message or self.message


class UserNotFoundError(HelpdeskError):
    """Raised when a username is not in the directory."""

    message = "Usuario no encontrado"


class TicketNotFoundError(HelpdeskError):
    """Raised when a ticket id is not in the store."""

    message = "Ticket no encontrado"

    def __init__(self, ticket_id: str, message: Optional[str] = None):
        super().__init__(message)
        self.ticket_id = ticket_id
