"""
Help-desk directory accounts.

Three roles share one record shape:
1. user  = files tickets and follows their own
2. agent = claims and resolves tickets assigned to them
3. admin = sees every ticket and the aggregate metrics
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class UserRole(str, Enum):
    USER = "user"
    AGENT = "agent"
    ADMIN = "admin"


class User(BaseModel):
    """
    Directory account.

    Seeded once at startup, never mutated. There is no password:
    login is a plain username lookup.
    """
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )

    id: str
    username: str
    full_name: str
    role: UserRole
    department: str
    email: str
