"""
Help-desk User Directory

Fixed set of accounts keyed by username:
- 20 end users   (user1..user20,  ids u1..u20)
- 4 IT agents    (agente1..agente4, ids a1..a4)
- 3 admins       (admin1..admin3, ids admin1..admin3)

Seeded once, read-only afterwards.
"""

import logging
from typing import Dict, List, Optional

from ..models.user import User, UserRole
from .errors import UserNotFoundError

logger = logging.getLogger(__name__)


USER_COUNT = 20
AGENT_COUNT = 4
ADMIN_COUNT = 3
EMAIL_DOMAIN = "enterprise.com"


def seed_users() -> List[User]:
    """Deterministic demo accounts, in directory order."""
    users = []

    for i in range(1, USER_COUNT + 1):
        users.append(User(
            id=f"u{i}",
            username=f"user{i}",
            full_name=f"Usuario {i}",
            role=UserRole.USER,
            department="Ventas" if i % 2 == 0 else "Marketing",
            email=f"user{i}@{EMAIL_DOMAIN}",
        ))

    for i in range(1, AGENT_COUNT + 1):
        users.append(User(
            id=f"a{i}",
            username=f"agente{i}",
            full_name=f"Agente IT {i}",
            role=UserRole.AGENT,
            department="IT Support",
            email=f"agente{i}@{EMAIL_DOMAIN}",
        ))

    for i in range(1, ADMIN_COUNT + 1):
        users.append(User(
            id=f"admin{i}",
            username=f"admin{i}",
            full_name=f"Administrador {i}",
            role=UserRole.ADMIN,
            department="IT Management",
            email=f"admin{i}@{EMAIL_DOMAIN}",
        ))

    return users


class UserDirectory:
    """
    Username lookup over the seeded accounts.

    There is no credential check: knowing a username is enough to log in.
    """

    def __init__(self, users: Optional[List[User]] = None):
        if users is None:
            users = seed_users()
        self._by_username: Dict[str, User] = {u.username: u for u in users}
        self._by_id: Dict[str, User] = {u.id: u for u in users}

    def lookup(self, username: str) -> Optional[User]:
        return self._by_username.get(username)

    def login(self, username: str) -> User:
        """
        Resolve a login attempt.

        Raises UserNotFoundError for unknown usernames.
        """
        user = self.lookup(username)
        if user is None:
            logger.warning("Login rejected for unknown username %r", username)
            raise UserNotFoundError()
        logger.info("User %s logged in as %s", user.id, user.role.value)
        return user

    def get(self, user_id: str) -> Optional[User]:
        return self._by_id.get(user_id)

    def list_agents(self) -> List[User]:
        return [u for u in self._by_username.values() if u.role == UserRole.AGENT]

    def __len__(self) -> int:
        return len(self._by_username)
