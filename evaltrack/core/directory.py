"""
Campus directory - static allow-list of campuses sharing one password
"""
import hmac
import logging
from typing import Iterable, Optional, Protocol

from evaltrack.models import CampusIdentity


logger = logging.getLogger(__name__)


class IdentityVerifier(Protocol):
    def authenticate(self, username: str, password: str) -> Optional[CampusIdentity]:
        ...


class CampusDirectory:
    """Login succeeds iff the username is a known campus and the password matches"""

    def __init__(self, campuses: Iterable[str], shared_password: str):
        self.campuses = frozenset(campuses)
        self._password = shared_password

    def authenticate(self, username, password) -> Optional[CampusIdentity]:
        """
        Check credentials

        Args:
            username: Campus name
            password: Shared password

        Returns:
            CampusIdentity (campus = username) or None
        """
        if not isinstance(username, str) or not isinstance(password, str):
            return None
        if username not in self.campuses:
            logger.warning(f"🔒 Login refused for unknown campus {username!r}")
            return None
        if not hmac.compare_digest(password.encode('utf-8'), self._password.encode('utf-8')):
            logger.warning(f"🔒 Login refused for {username}: wrong password")
            return None
        return CampusIdentity(username=username, campus=username)
