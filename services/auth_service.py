"""
services/auth_service.py
------------------------
Member login.
"""

from typing import Optional

from db.connection import Database
from models.member import LoginRecord
from repositories.member_repo import MemberRepository
from security.auth import PasswordChecker, check_password
from utils.logger import get_logger
from utils.validators import is_identifier

logger = get_logger(__name__)


class AuthService:
    """Validates member id / password pairs."""

    def __init__(self, db: Database, password_checker: PasswordChecker = check_password):
        self.repo = MemberRepository(db)
        self.password_checker = password_checker

    def check_login(self, member_id: str, password: str) -> Optional[LoginRecord]:
        """
        Validate a member's credentials.

        Args:
            member_id: Member identifier typed at the login screen.
            password: Password typed at the login screen.

        Returns:
            The member's basic details, or None when the id is malformed,
            unknown, or the password does not match.
        """
        # Malformed ids are treated like unknown ones: no query, no hint.
        if not is_identifier(member_id):
            logger.warning(f"Rejected login with malformed member id {member_id!r}")
            return None

        found = self.repo.get_credentials(member_id)
        if found is None:
            logger.warning(f"Login failed: unknown member {member_id}")
            return None

        record, stored = found
        if not self.password_checker(password, stored):
            logger.warning(f"Login failed: wrong password for member {member_id}")
            return None

        logger.info(f"Member {member_id} logged in as {record.member_type.value}")
        return record
