# ezgest/services/credential_service.py
import hashlib
import hmac
import secrets
from typing import Optional
from pymongo.database import Database
from pymongo.errors import DuplicateKeyError
from loguru import logger

from ..config.setting import settings
from ..config.logging_config import mask_email
from ..core.exceptions import DuplicateError, ValidationError
from ..db import user_db
from ..models.users import RegisterRequest


def generate_salt(num_bytes: int = None) -> str:
    """Random salt rendered as lowercase hex"""
    return secrets.token_hex(num_bytes or settings.SALT_BYTES)


def hash_password(password: str, salt: str) -> str:
    """SHA-256 over salt || password, lowercase hex"""
    return hashlib.sha256(f"{salt}{password}".encode("utf-8")).hexdigest()


class CredentialService:
    """Registers users and checks their passwords"""

    @staticmethod
    def validate_registration(request: RegisterRequest) -> None:
        """
        Check a registration body, first failure wins

        Raises:
            ValidationError: with a message suitable for the client
        """
        if not request.nome or not request.cognome:
            raise ValidationError("First and last name are required")
        if not request.dob:
            raise ValidationError("Date of birth is required")
        if not request.email or "@" not in request.email:
            raise ValidationError("Invalid email")
        if not request.password or len(request.password) < settings.PASSWORD_MIN_LENGTH:
            raise ValidationError(f"Password must be at least {settings.PASSWORD_MIN_LENGTH} characters")

    def register(self, db: Database, request: RegisterRequest) -> str:
        """
        Create a user with a freshly salted password digest

        Args:
            db: Database handle
            request: Registration body

        Returns:
            The new user's identifier

        Raises:
            ValidationError: missing field, bad email or short password
            DuplicateError: the email is already registered
        """
        self.validate_registration(request)

        if user_db.get_user_by_email(db, request.email):
            logger.info(f"Registration rejected, email taken: {mask_email(request.email)}")
            raise DuplicateError("Email already registered")

        salt = generate_salt()
        try:
            user_id = user_db.create_user(
                db,
                nome=request.nome,
                cognome=request.cognome,
                dob=request.dob,
                email=request.email,
                password_digest=hash_password(request.password, salt),
                salt=salt,
            )
        except DuplicateKeyError as e:
            # Lost a race with a concurrent registration
            raise DuplicateError("Email already registered") from e

        logger.info(f"Registered user {user_id} ({mask_email(request.email)})")
        return str(user_id)

    def verify(self, db: Database, email: Optional[str], password: Optional[str]) -> Optional[dict]:
        """
        Check a password against the stored digest

        Returns:
            The user document on match, None otherwise
        """
        if not email or password is None:
            return None

        user = user_db.get_user_by_email(db, email)
        if not user or not user.get("salt"):
            logger.info(f"Login failed for {mask_email(email)}: unknown user")
            return None

        candidate = hash_password(password, user["salt"])
        stored = str(user.get("password") or "")
        if not hmac.compare_digest(candidate.encode("utf-8"), stored.encode("utf-8")):
            logger.info(f"Login failed for {mask_email(email)}: wrong password")
            return None

        return user


# Global service instance
credential_service = CredentialService()
