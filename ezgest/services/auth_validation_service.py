# ezgest/services/auth_validation_service.py
from pymongo.database import Database
from loguru import logger

from ..config.logging_config import mask_email
from ..core.exceptions import ForbiddenError, NotFoundError, NotMemberError
from ..db import company_db, user_db
from ..utilities.helpers.database_helpers import to_object_id


class AuthValidationService:
    """Validates user and tenant relationships"""

    @staticmethod
    def validate_user_tenant_access(db: Database, email: str, company_id: str) -> dict:
        """
        Membership check for tenant-scoped requests.

        The user is re-fetched on every call so that a removal takes effect
        immediately, even for holders of a still-valid token. Membership is
        an exact string match against ``companies``.

        Returns:
            The user document

        Raises:
            NotMemberError: unknown user or company not in the user's set
        """
        user = user_db.get_user_by_email(db, email)
        if not user:
            logger.warning(f"Token for unknown user {mask_email(email)}")
            raise NotMemberError("Forbidden: access denied to this company")

        companies = user.get("companies") or []
        if company_id not in companies:
            logger.warning(f"User {mask_email(email)} is not a member of company {company_id}")
            raise NotMemberError("Forbidden: access denied to this company")

        return user

    @staticmethod
    def require_owner(db: Database, company_id: str, email: str) -> dict:
        """
        Ownership check for owner-only operations

        Returns:
            The company document

        Raises:
            NotFoundError: the company does not exist
            ForbiddenError: ``email`` is not the company owner
        """
        object_id = to_object_id(company_id)
        company = company_db.get_company_by_id(db, object_id) if object_id else None
        if not company:
            raise NotFoundError("Company not found")

        if company.get("owner") != email:
            logger.warning(f"User {mask_email(email)} attempted an owner-only action on company {company_id}")
            raise ForbiddenError("Only the company owner can perform this action")

        return company


# Global instance
auth_validation_service = AuthValidationService()
