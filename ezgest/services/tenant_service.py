# ezgest/services/tenant_service.py
import secrets
import string
from typing import List, Optional
from pymongo.database import Database
from loguru import logger

from ..config.setting import settings
from ..config.logging_config import mask_email
from ..core.exceptions import InviteCodeNotFoundError, NotFoundError, ValidationError
from ..db import company_db, user_db
from ..models.tenant import Company, Member
from ..utilities.helpers.database_helpers import parse_object_ids, to_object_id
from .auth_validation_service import auth_validation_service

INVITE_CODE_ALPHABET = string.ascii_uppercase + string.digits


def generate_invite_code(length: int = None) -> str:
    """Uppercase alphanumeric invite code"""
    length = length or settings.INVITE_CODE_LENGTH
    return "".join(secrets.choice(INVITE_CODE_ALPHABET) for _ in range(length))


class TenantService:
    """
    Tenant directory.

    Companies keep no roster: a user belongs to a company when the
    company's id (as a string) is in the user's ``companies`` array.
    """

    def list_memberships(self, db: Database, email: str) -> List[Company]:
        """
        Companies the user belongs to

        Identifiers that do not parse are dropped instead of failing the
        request.
        """
        user = user_db.get_user_by_email(db, email)
        if not user or not isinstance(user.get("companies"), list):
            return []

        company_ids = parse_object_ids(user["companies"])
        return [Company.from_document(doc) for doc in company_db.get_companies_by_ids(db, company_ids)]

    def create(self, db: Database, name: Optional[str], owner_email: str) -> Company:
        """
        Create a company and make its creator a member

        Raises:
            ValidationError: empty name
        """
        name = (name or "").strip()
        if not name:
            raise ValidationError("Company name is required")

        invite_code = generate_invite_code()
        for _ in range(settings.INVITE_CODE_ATTEMPTS - 1):
            if not company_db.invite_code_exists(db, invite_code):
                break
            invite_code = generate_invite_code()

        company_id = company_db.create_company(db, name=name, invite_code=invite_code, owner=owner_email)
        user_db.add_company(db, owner_email, str(company_id))

        logger.info(f"Company {company_id} created by {mask_email(owner_email)}")
        return Company(id=str(company_id), name=name, inviteCode=invite_code, owner=owner_email)

    def join(self, db: Database, invite_code: Optional[str], email: str) -> Company:
        """
        Join a company by invite code

        Raises:
            InviteCodeNotFoundError: no company has this code
        """
        company = company_db.get_company_by_invite_code(db, invite_code) if invite_code else None
        if not company:
            logger.info(f"Wrong invite code from {mask_email(email)}")
            raise InviteCodeNotFoundError("Wrong invite code")

        user_db.add_company(db, email, str(company["_id"]))
        logger.info(f"User {mask_email(email)} joined company {company['_id']}")
        return Company.from_document(company)

    def remove_member(self, db: Database, company_id: str, target_user_id: Optional[str],
                      requester_email: str) -> None:
        """
        Remove a member from a company

        Raises:
            NotFoundError: unknown company or target user
            ForbiddenError: requester is not the owner
            ValidationError: requester tries to remove themselves
        """
        target_id = to_object_id(target_user_id)
        target = user_db.get_user_by_id(db, target_id) if target_id else None
        # Self-removal is refused for everyone, owner or not
        if target is not None and target.get("email") == requester_email:
            raise ValidationError("You cannot remove yourself from the company")

        auth_validation_service.require_owner(db, company_id, requester_email)

        if target is None:
            raise NotFoundError("User not found")

        user_db.remove_company(db, target_id, company_id)
        logger.info(f"User {target_id} removed from company {company_id} by {mask_email(requester_email)}")

    def list_members(self, db: Database, company_id: str) -> List[Member]:
        """Derived roster of a company"""
        object_id = to_object_id(company_id)
        company = company_db.get_company_by_id(db, object_id) if object_id else None
        owner = company.get("owner") if company else None

        return [
            Member(
                id=str(doc["_id"]),
                email=doc["email"],
                nome=doc.get("nome"),
                cognome=doc.get("cognome"),
                isOwner=doc["email"] == owner,
            )
            for doc in user_db.get_members(db, company_id)
        ]


# Global service instance
tenant_service = TenantService()
