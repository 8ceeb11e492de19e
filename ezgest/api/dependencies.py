# ezgest/api/dependencies.py
from fastapi import Depends, Query
from bson import ObjectId

from ..config.database import get_db
from ..core.exceptions import ValidationError
from ..middleware.jwt_middleware import get_current_user
from ..models.users import TokenClaims
from ..utilities.helpers.database_helpers import to_object_id

__all__ = ["get_db", "get_current_user", "current_email", "company_scope", "document_id"]


async def current_email(current_user: TokenClaims = Depends(get_current_user)) -> str:
    return current_user.email


async def company_scope(companyId: str = Query(..., min_length=1)) -> str:
    """
    Tenant named by the request. Membership has already been enforced by
    the authorization gate; declaring it here makes it mandatory.
    """
    return companyId


async def document_id(id: str = Query(...)) -> ObjectId:
    object_id = to_object_id(id)
    if object_id is None:
        raise ValidationError("Invalid id")
    return object_id
