# ezgest/api/routes/auth.py
from typing import Any, Type, TypeVar

import pydantic
from fastapi import APIRouter, Body, Depends
from pymongo.database import Database
from loguru import logger

from ...config.logging_config import mask_email
from ...core.exceptions import DuplicateError, ValidationError
from ...middleware.jwt_middleware import jwt_middleware
from ...models.users import AuthResponse, LoginRequest, RegisterRequest, TokenClaims, User
from ...services.credential_service import credential_service
from ..dependencies import get_db

router = APIRouter()

RequestModel = TypeVar("RequestModel", bound=pydantic.BaseModel)

INVALID_BODY = "Invalid request body"


def parse_body(model: Type[RequestModel], body: Any) -> RequestModel:
    """
    Validate the body here rather than in FastAPI so that a wrong type is
    a ``success: false`` answer instead of a 422.

    Raises:
        pydantic.ValidationError: a field has the wrong type
    """
    return model(**body) if isinstance(body, dict) else model()


@router.post("/login", response_model=AuthResponse, response_model_exclude_none=True)
def login(body: Any = Body(None), db: Database = Depends(get_db)) -> AuthResponse:
    """Exchange credentials for a session token; failures are still HTTP 200"""
    try:
        request = parse_body(LoginRequest, body)
    except pydantic.ValidationError:
        return AuthResponse(success=False, message=INVALID_BODY)

    user = credential_service.verify(db, request.email, request.password)
    if not user:
        return AuthResponse(success=False, message="Invalid credentials")

    claims = TokenClaims.for_user(user).model_dump(exclude={"exp"})
    token = jwt_middleware.issue_token(claims)

    logger.info(f"Login succeeded for {mask_email(user['email'])}")
    return AuthResponse(success=True, token=token, user=User.from_document(user))


@router.post("/register", response_model=AuthResponse, response_model_exclude_none=True)
def register(body: Any = Body(None), db: Database = Depends(get_db)) -> AuthResponse:
    """Create an account; validation and duplicate failures are HTTP 200"""
    try:
        request = parse_body(RegisterRequest, body)
    except pydantic.ValidationError:
        return AuthResponse(success=False, message=INVALID_BODY)

    try:
        credential_service.register(db, request)
    except (ValidationError, DuplicateError) as e:
        return AuthResponse(success=False, message=e.message)
    return AuthResponse(success=True)
