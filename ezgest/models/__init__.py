# ezgest/models/__init__.py
from .users import RegisterRequest, LoginRequest, User, TokenClaims, AuthResponse
from .tenant import Company, CreateCompanyRequest, JoinCompanyRequest, Member, SuccessResponse
from .database import HealthResponse
from .errors import ErrorResponse

__all__ = [
    # User models
    "RegisterRequest", "LoginRequest", "User", "TokenClaims", "AuthResponse",

    # Tenant models
    "Company", "CreateCompanyRequest", "JoinCompanyRequest", "Member", "SuccessResponse",

    # Database models
    "HealthResponse",

    # Error models
    "ErrorResponse"
]
