# ezgest/middleware/jwt_middleware.py
import time
from typing import Any, Dict, Optional

from fastapi import Request
from jose import jwt as jose_jwt, JWTError as JoseJWTError
from loguru import logger

from ..config.setting import settings
from ..core.exceptions import AuthenticationFailure, ExpiredTokenError, InvalidTokenError
from ..models.users import TokenClaims


def current_time_ms() -> int:
    return int(time.time() * 1000)


class JWTMiddleware:
    """
    Issues and verifies stateless session tokens.

    Tokens are HS256 JWTs whose ``exp`` claim is an absolute instant in epoch
    milliseconds. Because of that unit the expiry is checked here rather
    than by the JWT library.
    """

    def __init__(self, secret_key: str, algorithm: str = "HS256", ttl_ms: int = 86_400_000):
        self.secret_key = secret_key
        self.algorithm = algorithm
        self.ttl_ms = ttl_ms

    def issue_token(self, claims: Dict[str, Any], now_ms: Optional[int] = None) -> str:
        """
        Sign ``claims`` plus an ``exp`` of now + ttl

        Args:
            claims: JSON-serializable claims
            now_ms: Issue instant, defaults to the current time

        Returns:
            ``<header>.<payload>.<signature>``
        """
        issued_at = current_time_ms() if now_ms is None else now_ms
        payload = {**claims, "exp": issued_at + self.ttl_ms}
        return jose_jwt.encode(payload, self.secret_key, algorithm=self.algorithm)

    def retrieve_details_from_token(self, token: str, now_ms: Optional[int] = None) -> Dict[str, Any]:
        """
        Decode a token and check its signature and expiry

        Args:
            token: JWT token string

        Returns:
            The decoded claims, ``exp`` included

        Raises:
            InvalidTokenError: malformed token or signature mismatch
            ExpiredTokenError: the current time is past ``exp``
        """
        segments = token.split(".") if token else []
        if len(segments) != 3 or not all(segments):
            raise InvalidTokenError("Malformed token")

        try:
            payload = jose_jwt.decode(
                token,
                self.secret_key,
                algorithms=[self.algorithm],
                options={"verify_exp": False}
            )
        except JoseJWTError as token_decode_error:
            raise InvalidTokenError("Unable to decode JWT Token") from token_decode_error

        exp = payload.get("exp")
        if isinstance(exp, bool) or not isinstance(exp, (int, float)):
            raise InvalidTokenError("Missing expiry in token")

        now = current_time_ms() if now_ms is None else now_ms
        if now > exp:
            raise ExpiredTokenError("Token expired")

        return payload

    def token_from_header(self, authorization: Optional[str]) -> str:
        """Extract the token from an ``Authorization: Bearer <token>`` header"""
        if not authorization or not authorization.startswith("Bearer "):
            raise AuthenticationFailure("Authorization header missing or malformed")
        return authorization[len("Bearer "):].strip()

    def verify_request(self, request: Request) -> TokenClaims:
        """
        Authenticate a request from its bearer token

        Raises:
            AuthenticationFailure: header missing, token invalid or expired
        """
        token = self.token_from_header(request.headers.get("Authorization"))
        payload = self.retrieve_details_from_token(token)
        try:
            claims = TokenClaims(**payload)
        except ValueError as e:
            raise InvalidTokenError("Invalid payload in token") from e

        logger.debug(f"JWT verified for user: {claims.id}")
        return claims


# Create global middleware instance
jwt_middleware = JWTMiddleware(
    secret_key=settings.JWT_SECRET_KEY,
    algorithm=settings.JWT_ALGORITHM,
    ttl_ms=settings.TOKEN_TTL_MS,
)


async def get_current_user(request: Request) -> TokenClaims:
    """
    Dependency returning the identity established by the authorization gate
    """
    claims = getattr(request.state, "user", None)
    if claims is None:
        claims = jwt_middleware.verify_request(request)
        request.state.user = claims
    return claims
