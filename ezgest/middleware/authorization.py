# ezgest/middleware/authorization.py
from typing import Dict, Iterable, Optional

from fastapi import Request, status
from fastapi.responses import JSONResponse, Response
from starlette.concurrency import run_in_threadpool
from starlette.middleware.base import BaseHTTPMiddleware
from loguru import logger

from ..config.database import get_database
from ..core.exceptions import AuthenticationFailure, ForbiddenError
from ..models.errors import ErrorResponse
from ..services.auth_validation_service import auth_validation_service
from .jwt_middleware import JWTMiddleware, jwt_middleware

TENANT_PARAM = "companyId"


class AuthorizationMiddleware(BaseHTTPMiddleware):
    """
    Request gate. Evaluated top to bottom, first match wins:

    1. OPTIONS (preflights included): empty 200 with the CORS headers, no auth.
    2. Public path: passes through.
    3. Everything else needs a valid bearer token, else 401 with no body.
    4. A ``companyId`` query parameter requires membership, else 403.

    Unexpected failures anywhere below the gate become a generic 500.

    The gate sits outside the CORS middleware, so every answer it produces
    itself carries the CORS headers here.
    """

    def __init__(self, app, public_paths: Iterable[str], jwt: JWTMiddleware = None,
                 cors_origins: Iterable[str] = ("*",), cors_methods: Iterable[str] = (),
                 cors_headers: Iterable[str] = ()):
        super().__init__(app)
        self.public_paths = set(public_paths)
        self.jwt = jwt or jwt_middleware
        self.cors_origins = set(cors_origins)
        self.cors_base_headers = {
            "Access-Control-Allow-Methods": ", ".join(cors_methods),
            "Access-Control-Allow-Headers": ", ".join(cors_headers),
        }

    def cors_response_headers(self, request: Request) -> Dict[str, str]:
        headers = dict(self.cors_base_headers)
        origin: Optional[str] = request.headers.get("Origin")
        if "*" in self.cors_origins:
            headers["Access-Control-Allow-Origin"] = "*"
        elif origin in self.cors_origins:
            headers["Access-Control-Allow-Origin"] = origin
            headers["Vary"] = "Origin"
        return headers

    async def dispatch(self, request: Request, call_next):
        cors = self.cors_response_headers(request)
        try:
            if request.method == "OPTIONS":
                return Response(status_code=status.HTTP_200_OK, headers=cors)

            if request.url.path in self.public_paths:
                return await call_next(request)

            try:
                request.state.user = self.jwt.verify_request(request)
            except AuthenticationFailure as e:
                logger.info(f"Unauthorized {request.method} {request.url.path}: {e.message}")
                return Response(status_code=status.HTTP_401_UNAUTHORIZED, headers=cors)

            company_id = request.query_params.get(TENANT_PARAM)
            if company_id:
                try:
                    await run_in_threadpool(
                        auth_validation_service.validate_user_tenant_access,
                        get_database(),
                        request.state.user.email,
                        company_id,
                    )
                except ForbiddenError as e:
                    return JSONResponse(
                        status_code=e.status_code,
                        content=ErrorResponse(error=e.message, error_code=e.error_code).model_dump(),
                        headers=cors,
                    )

            return await call_next(request)

        except Exception:
            logger.exception(f"Unhandled error on {request.method} {request.url.path}")
            return JSONResponse(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                content=ErrorResponse(error="Internal server error", error_code="internal_error").model_dump(),
                headers=cors,
            )
