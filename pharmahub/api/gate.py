"""Request gate: bearer-token verification for every non-public API path."""

import logging

import jwt
from fastapi import Request
from fastapi.responses import JSONResponse
from pydantic import ValidationError as PydanticValidationError
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.responses import Response

from pharmahub.core.errors import AuthError
from pharmahub.core.security import decode_access_token
from pharmahub.schemas.auth import CurrentUser

logger = logging.getLogger(__name__)

# Relative to the API prefix.
PUBLIC_PATHS = frozenset({"/auth/login", "/auth/register", "/test"})
PUBLIC_PREFIXES = ("/setup",)


def is_public_path(relative_path: str) -> bool:
    """True for paths under the API prefix that do not need a token."""
    path = relative_path.rstrip("/") or "/"
    if path in PUBLIC_PATHS:
        return True
    return any(path == p or path.startswith(p + "/") for p in PUBLIC_PREFIXES)


def _bearer_token(request: Request) -> str | None:
    header = request.headers.get("authorization", "")
    scheme, _, credentials = header.partition(" ")
    if scheme.lower() != "bearer" or not credentials.strip():
        return None
    return credentials.strip()


def verify_bearer(request: Request) -> CurrentUser:
    """Decode the request's bearer token into the caller's identity. Raises AuthError."""
    token = _bearer_token(request)
    if token is None:
        raise AuthError("Token de autenticação não fornecido")
    try:
        payload = decode_access_token(token)
        return CurrentUser.model_validate(payload)
    except jwt.ExpiredSignatureError as e:
        raise AuthError("Token expirado") from e
    except (jwt.PyJWTError, PydanticValidationError) as e:
        raise AuthError("Token inválido") from e


class AuthGateMiddleware(BaseHTTPMiddleware):
    """
    Enforce authentication on the API namespace.

    Paths outside `api_prefix` and public API paths pass through untouched.
    Everything else needs a valid `Authorization: Bearer <jwt>`; the verified
    identity is stored on `request.state.current_user`.
    """

    def __init__(self, app, api_prefix: str = "/api") -> None:
        super().__init__(app)
        self.api_prefix = api_prefix.rstrip("/")

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        path = request.url.path
        in_api = path == self.api_prefix or path.startswith(self.api_prefix + "/")
        if not in_api or request.method == "OPTIONS":
            return await call_next(request)
        if is_public_path(path[len(self.api_prefix):]):
            return await call_next(request)

        try:
            request.state.current_user = verify_bearer(request)
        except AuthError as e:
            logger.info(
                "Request rejected by auth gate",
                extra={"path": path, "reason": e.message},
            )
            return JSONResponse(
                status_code=e.status_code,
                content={"error": e.message},
                headers=e.headers,
            )
        return await call_next(request)
