"""JWT login and the get_current_user dependency."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Request

from pharmahub.core.database import Database, get_db
from pharmahub.core.errors import AppError, AuthError, InternalError
from pharmahub.schemas.auth import CurrentUser, LoginRequest, LoginResponse, UsuarioPublic
from pharmahub.services.auth import authenticate

logger = logging.getLogger(__name__)
router = APIRouter()


@router.post("/login", response_model=LoginResponse)
def login(
    body: LoginRequest,
    db: Annotated[Database, Depends(get_db)],
) -> LoginResponse:
    """
    Authenticate with email and senha; returns the user and a JWT valid for 8 hours.
    Include the token in the Authorization header as: Bearer <token>
    """
    try:
        usuario, token = authenticate(db, body.email, body.senha)
    except AppError:
        raise
    except Exception as e:
        logger.exception("Login failed unexpectedly")
        raise InternalError("Erro no login") from e
    return LoginResponse(usuario=UsuarioPublic.model_validate(usuario), token=token)


def get_current_user(request: Request) -> CurrentUser:
    """Dependency: identity verified by the auth gate. Raises 401 if the gate did not run."""
    current_user = getattr(request.state, "current_user", None)
    if current_user is None:
        raise AuthError("Não autenticado")
    return current_user


@router.get("/me", response_model=CurrentUser)
def read_me(
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
) -> CurrentUser:
    """Return the identity carried by the caller's token."""
    return current_user
