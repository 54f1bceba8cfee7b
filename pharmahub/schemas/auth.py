"""Request/response schemas for auth endpoints."""

from pydantic import BaseModel, Field


class LoginRequest(BaseModel):
    """Credentials for login. Presence is checked by the auth service (400, not 422)."""

    email: str | None = Field(default=None, max_length=255, description="User email")
    senha: str | None = Field(default=None, max_length=128, description="Password")


class UsuarioPublic(BaseModel):
    """User as returned to clients: identity, profile and affiliation, no password hash."""

    id: int
    nome: str
    email: str
    perfil: str
    industria_id: int | None = None
    farmacia_id: int | None = None
    pbm_id: int | None = None
    industria_codigo: str | None = None
    farmacia_codigo: str | None = None
    pbm_codigo: str | None = None
    ativo: bool = True


class LoginResponse(BaseModel):
    """Authenticated user plus the bearer token for subsequent requests."""

    usuario: UsuarioPublic
    token: str = Field(..., description="JWT access token; send as Authorization: Bearer <token>")


class CurrentUser(BaseModel):
    """Identity snapshot carried by a verified token."""

    id: int
    nome: str
    email: str
    perfil: str
    industria_id: int | None = None
    farmacia_id: int | None = None
    pbm_id: int | None = None
    industria_codigo: str | None = None
    farmacia_codigo: str | None = None
    pbm_codigo: str | None = None
