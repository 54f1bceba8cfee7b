"""Pydantic request/response schemas."""

from pharmahub.schemas.auth import (
    CurrentUser,
    LoginRequest,
    LoginResponse,
    UsuarioPublic,
)
from pharmahub.schemas.diagnostics import DiagnosticResponse
from pharmahub.schemas.industria import (
    Industria,
    IndustriaCreate,
    IndustriaDeleted,
    IndustriaDetail,
    IndustriaSummary,
    IndustriaUpdate,
    PbmItem,
    ProdutoItem,
)

__all__ = [
    "CurrentUser",
    "DiagnosticResponse",
    "Industria",
    "IndustriaCreate",
    "IndustriaDeleted",
    "IndustriaDetail",
    "IndustriaSummary",
    "IndustriaUpdate",
    "LoginRequest",
    "LoginResponse",
    "PbmItem",
    "ProdutoItem",
    "UsuarioPublic",
]
