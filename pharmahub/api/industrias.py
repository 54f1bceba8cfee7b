"""Industry endpoints: list, create, read, update and soft delete."""

import logging
from collections.abc import Callable
from typing import Annotated, TypeVar

from fastapi import APIRouter, Depends, Query

from pharmahub.api.auth import get_current_user
from pharmahub.core.database import Database, get_db
from pharmahub.core.errors import AppError, InternalError
from pharmahub.schemas.auth import CurrentUser
from pharmahub.schemas.industria import (
    Industria,
    IndustriaCreate,
    IndustriaDeleted,
    IndustriaDetail,
    IndustriaSummary,
    IndustriaUpdate,
)
from pharmahub.services import industrias as service

logger = logging.getLogger(__name__)
router = APIRouter()

T = TypeVar("T")


def _guard(action: str, failure_message: str, fn: Callable[[], T]) -> T:
    """Run fn; AppErrors pass through, anything else is logged and reported as a generic 500."""
    try:
        return fn()
    except AppError:
        raise
    except Exception as e:
        logger.exception("Industria %s failed", action)
        raise InternalError(failure_message) from e


@router.get("", response_model=list[IndustriaSummary])
def list_industrias(
    db: Annotated[Database, Depends(get_db)],
    _user: Annotated[CurrentUser, Depends(get_current_user)],
    nome: str | None = None,
    codigo_gestor: str | None = None,
    cnpj: str | None = None,
    ativo: Annotated[bool | None, Query(description="Defaults to active industries only")] = None,
) -> list[dict]:
    """List industries, filtered by name (substring), codigo_gestor, cnpj and ativo; ordered by name."""
    return _guard(
        "list",
        "Erro ao buscar indústrias",
        lambda: service.list_industrias(
            db, nome=nome, codigo_gestor=codigo_gestor, cnpj=cnpj, ativo=ativo
        ),
    )


@router.post("", response_model=Industria, status_code=201)
def create_industria(
    body: IndustriaCreate,
    db: Annotated[Database, Depends(get_db)],
    _user: Annotated[CurrentUser, Depends(get_current_user)],
) -> dict:
    """Create an industry. nome, codigo_gestor and cnpj are required and the last two unique."""
    return _guard(
        "create", "Erro ao criar indústria", lambda: service.create_industria(db, body)
    )


@router.get("/{industria_id}", response_model=IndustriaDetail)
def get_industria(
    industria_id: int,
    db: Annotated[Database, Depends(get_db)],
    _user: Annotated[CurrentUser, Depends(get_current_user)],
) -> dict:
    """Return one industry, active or not, with its PBMs and products."""
    return _guard(
        "read", "Erro ao buscar indústria", lambda: service.get_industria(db, industria_id)
    )


@router.put("/{industria_id}", response_model=Industria)
def update_industria(
    industria_id: int,
    body: IndustriaUpdate,
    db: Annotated[Database, Depends(get_db)],
    _user: Annotated[CurrentUser, Depends(get_current_user)],
) -> dict:
    return _guard(
        "update",
        "Erro ao atualizar indústria",
        lambda: service.update_industria(db, industria_id, body),
    )


@router.delete("/{industria_id}", response_model=IndustriaDeleted)
def delete_industria(
    industria_id: int,
    db: Annotated[Database, Depends(get_db)],
    _user: Annotated[CurrentUser, Depends(get_current_user)],
) -> IndustriaDeleted:
    """Soft delete: sets ativo=false. The industry stays readable by id."""
    _guard(
        "delete",
        "Erro ao desativar indústria",
        lambda: service.deactivate_industria(db, industria_id),
    )
    return IndustriaDeleted(message="Indústria desativada com sucesso", id=industria_id)
