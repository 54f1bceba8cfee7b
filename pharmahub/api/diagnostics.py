"""Diagnostic endpoint: database round-trip and environment name."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from pharmahub.core.config import get_settings
from pharmahub.core.database import Database, get_db
from pharmahub.schemas.diagnostics import DiagnosticResponse

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("", response_model=DiagnosticResponse)
def get_diagnostics(db: Annotated[Database, Depends(get_db)]):
    """
    Return the database's current time and the app environment.

    Public (no token). On failure the error text is echoed only outside prod.
    """
    settings = get_settings()
    try:
        row = db.query_one("SELECT NOW() AS time")
    except Exception as e:
        logger.exception("Database connectivity check failed")
        content = {"error": "Erro ao conectar ao banco de dados"}
        if settings.APP_ENV != "prod":
            content["details"] = str(e)
        return JSONResponse(status_code=500, content=content)

    return DiagnosticResponse(
        message="Conexão com o banco de dados bem-sucedida!",
        time=row["time"],
        environment=settings.APP_ENV,
    )
