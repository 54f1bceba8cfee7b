"""Credential check and token issuance for POST /auth/login."""

import logging
from typing import Any

from pharmahub.core.database import Database
from pharmahub.core.errors import AuthError, ValidationError
from pharmahub.core.security import (
    burn_password_check,
    create_access_token,
    verify_password,
)

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Credenciais inválidas"
MISSING_CREDENTIALS = "Email e senha são obrigatórios"

USER_BY_EMAIL_SQL = """
    SELECT u.id, u.nome, u.email, u.senha, u.perfil,
           u.industria_id, u.farmacia_id, u.pbm_id,
           i.codigo_gestor AS industria_codigo,
           f.codigo_gestor AS farmacia_codigo,
           p.codigo_gestor AS pbm_codigo,
           u.ativo
    FROM usuarios u
    LEFT JOIN industrias i ON u.industria_id = i.id
    LEFT JOIN farmacias f ON u.farmacia_id = f.id
    LEFT JOIN pbms p ON u.pbm_id = p.id
    WHERE lower(u.email) = $1
"""

TOUCH_LAST_ACCESS_SQL = "UPDATE usuarios SET ultimo_acesso = CURRENT_TIMESTAMP WHERE id = $1"


def authenticate(db: Database, email: str | None, senha: str | None) -> tuple[dict[str, Any], str]:
    """
    Validate credentials and issue a token.

    Returns (usuario without password hash, token). Raises ValidationError when
    email or senha is missing, and AuthError with the same message whether the
    user is unknown, inactive, or the password is wrong.
    """
    email = (email or "").strip().lower()
    if not email or not senha:
        raise ValidationError(MISSING_CREDENTIALS)

    usuario = db.query_one(USER_BY_EMAIL_SQL, [email])
    if usuario is None or not usuario["ativo"]:
        burn_password_check(senha)
        logger.info("Login rejected", extra={"reason": "unknown_or_inactive"})
        raise AuthError(INVALID_CREDENTIALS)

    if not verify_password(senha, usuario["senha"]):
        logger.info("Login rejected", extra={"reason": "bad_password", "user_id": usuario["id"]})
        raise AuthError(INVALID_CREDENTIALS)

    db.execute(TOUCH_LAST_ACCESS_SQL, [usuario["id"]])

    usuario = {k: v for k, v in usuario.items() if k != "senha"}
    token = create_access_token(usuario)
    logger.info("Login succeeded", extra={"user_id": usuario["id"]})
    return usuario, token
