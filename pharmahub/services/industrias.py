"""Industry queries and mutations: validation, uniqueness checks and soft delete."""

import logging
from typing import Any

from sqlalchemy.exc import IntegrityError

from pharmahub.core.database import Database, SqlExecutor, SqlParameter
from pharmahub.core.errors import ConflictError, NotFoundError, ValidationError
from pharmahub.schemas.industria import REQUIRED_FIELDS, IndustriaCreate, IndustriaUpdate

logger = logging.getLogger(__name__)

SUMMARY_COLUMNS = (
    "id, nome, codigo_gestor, cnpj, razao_social, cidade, estado, "
    "email, website, logo_url, data_cadastro, ativo"
)
DETAIL_COLUMNS = (
    "id, nome, codigo_gestor, cnpj, razao_social, endereco, cidade, estado, cep, "
    "telefone, email, website, logo_url, data_cadastro, ativo"
)
# Insert/update column order; values come from the request schemas.
WRITABLE_COLUMNS = (
    "nome",
    "codigo_gestor",
    "cnpj",
    "razao_social",
    "endereco",
    "cidade",
    "estado",
    "cep",
    "telefone",
    "email",
    "website",
    "logo_url",
    "ativo",
)

NOT_FOUND = "Indústria não encontrada"
REQUIRED_MISSING = "Nome, código gestor e CNPJ são obrigatórios"
CODIGO_IN_USE = "Código gestor já está em uso"
CNPJ_IN_USE = "CNPJ já está em uso"
NOTHING_TO_UPDATE = "Nenhum campo informado para atualização"
UNIQUE_IN_USE = "Código gestor ou CNPJ já está em uso"
ATIVO_NULL = "O campo ativo deve ser true ou false"


def _clean(value: Any) -> Any:
    """Trim strings; blank strings become None."""
    if isinstance(value, str):
        value = value.strip()
        return value or None
    return value


def _ensure_unique(
    tx: SqlExecutor,
    codigo_gestor: str | None,
    cnpj: str | None,
    exclude_id: int | None = None,
) -> None:
    checks = (("codigo_gestor", codigo_gestor, CODIGO_IN_USE), ("cnpj", cnpj, CNPJ_IN_USE))
    for column, value, message in checks:
        if value is None:
            continue
        if exclude_id is None:
            row = tx.query_one(f"SELECT id FROM industrias WHERE {column} = $1", [value])
        else:
            row = tx.query_one(
                f"SELECT id FROM industrias WHERE {column} = $1 AND id <> $2",
                [value, exclude_id],
            )
        if row is not None:
            raise ConflictError(message)


def list_industrias(
    db: Database,
    nome: str | None = None,
    codigo_gestor: str | None = None,
    cnpj: str | None = None,
    ativo: bool | None = None,
) -> list[dict[str, Any]]:
    """List industries matching the filters; only active ones unless `ativo` says otherwise."""
    sql = f"SELECT {SUMMARY_COLUMNS} FROM industrias WHERE 1=1"
    params: list[SqlParameter] = []

    if nome:
        params.append(f"%{nome}%")
        sql += f" AND nome ILIKE ${len(params)}"
    if codigo_gestor:
        params.append(codigo_gestor)
        sql += f" AND codigo_gestor = ${len(params)}"
    if cnpj:
        params.append(cnpj)
        sql += f" AND cnpj = ${len(params)}"
    params.append(True if ativo is None else ativo)
    sql += f" AND ativo = ${len(params)}"

    sql += " ORDER BY nome"
    return db.query(sql, params)


def create_industria(db: Database, data: IndustriaCreate) -> dict[str, Any]:
    """Insert a new industry after checking that codigo_gestor and cnpj are free."""
    values = {column: _clean(getattr(data, column)) for column in WRITABLE_COLUMNS}
    if any(values[field] is None for field in REQUIRED_FIELDS):
        raise ValidationError(REQUIRED_MISSING)

    placeholders = ", ".join(f"${i}" for i in range(1, len(WRITABLE_COLUMNS) + 1))
    insert_sql = (
        f"INSERT INTO industrias ({', '.join(WRITABLE_COLUMNS)}) "
        f"VALUES ({placeholders}) RETURNING {DETAIL_COLUMNS}"
    )

    def _create(tx: SqlExecutor) -> dict[str, Any]:
        _ensure_unique(tx, values["codigo_gestor"], values["cnpj"])
        return tx.query_one(insert_sql, [values[c] for c in WRITABLE_COLUMNS])

    try:
        industria = db.transaction(_create)
    except IntegrityError as e:
        # Concurrent insert won the race between the check and the INSERT.
        raise ConflictError(UNIQUE_IN_USE) from e
    logger.info("Industria created", extra={"industria_id": industria["id"]})
    return industria


def get_industria(db: Database, industria_id: int) -> dict[str, Any]:
    """Return one industry (active or not) with its PBMs and products."""

    def _load(tx: SqlExecutor) -> dict[str, Any] | None:
        industria = tx.query_one(
            f"SELECT {DETAIL_COLUMNS} FROM industrias WHERE id = $1", [industria_id]
        )
        if industria is None:
            return None
        industria["pbms"] = tx.query(
            "SELECT id, nome, codigo_gestor, ativo FROM pbms WHERE industria_id = $1 ORDER BY nome",
            [industria_id],
        )
        industria["produtos"] = tx.query(
            "SELECT id, nome, codigo_ean, ativo FROM produtos WHERE industria_id = $1 ORDER BY nome",
            [industria_id],
        )
        return industria

    industria = db.transaction(_load)
    if industria is None:
        raise NotFoundError(NOT_FOUND)
    return industria


def update_industria(db: Database, industria_id: int, data: IndustriaUpdate) -> dict[str, Any]:
    """Write the fields present in `data`; required fields cannot be cleared."""
    changes = {k: _clean(v) for k, v in data.model_dump(exclude_unset=True).items()}
    if not changes:
        raise ValidationError(NOTHING_TO_UPDATE)
    if any(field in changes and changes[field] is None for field in REQUIRED_FIELDS):
        raise ValidationError(REQUIRED_MISSING)
    if "ativo" in changes and changes["ativo"] is None:
        raise ValidationError(ATIVO_NULL)

    columns = [c for c in WRITABLE_COLUMNS if c in changes]
    assignments = ", ".join(f"{c} = ${i}" for i, c in enumerate(columns, start=1))
    id_position = len(columns) + 1
    update_sql = (
        f"UPDATE industrias SET {assignments} WHERE id = ${id_position} "
        f"RETURNING {DETAIL_COLUMNS}"
    )

    def _update(tx: SqlExecutor) -> dict[str, Any] | None:
        if tx.query_one("SELECT id FROM industrias WHERE id = $1 FOR UPDATE", [industria_id]) is None:
            return None
        _ensure_unique(
            tx, changes.get("codigo_gestor"), changes.get("cnpj"), exclude_id=industria_id
        )
        return tx.query_one(update_sql, [*(changes[c] for c in columns), industria_id])

    try:
        industria = db.transaction(_update)
    except IntegrityError as e:
        raise ConflictError(UNIQUE_IN_USE) from e
    if industria is None:
        raise NotFoundError(NOT_FOUND)
    logger.info("Industria updated", extra={"industria_id": industria_id, "fields": columns})
    return industria


def deactivate_industria(db: Database, industria_id: int) -> None:
    """Soft delete: mark the industry inactive. The row stays readable by id."""
    affected = db.execute(
        "UPDATE industrias SET ativo = false WHERE id = $1 RETURNING id", [industria_id]
    )
    if affected == 0:
        raise NotFoundError(NOT_FOUND)
    logger.info("Industria deactivated", extra={"industria_id": industria_id})
