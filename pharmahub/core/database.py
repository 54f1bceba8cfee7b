"""PostgreSQL connection pool and a thin SQL access layer.

Statements are written with PostgreSQL positional placeholders (``$1``, ``$2``,
...) and run through SQLAlchemy Core. ``Database`` owns the process-wide pool;
every ``query``/``query_one``/``execute`` call on it runs in its own short
transaction. ``Database.transaction`` pins one pooled connection and hands the
callback a ``SqlExecutor`` bound to it, so every statement issued through that
handle belongs to the same transaction.
"""

import logging
import re
from collections.abc import Callable, Sequence
from datetime import date, datetime, time
from decimal import Decimal
from typing import Any, TypeVar, Union

from sqlalchemy import bindparam, create_engine, text
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.engine import Connection, Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.sql.elements import TextClause

from pharmahub.core.config import settings

logger = logging.getLogger(__name__)

T = TypeVar("T")

SqlPrimitive = Union[str, int, float, Decimal, bool, None, date, datetime, time, bytes]
SqlParameter = Union[SqlPrimitive, list[SqlPrimitive], dict[str, SqlPrimitive]]
Row = dict[str, Any]

_PRIMITIVE_TYPES = (str, int, float, Decimal, bool, date, datetime, time, bytes)

# Spans copied through untouched: string literals, quoted identifiers, comments
# and dollar-quoted bodies. Outside them, $1, $2, ... not preceded by a word
# character or another "$" are placeholders.
_PLACEHOLDER_RE = re.compile(
    r"(?P<skip>'(?:[^']|'')*'"
    r'|"(?:[^"]|"")*"'
    r"|--[^\n]*"
    r"|/\*.*?\*/"
    r"|(?<!\w)\$(?P<tag>[A-Za-z_]\w*|)\$.*?\$(?P=tag)\$)"
    r"|(?<![\w$])\$(?P<position>\d+)(?!\w)",
    re.DOTALL,
)


class SqlParameterError(TypeError, ValueError):
    """A bound value is outside the supported set or does not match the placeholders."""


def _is_primitive(value: object) -> bool:
    return value is None or isinstance(value, _PRIMITIVE_TYPES)


def check_parameters(params: Sequence[SqlParameter]) -> list[SqlParameter]:
    """
    Validate bound values against the closed parameter set.

    Accepts primitives, lists/tuples of primitives (bound as arrays) and dicts
    of primitives keyed by str (bound as JSONB). Tuples are normalized to lists.
    """
    if isinstance(params, (str, bytes, dict)):
        raise SqlParameterError("SQL parameters must be a sequence of values")
    checked: list[SqlParameter] = []
    for index, value in enumerate(params, start=1):
        if _is_primitive(value):
            checked.append(value)
        elif isinstance(value, (list, tuple)):
            if not all(_is_primitive(item) for item in value):
                raise SqlParameterError(
                    f"Parameter ${index}: array items must be primitive values"
                )
            checked.append(list(value))
        elif isinstance(value, dict):
            if not all(isinstance(k, str) and _is_primitive(v) for k, v in value.items()):
                raise SqlParameterError(
                    f"Parameter ${index}: record must map str keys to primitive values"
                )
            checked.append(value)
        else:
            raise SqlParameterError(
                f"Parameter ${index}: unsupported type {type(value).__name__}"
            )
    return checked


def bind_positional(
    sql: str, params: Sequence[SqlParameter] = ()
) -> tuple[TextClause, dict[str, SqlParameter]]:
    """
    Rewrite ``$n`` placeholders to named binds and pair them with their values.

    Raises SqlParameterError when a placeholder has no value, when a value is
    never referenced, or when a value is outside the supported set.
    """
    values = check_parameters(params)
    referenced: set[int] = set()

    def _rename(match: re.Match[str]) -> str:
        if match.group("skip") is not None:
            return match.group("skip")
        position = int(match.group("position"))
        if position < 1 or position > len(values):
            raise SqlParameterError(
                f"Placeholder ${position} has no value ({len(values)} parameter(s) given)"
            )
        referenced.add(position)
        # SQLAlchemy does not see ":p1::int" as a bind; "(:p1)::int" is equivalent SQL.
        if match.string.startswith("::", match.end()):
            return f"(:p{position})"
        return f":p{position}"

    rewritten = _PLACEHOLDER_RE.sub(_rename, sql)
    unused = sorted(set(range(1, len(values) + 1)) - referenced)
    if unused:
        raise SqlParameterError(
            "Parameter(s) not referenced by the statement: "
            + ", ".join(f"${n}" for n in unused)
        )

    bound = {f"p{i}": value for i, value in enumerate(values, start=1)}
    stmt = text(rewritten)
    json_binds = [bindparam(name, type_=JSONB) for name, v in bound.items() if isinstance(v, dict)]
    if json_binds:
        stmt = stmt.bindparams(*json_binds)
    return stmt, bound


class SqlExecutor:
    """Runs parameterized statements on one connection."""

    def __init__(self, connection: Connection) -> None:
        self._connection = connection
        self._closed = False

    def close(self) -> None:
        """Detach the handle; later calls raise RuntimeError."""
        self._closed = True

    def _run(self, sql: str, params: Sequence[SqlParameter]):
        if self._closed:
            raise RuntimeError("SQL handle used outside of its transaction")
        stmt, bound = bind_positional(sql, params)
        return self._connection.execute(stmt, bound)

    def query(self, sql: str, params: Sequence[SqlParameter] = ()) -> list[Row]:
        """Return every row as a column-keyed dict, in the order the database returns them."""
        try:
            result = self._run(sql, params)
            if not result.returns_rows:
                return []
            return [dict(row._mapping) for row in result]
        except SQLAlchemyError:
            logger.exception("SQL query failed")
            raise

    def query_one(self, sql: str, params: Sequence[SqlParameter] = ()) -> Row | None:
        """Return the first row, or None when the statement matches nothing."""
        rows = self.query(sql, params)
        return rows[0] if rows else None

    def execute(self, sql: str, params: Sequence[SqlParameter] = ()) -> int:
        """
        Run a statement and return the number of rows it returned.

        Statements without a result set (DML without RETURNING, DDL) return 0;
        add RETURNING to count affected rows.
        """
        try:
            result = self._run(sql, params)
            if result.returns_rows:
                return len(result.fetchall())
            return 0
        except SQLAlchemyError:
            logger.exception("SQL execution failed")
            raise


class Database:
    """Process-wide entry point owning the connection pool."""

    def __init__(self, engine: Engine) -> None:
        self.engine = engine

    def query(self, sql: str, params: Sequence[SqlParameter] = ()) -> list[Row]:
        with self.engine.begin() as conn:
            return SqlExecutor(conn).query(sql, params)

    def query_one(self, sql: str, params: Sequence[SqlParameter] = ()) -> Row | None:
        with self.engine.begin() as conn:
            return SqlExecutor(conn).query_one(sql, params)

    def execute(self, sql: str, params: Sequence[SqlParameter] = ()) -> int:
        with self.engine.begin() as conn:
            return SqlExecutor(conn).execute(sql, params)

    def transaction(self, callback: Callable[[SqlExecutor], T]) -> T:
        """
        Run callback(tx) inside BEGIN/COMMIT on a single pooled connection.

        Any exception from the callback or the commit rolls the transaction
        back and is re-raised unchanged.
        """
        with self.engine.connect() as conn:
            tx = SqlExecutor(conn)
            trans = conn.begin()
            try:
                result = callback(tx)
                trans.commit()
            except Exception:
                logger.exception("SQL transaction failed; rolling back")
                try:
                    trans.rollback()
                except SQLAlchemyError:
                    logger.exception("SQL rollback failed")
                raise
            finally:
                tx.close()
            return result


engine = create_engine(
    settings.DATABASE_URL,
    pool_pre_ping=True,
    echo=settings.DEBUG,
)

database = Database(engine)


def get_db() -> Database:
    """Dependency returning the shared Database."""
    return database
