"""Unit tests for pharmahub.services.industrias: filters, uniqueness, partial update, soft delete."""

import unittest
from datetime import datetime, timezone
from unittest.mock import MagicMock

from sqlalchemy.exc import IntegrityError

from pharmahub.core.database import Database
from pharmahub.core.errors import ConflictError, NotFoundError, ValidationError
from pharmahub.schemas.industria import IndustriaCreate, IndustriaUpdate
from pharmahub.services.industrias import (
    CNPJ_IN_USE,
    CODIGO_IN_USE,
    REQUIRED_MISSING,
    WRITABLE_COLUMNS,
    create_industria,
    deactivate_industria,
    get_industria,
    list_industrias,
    update_industria,
)


def _industria(**overrides: object) -> dict:
    row = {
        "id": 1,
        "nome": "X",
        "codigo_gestor": "C1",
        "cnpj": "111",
        "razao_social": None,
        "endereco": None,
        "cidade": None,
        "estado": None,
        "cep": None,
        "telefone": None,
        "email": None,
        "website": None,
        "logo_url": None,
        "data_cadastro": datetime(2025, 3, 1, tzinfo=timezone.utc),
        "ativo": True,
    }
    row.update(overrides)
    return row


def _db_with_tx() -> tuple[MagicMock, MagicMock]:
    """Database whose transaction() runs the callback against a mock handle."""
    db = MagicMock(spec=Database)
    tx = MagicMock()
    db.transaction.side_effect = lambda callback: callback(tx)
    return db, tx


class TestListIndustrias(unittest.TestCase):
    """Listing defaults to active industries, ordered by name."""

    def test_default_lists_only_active(self) -> None:
        db = MagicMock(spec=Database)
        db.query.return_value = []
        list_industrias(db)
        sql, params = db.query.call_args.args
        self.assertIn("ativo = $1", sql)
        self.assertTrue(sql.rstrip().endswith("ORDER BY nome"))
        self.assertEqual(params, [True])

    def test_filters_are_numbered_in_order(self) -> None:
        db = MagicMock(spec=Database)
        db.query.return_value = []
        list_industrias(db, nome="farma", cnpj="111", ativo=False)
        sql, params = db.query.call_args.args
        self.assertIn("nome ILIKE $1", sql)
        self.assertIn("cnpj = $2", sql)
        self.assertIn("ativo = $3", sql)
        self.assertNotIn("codigo_gestor =", sql)
        self.assertEqual(params, ["%farma%", "111", False])


class TestCreateIndustria(unittest.TestCase):
    """Creation validates required fields and uniqueness inside one transaction."""

    def test_required_fields(self) -> None:
        db, _ = _db_with_tx()
        with self.assertRaises(ValidationError) as ctx:
            create_industria(db, IndustriaCreate(nome="X", codigo_gestor="  ", cnpj="111"))
        self.assertEqual(ctx.exception.message, REQUIRED_MISSING)
        db.transaction.assert_not_called()

    def test_duplicate_codigo_gestor(self) -> None:
        db, tx = _db_with_tx()
        tx.query_one.side_effect = [{"id": 5}]
        with self.assertRaises(ConflictError) as ctx:
            create_industria(db, IndustriaCreate(nome="X", codigo_gestor="C1", cnpj="111"))
        self.assertEqual(ctx.exception.message, CODIGO_IN_USE)
        self.assertEqual(ctx.exception.status_code, 400)

    def test_duplicate_cnpj(self) -> None:
        db, tx = _db_with_tx()
        tx.query_one.side_effect = [None, {"id": 5}]
        with self.assertRaises(ConflictError) as ctx:
            create_industria(db, IndustriaCreate(nome="X", codigo_gestor="C1", cnpj="111"))
        self.assertEqual(ctx.exception.message, CNPJ_IN_USE)

    def test_inserts_with_ativo_default_true(self) -> None:
        db, tx = _db_with_tx()
        tx.query_one.side_effect = [None, None, _industria(id=42)]
        created = create_industria(
            db, IndustriaCreate(nome=" X ", codigo_gestor="C1", cnpj="111", cidade="")
        )
        self.assertEqual(created["id"], 42)
        insert_sql, params = tx.query_one.call_args.args
        self.assertTrue(insert_sql.startswith("INSERT INTO industrias"))
        self.assertIn("RETURNING", insert_sql)
        self.assertEqual(len(params), len(WRITABLE_COLUMNS))
        by_column = dict(zip(WRITABLE_COLUMNS, params))
        self.assertEqual(by_column["nome"], "X")
        self.assertIsNone(by_column["cidade"])
        self.assertIs(by_column["ativo"], True)

    def test_unique_violation_race_is_conflict(self) -> None:
        db = MagicMock(spec=Database)
        db.transaction.side_effect = IntegrityError("INSERT", {}, Exception("duplicate key"))
        with self.assertRaises(ConflictError):
            create_industria(db, IndustriaCreate(nome="X", codigo_gestor="C1", cnpj="111"))


class TestGetIndustria(unittest.TestCase):
    """Reading by id ignores the ativo flag and attaches PBMs and products."""

    def test_not_found(self) -> None:
        db, tx = _db_with_tx()
        tx.query_one.return_value = None
        with self.assertRaises(NotFoundError):
            get_industria(db, 99)
        tx.query.assert_not_called()

    def test_inactive_industry_is_still_returned(self) -> None:
        db, tx = _db_with_tx()
        tx.query_one.return_value = _industria(ativo=False)
        tx.query.side_effect = [[], []]
        industria = get_industria(db, 1)
        self.assertFalse(industria["ativo"])
        self.assertEqual(industria["pbms"], [])
        self.assertEqual(industria["produtos"], [])
        lookup_sql, _ = tx.query_one.call_args.args
        self.assertNotIn("ativo =", lookup_sql)

    def test_attaches_related_rows(self) -> None:
        db, tx = _db_with_tx()
        tx.query_one.return_value = _industria()
        pbm = {"id": 3, "nome": "PBM A", "codigo_gestor": "P3", "ativo": True}
        produto = {"id": 8, "nome": "Produto B", "codigo_ean": "789", "ativo": True}
        tx.query.side_effect = [[pbm], [produto]]
        industria = get_industria(db, 1)
        self.assertEqual(industria["pbms"], [pbm])
        self.assertEqual(industria["produtos"], [produto])


class TestUpdateIndustria(unittest.TestCase):
    """Partial updates only touch supplied fields."""

    def test_empty_body(self) -> None:
        db, _ = _db_with_tx()
        with self.assertRaises(ValidationError):
            update_industria(db, 1, IndustriaUpdate())

    def test_cannot_blank_required_field(self) -> None:
        db, _ = _db_with_tx()
        with self.assertRaises(ValidationError):
            update_industria(db, 1, IndustriaUpdate(nome=""))

    def test_not_found(self) -> None:
        db, tx = _db_with_tx()
        tx.query_one.return_value = None
        with self.assertRaises(NotFoundError):
            update_industria(db, 99, IndustriaUpdate(cidade="Recife"))

    def test_duplicate_cnpj_on_other_row(self) -> None:
        db, tx = _db_with_tx()
        tx.query_one.side_effect = [{"id": 1}, {"id": 2}]
        with self.assertRaises(ConflictError) as ctx:
            update_industria(db, 1, IndustriaUpdate(cnpj="222"))
        self.assertEqual(ctx.exception.message, CNPJ_IN_USE)
        check_sql, check_params = tx.query_one.call_args.args
        self.assertIn("id <> $2", check_sql)
        self.assertEqual(check_params, ["222", 1])

    def test_updates_only_supplied_fields(self) -> None:
        db, tx = _db_with_tx()
        tx.query_one.side_effect = [{"id": 1}, _industria(cidade="Recife", telefone=None)]
        updated = update_industria(db, 1, IndustriaUpdate(cidade="Recife", telefone=None))
        self.assertEqual(updated["cidade"], "Recife")
        update_sql, params = tx.query_one.call_args.args
        self.assertIn("SET cidade = $1, telefone = $2 WHERE id = $3", update_sql)
        self.assertEqual(params, ["Recife", None, 1])


class TestDeactivateIndustria(unittest.TestCase):
    """DELETE is a soft delete."""

    def test_sets_ativo_false(self) -> None:
        db = MagicMock(spec=Database)
        db.execute.return_value = 1
        deactivate_industria(db, 1)
        sql, params = db.execute.call_args.args
        self.assertIn("UPDATE industrias SET ativo = false", sql)
        self.assertNotIn("DELETE", sql.upper())
        self.assertEqual(params, [1])

    def test_not_found(self) -> None:
        db = MagicMock(spec=Database)
        db.execute.return_value = 0
        with self.assertRaises(NotFoundError):
            deactivate_industria(db, 99)


if __name__ == "__main__":
    unittest.main()
