"""HTTP tests: auth gate, login, diagnostics and industrias routes with the database mocked."""

import unittest
from datetime import UTC, datetime, timedelta, timezone
from unittest.mock import MagicMock

import bcrypt
from fastapi.testclient import TestClient

from pharmahub.core.database import Database, get_db
from pharmahub.core.security import create_access_token
from pharmahub.main import app

PASSWORD = "s3nha-correta"
PASSWORD_HASH = bcrypt.hashpw(PASSWORD.encode(), bcrypt.gensalt(rounds=4)).decode()

USER = {
    "id": 1,
    "nome": "Admin",
    "email": "admin@example.com",
    "perfil": "admin",
    "industria_id": None,
    "farmacia_id": None,
    "pbm_id": None,
    "industria_codigo": None,
    "farmacia_codigo": None,
    "pbm_codigo": None,
    "ativo": True,
}


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


class ApiTestCase(unittest.TestCase):
    """Base: TestClient with get_db overridden by a mock Database."""

    def setUp(self) -> None:
        self.db = MagicMock(spec=Database)
        self.tx = MagicMock()
        self.db.transaction.side_effect = lambda callback: callback(self.tx)
        app.dependency_overrides[get_db] = lambda: self.db
        self.client = TestClient(app)
        self.auth = {"Authorization": f"Bearer {create_access_token(USER)}"}

    def tearDown(self) -> None:
        app.dependency_overrides.clear()


class TestAuthGate(ApiTestCase):
    """Every API path except the public ones needs a valid bearer token."""

    def test_missing_token(self) -> None:
        resp = self.client.get("/api/industrias")
        self.assertEqual(resp.status_code, 401)
        self.assertIn("error", resp.json())
        self.assertEqual(resp.headers.get("www-authenticate"), "Bearer")
        self.db.query.assert_not_called()

    def test_wrong_scheme(self) -> None:
        resp = self.client.get("/api/industrias", headers={"Authorization": "Basic abc"})
        self.assertEqual(resp.status_code, 401)

    def test_garbage_token(self) -> None:
        resp = self.client.get("/api/industrias", headers={"Authorization": "Bearer not.a.jwt"})
        self.assertEqual(resp.status_code, 401)
        self.assertEqual(resp.json(), {"error": "Token inválido"})

    def test_expired_token(self) -> None:
        old = create_access_token(USER, now=datetime.now(UTC) - timedelta(hours=8, minutes=1))
        resp = self.client.get("/api/industrias", headers={"Authorization": f"Bearer {old}"})
        self.assertEqual(resp.status_code, 401)
        self.assertEqual(resp.json(), {"error": "Token expirado"})

    def test_valid_token_reaches_handler(self) -> None:
        self.db.query.return_value = []
        resp = self.client.get("/api/industrias", headers=self.auth)
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json(), [])

    def test_me_returns_token_identity(self) -> None:
        resp = self.client.get("/api/auth/me", headers=self.auth)
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["email"], "admin@example.com")

    def test_setup_prefix_is_public(self) -> None:
        resp = self.client.get("/api/setup/anything")
        self.assertEqual(resp.status_code, 404)

    def test_paths_outside_api_are_not_gated(self) -> None:
        resp = self.client.get("/")
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json(), {"message": "PharmaHub API"})


class TestDiagnostics(ApiTestCase):
    """GET /api/test is public and reports database time and environment."""

    def test_ok(self) -> None:
        self.db.query_one.return_value = {"time": datetime(2025, 3, 1, 12, 0, tzinfo=timezone.utc)}
        resp = self.client.get("/api/test")
        self.assertEqual(resp.status_code, 200)
        body = resp.json()
        self.assertEqual(body["environment"], "dev")
        self.assertTrue(body["time"].startswith("2025-03-01T12:00:00"))

    def test_failure_echoes_details_outside_prod(self) -> None:
        self.db.query_one.side_effect = RuntimeError("connection refused")
        resp = self.client.get("/api/test")
        self.assertEqual(resp.status_code, 500)
        self.assertEqual(resp.json()["details"], "connection refused")


class TestLogin(ApiTestCase):
    """POST /api/auth/login."""

    def test_missing_fields(self) -> None:
        resp = self.client.post("/api/auth/login", json={"email": "admin@example.com"})
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.json(), {"error": "Email e senha são obrigatórios"})

    def test_unknown_email_and_wrong_password_look_the_same(self) -> None:
        self.db.query_one.return_value = None
        unknown = self.client.post(
            "/api/auth/login", json={"email": "nobody@example.com", "senha": PASSWORD}
        )
        self.db.query_one.return_value = {**USER, "senha": PASSWORD_HASH}
        wrong = self.client.post(
            "/api/auth/login", json={"email": "admin@example.com", "senha": "senha-errada"}
        )
        self.assertEqual(unknown.status_code, 401)
        self.assertEqual(unknown.status_code, wrong.status_code)
        self.assertEqual(unknown.json(), wrong.json())

    def test_success(self) -> None:
        self.db.query_one.return_value = {**USER, "senha": PASSWORD_HASH}
        resp = self.client.post(
            "/api/auth/login", json={"email": "admin@example.com", "senha": PASSWORD}
        )
        self.assertEqual(resp.status_code, 200)
        body = resp.json()
        self.assertNotIn("senha", body["usuario"])
        self.assertEqual(body["usuario"]["id"], 1)
        me = self.client.get("/api/auth/me", headers={"Authorization": f"Bearer {body['token']}"})
        self.assertEqual(me.status_code, 200)

    def test_database_failure_is_generic_500(self) -> None:
        self.db.query_one.side_effect = RuntimeError("password authentication failed for user x")
        resp = self.client.post(
            "/api/auth/login", json={"email": "admin@example.com", "senha": PASSWORD}
        )
        self.assertEqual(resp.status_code, 500)
        self.assertEqual(resp.json(), {"error": "Erro no login"})


class TestIndustriasRoutes(ApiTestCase):
    """CRUD over /api/industrias."""

    def test_create_then_read(self) -> None:
        self.tx.query_one.side_effect = [None, None, _industria(id=42)]
        created = self.client.post(
            "/api/industrias",
            json={"nome": "X", "codigo_gestor": "C1", "cnpj": "111"},
            headers=self.auth,
        )
        self.assertEqual(created.status_code, 201)
        body = created.json()
        self.assertIsInstance(body["id"], int)
        self.assertGreater(body["id"], 0)
        self.assertTrue(body["ativo"])

        self.tx.query_one.side_effect = None
        self.tx.query_one.return_value = _industria(id=42)
        self.tx.query.side_effect = [[], []]
        fetched = self.client.get("/api/industrias/42", headers=self.auth)
        self.assertEqual(fetched.status_code, 200)
        detail = fetched.json()
        for field in ("nome", "codigo_gestor", "cnpj", "ativo"):
            self.assertEqual(detail[field], body[field])
        self.assertEqual(detail["pbms"], [])
        self.assertEqual(detail["produtos"], [])

    def test_create_missing_fields(self) -> None:
        resp = self.client.post("/api/industrias", json={"nome": "X"}, headers=self.auth)
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.json(), {"error": "Nome, código gestor e CNPJ são obrigatórios"})

    def test_create_duplicate_is_400(self) -> None:
        self.tx.query_one.side_effect = [{"id": 1}]
        resp = self.client.post(
            "/api/industrias",
            json={"nome": "Y", "codigo_gestor": "C1", "cnpj": "222"},
            headers=self.auth,
        )
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.json(), {"error": "Código gestor já está em uso"})

    def test_get_missing_is_404(self) -> None:
        self.tx.query_one.return_value = None
        resp = self.client.get("/api/industrias/999", headers=self.auth)
        self.assertEqual(resp.status_code, 404)
        self.assertEqual(resp.json(), {"error": "Indústria não encontrada"})

    def test_non_numeric_id_is_400(self) -> None:
        resp = self.client.get("/api/industrias/abc", headers=self.auth)
        self.assertEqual(resp.status_code, 400)

    def test_list_passes_ativo_filter(self) -> None:
        self.db.query.return_value = [_industria(ativo=False)]
        resp = self.client.get("/api/industrias?ativo=false", headers=self.auth)
        self.assertEqual(resp.status_code, 200)
        _, params = self.db.query.call_args.args
        self.assertEqual(params, [False])
        self.assertFalse(resp.json()[0]["ativo"])

    def test_update(self) -> None:
        self.tx.query_one.side_effect = [{"id": 1}, _industria(cidade="Recife")]
        resp = self.client.put("/api/industrias/1", json={"cidade": "Recife"}, headers=self.auth)
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["cidade"], "Recife")

    def test_delete_is_soft(self) -> None:
        self.db.execute.return_value = 1
        resp = self.client.delete("/api/industrias/1", headers=self.auth)
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["id"], 1)
        sql, _ = self.db.execute.call_args.args
        self.assertIn("SET ativo = false", sql)

    def test_delete_missing_is_404(self) -> None:
        self.db.execute.return_value = 0
        resp = self.client.delete("/api/industrias/999", headers=self.auth)
        self.assertEqual(resp.status_code, 404)

    def test_unexpected_error_is_generic_500(self) -> None:
        self.db.query.side_effect = RuntimeError('relation "industrias" does not exist')
        resp = self.client.get("/api/industrias", headers=self.auth)
        self.assertEqual(resp.status_code, 500)
        self.assertEqual(resp.json(), {"error": "Erro ao buscar indústrias"})


if __name__ == "__main__":
    unittest.main()
