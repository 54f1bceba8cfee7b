"""
Create a user (there is no registration endpoint). Run from project root:
  python -m pharmahub.scripts.create_user NOME EMAIL SENHA [--perfil PERFIL]
      [--industria-codigo C | --farmacia-codigo C | --pbm-codigo C]
Example:
  python -m pharmahub.scripts.create_user "Ana Souza" ana@example.com 's3nha-forte' \
      --perfil industria --industria-codigo IND001
"""
import argparse
import logging
import sys

from pharmahub.core.database import Database, SqlExecutor, database
from pharmahub.core.security import PASSWORD_MAX_LEN, PASSWORD_MIN_LEN, hash_password

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
    datefmt="%Y-%m-%dT%H:%M:%SZ",
)
logger = logging.getLogger(__name__)

PERFIS = ("admin", "industria", "farmacia", "pbm")
# Affiliation option -> (table holding codigo_gestor, usuarios FK column)
AFFILIATIONS = {
    "industria_codigo": ("industrias", "industria_id"),
    "farmacia_codigo": ("farmacias", "farmacia_id"),
    "pbm_codigo": ("pbms", "pbm_id"),
}


class CreateUserError(Exception):
    pass


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Create a PharmaHub user.")
    parser.add_argument("nome", help="Display name")
    parser.add_argument("email", help="Login email (unique)")
    parser.add_argument("senha", help=f"Password ({PASSWORD_MIN_LEN}-{PASSWORD_MAX_LEN} chars)")
    parser.add_argument("--perfil", default="admin", choices=PERFIS)
    group = parser.add_mutually_exclusive_group()
    group.add_argument("--industria-codigo", dest="industria_codigo")
    group.add_argument("--farmacia-codigo", dest="farmacia_codigo")
    group.add_argument("--pbm-codigo", dest="pbm_codigo")
    return parser


def create_user(
    db: Database,
    nome: str,
    email: str,
    senha: str,
    perfil: str = "admin",
    affiliation: tuple[str, str] | None = None,
) -> int:
    """
    Insert a user with a bcrypt-hashed password; returns the new id.

    affiliation is (option name, codigo_gestor), e.g. ("industria_codigo", "IND001").
    Raises CreateUserError on invalid input, unknown affiliation code or duplicate email.
    """
    nome = nome.strip()
    email = email.strip().lower()
    if not nome or not email:
        raise CreateUserError("Nome and email must be non-empty.")
    if not (PASSWORD_MIN_LEN <= len(senha) <= PASSWORD_MAX_LEN):
        raise CreateUserError(
            f"Password must be {PASSWORD_MIN_LEN}-{PASSWORD_MAX_LEN} characters."
        )
    senha_hash = hash_password(senha)

    def _insert(tx: SqlExecutor) -> int:
        if tx.query_one("SELECT id FROM usuarios WHERE email = $1", [email]) is not None:
            raise CreateUserError(f"User '{email}' already exists.")
        fk_column, fk_value = None, None
        if affiliation is not None:
            option, codigo = affiliation
            table, fk_column = AFFILIATIONS[option]
            row = tx.query_one(f"SELECT id FROM {table} WHERE codigo_gestor = $1", [codigo])
            if row is None:
                raise CreateUserError(f"No {table} row with codigo_gestor '{codigo}'.")
            fk_value = row["id"]
        if fk_column is None:
            created = tx.query_one(
                "INSERT INTO usuarios (nome, email, senha, perfil) "
                "VALUES ($1, $2, $3, $4) RETURNING id",
                [nome, email, senha_hash, perfil],
            )
        else:
            created = tx.query_one(
                f"INSERT INTO usuarios (nome, email, senha, perfil, {fk_column}) "
                "VALUES ($1, $2, $3, $4, $5) RETURNING id",
                [nome, email, senha_hash, perfil, fk_value],
            )
        return created["id"]

    return db.transaction(_insert)


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    affiliation = next(
        ((option, getattr(args, option)) for option in AFFILIATIONS if getattr(args, option)),
        None,
    )
    try:
        user_id = create_user(
            database, args.nome, args.email, args.senha, args.perfil, affiliation
        )
    except CreateUserError as e:
        print(str(e), file=sys.stderr)
        return 1
    except Exception as e:
        logger.exception("Create user failed: %s", e)
        return 1
    print(f"Created user '{args.email}' (id={user_id}) with perfil '{args.perfil}'.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
