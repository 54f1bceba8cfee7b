"""Initial schema: industrias, pbms, farmacias, produtos, usuarios.

Revision ID: 20250301000000
Revises:
Create Date: 2025-03-01

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "20250301000000"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _audit_columns() -> list[sa.Column]:
    return [
        sa.Column(
            "data_cadastro",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.Column("ativo", sa.Boolean(), server_default=sa.text("true"), nullable=False),
    ]


def upgrade() -> None:
    op.create_table(
        "industrias",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("nome", sa.String(length=255), nullable=False),
        sa.Column("codigo_gestor", sa.String(length=64), nullable=False),
        sa.Column("cnpj", sa.String(length=32), nullable=False),
        sa.Column("razao_social", sa.String(length=255), nullable=True),
        sa.Column("endereco", sa.String(length=512), nullable=True),
        sa.Column("cidade", sa.String(length=255), nullable=True),
        sa.Column("estado", sa.String(length=2), nullable=True),
        sa.Column("cep", sa.String(length=16), nullable=True),
        sa.Column("telefone", sa.String(length=32), nullable=True),
        sa.Column("email", sa.String(length=255), nullable=True),
        sa.Column("website", sa.String(length=512), nullable=True),
        sa.Column("logo_url", sa.String(length=1024), nullable=True),
        *_audit_columns(),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("codigo_gestor"),
        sa.UniqueConstraint("cnpj"),
    )
    op.create_index(op.f("ix_industrias_nome"), "industrias", ["nome"], unique=False)

    op.create_table(
        "pbms",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("nome", sa.String(length=255), nullable=False),
        sa.Column("codigo_gestor", sa.String(length=64), nullable=False),
        sa.Column("cnpj", sa.String(length=32), nullable=True),
        sa.Column("industria_id", sa.Integer(), nullable=True),
        *_audit_columns(),
        sa.ForeignKeyConstraint(["industria_id"], ["industrias.id"]),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("codigo_gestor"),
    )
    op.create_index(op.f("ix_pbms_industria_id"), "pbms", ["industria_id"], unique=False)

    op.create_table(
        "farmacias",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("nome", sa.String(length=255), nullable=False),
        sa.Column("codigo_gestor", sa.String(length=64), nullable=False),
        sa.Column("cnpj", sa.String(length=32), nullable=False),
        sa.Column("cidade", sa.String(length=255), nullable=True),
        sa.Column("estado", sa.String(length=2), nullable=True),
        *_audit_columns(),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("codigo_gestor"),
        sa.UniqueConstraint("cnpj"),
    )

    op.create_table(
        "produtos",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("nome", sa.String(length=255), nullable=False),
        sa.Column("codigo_ean", sa.String(length=32), nullable=True),
        sa.Column("descricao", sa.Text(), nullable=True),
        sa.Column("industria_id", sa.Integer(), nullable=True),
        sa.Column("pbm_id", sa.Integer(), nullable=True),
        *_audit_columns(),
        sa.ForeignKeyConstraint(["industria_id"], ["industrias.id"]),
        sa.ForeignKeyConstraint(["pbm_id"], ["pbms.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_produtos_codigo_ean"), "produtos", ["codigo_ean"], unique=False)
    op.create_index(op.f("ix_produtos_industria_id"), "produtos", ["industria_id"], unique=False)
    op.create_index(op.f("ix_produtos_pbm_id"), "produtos", ["pbm_id"], unique=False)

    op.create_table(
        "usuarios",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("nome", sa.String(length=255), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("senha", sa.String(length=255), nullable=False),
        sa.Column("perfil", sa.String(length=32), nullable=False, server_default="admin"),
        sa.Column("industria_id", sa.Integer(), nullable=True),
        sa.Column("farmacia_id", sa.Integer(), nullable=True),
        sa.Column("pbm_id", sa.Integer(), nullable=True),
        sa.Column("ativo", sa.Boolean(), server_default=sa.text("true"), nullable=False),
        sa.Column("ultimo_acesso", sa.DateTime(timezone=True), nullable=True),
        sa.Column(
            "data_cadastro",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.CheckConstraint(
            "num_nonnulls(industria_id, farmacia_id, pbm_id) <= 1",
            name="ck_usuarios_single_affiliation",
        ),
        sa.ForeignKeyConstraint(["industria_id"], ["industrias.id"]),
        sa.ForeignKeyConstraint(["farmacia_id"], ["farmacias.id"]),
        sa.ForeignKeyConstraint(["pbm_id"], ["pbms.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_usuarios_email"), "usuarios", ["email"], unique=True)


def downgrade() -> None:
    op.drop_index(op.f("ix_usuarios_email"), table_name="usuarios")
    op.drop_table("usuarios")
    op.drop_index(op.f("ix_produtos_pbm_id"), table_name="produtos")
    op.drop_index(op.f("ix_produtos_industria_id"), table_name="produtos")
    op.drop_index(op.f("ix_produtos_codigo_ean"), table_name="produtos")
    op.drop_table("produtos")
    op.drop_table("farmacias")
    op.drop_index(op.f("ix_pbms_industria_id"), table_name="pbms")
    op.drop_table("pbms")
    op.drop_index(op.f("ix_industrias_nome"), table_name="industrias")
    op.drop_table("industrias")
