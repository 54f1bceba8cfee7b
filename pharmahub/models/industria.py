"""ORM model for pharmaceutical industries."""

from sqlalchemy import Boolean, Column, DateTime, Integer, String, func, text

from pharmahub.models.base import Base


class Industria(Base):
    """
    Pharmaceutical industry. Owns PBMs and products by foreign key.

    Rows are never deleted by the API; `ativo = false` marks a soft delete.
    """

    __tablename__ = "industrias"

    id = Column(Integer, primary_key=True, autoincrement=True)
    nome = Column(String(255), nullable=False, index=True)
    codigo_gestor = Column(String(64), nullable=False, unique=True)
    cnpj = Column(String(32), nullable=False, unique=True)
    razao_social = Column(String(255), nullable=True)
    endereco = Column(String(512), nullable=True)
    cidade = Column(String(255), nullable=True)
    estado = Column(String(2), nullable=True)
    cep = Column(String(16), nullable=True)
    telefone = Column(String(32), nullable=True)
    email = Column(String(255), nullable=True)
    website = Column(String(512), nullable=True)
    logo_url = Column(String(1024), nullable=True)
    data_cadastro = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )
    ativo = Column(Boolean, nullable=False, server_default=text("true"))
