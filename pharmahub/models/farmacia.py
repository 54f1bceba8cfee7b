"""ORM model for pharmacies."""

from sqlalchemy import Boolean, Column, DateTime, Integer, String, func, text

from pharmahub.models.base import Base


class Farmacia(Base):
    __tablename__ = "farmacias"

    id = Column(Integer, primary_key=True, autoincrement=True)
    nome = Column(String(255), nullable=False)
    codigo_gestor = Column(String(64), nullable=False, unique=True)
    cnpj = Column(String(32), nullable=False, unique=True)
    cidade = Column(String(255), nullable=True)
    estado = Column(String(2), nullable=True)
    data_cadastro = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )
    ativo = Column(Boolean, nullable=False, server_default=text("true"))
