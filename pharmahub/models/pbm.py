"""ORM model for Pharmacy Benefit Managers."""

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, String, func, text

from pharmahub.models.base import Base


class Pbm(Base):
    __tablename__ = "pbms"

    id = Column(Integer, primary_key=True, autoincrement=True)
    nome = Column(String(255), nullable=False)
    codigo_gestor = Column(String(64), nullable=False, unique=True)
    cnpj = Column(String(32), nullable=True)
    industria_id = Column(Integer, ForeignKey("industrias.id"), nullable=True, index=True)
    data_cadastro = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )
    ativo = Column(Boolean, nullable=False, server_default=text("true"))
