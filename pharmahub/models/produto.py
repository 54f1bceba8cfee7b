"""ORM model for products sold by an industry, optionally under a PBM program."""

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, String, Text, func, text

from pharmahub.models.base import Base


class Produto(Base):
    __tablename__ = "produtos"

    id = Column(Integer, primary_key=True, autoincrement=True)
    nome = Column(String(255), nullable=False)
    codigo_ean = Column(String(32), nullable=True, index=True)
    descricao = Column(Text, nullable=True)
    industria_id = Column(Integer, ForeignKey("industrias.id"), nullable=True, index=True)
    pbm_id = Column(Integer, ForeignKey("pbms.id"), nullable=True, index=True)
    data_cadastro = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )
    ativo = Column(Boolean, nullable=False, server_default=text("true"))
