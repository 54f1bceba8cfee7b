"""ORM model for application users (auth and affiliation)."""

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
    DateTime,
    ForeignKey,
    Integer,
    String,
    func,
    text,
)

from pharmahub.models.base import Base


class Usuario(Base):
    """
    User account for JWT authentication.

    perfil: 'admin', 'industria', 'farmacia' or 'pbm'. A user belongs to at
    most one of industria/farmacia/pbm. `senha` holds the bcrypt hash.
    """

    __tablename__ = "usuarios"
    __table_args__ = (
        CheckConstraint(
            "num_nonnulls(industria_id, farmacia_id, pbm_id) <= 1",
            name="single_affiliation",
        ),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    nome = Column(String(255), nullable=False)
    email = Column(String(255), nullable=False, unique=True, index=True)
    senha = Column(String(255), nullable=False)
    perfil = Column(String(32), nullable=False, server_default="admin")
    industria_id = Column(Integer, ForeignKey("industrias.id"), nullable=True)
    farmacia_id = Column(Integer, ForeignKey("farmacias.id"), nullable=True)
    pbm_id = Column(Integer, ForeignKey("pbms.id"), nullable=True)
    ativo = Column(Boolean, nullable=False, server_default=text("true"))
    ultimo_acesso = Column(DateTime(timezone=True), nullable=True)
    data_cadastro = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )
