"""SQLAlchemy ORM models (schema source for Alembic)."""

from pharmahub.models.base import Base
from pharmahub.models.farmacia import Farmacia
from pharmahub.models.industria import Industria
from pharmahub.models.pbm import Pbm
from pharmahub.models.produto import Produto
from pharmahub.models.usuario import Usuario

__all__ = ["Base", "Farmacia", "Industria", "Pbm", "Produto", "Usuario"]
