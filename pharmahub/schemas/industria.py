"""Request/response schemas for the industrias resource."""

from datetime import datetime

from pydantic import BaseModel, Field

REQUIRED_FIELDS = ("nome", "codigo_gestor", "cnpj")


class IndustriaBase(BaseModel):
    """Writable industry fields. Required ones are optional here so the service answers 400."""

    nome: str | None = Field(default=None, max_length=255)
    codigo_gestor: str | None = Field(default=None, max_length=64)
    cnpj: str | None = Field(default=None, max_length=32)
    razao_social: str | None = Field(default=None, max_length=255)
    endereco: str | None = Field(default=None, max_length=512)
    cidade: str | None = Field(default=None, max_length=255)
    estado: str | None = Field(default=None, max_length=2)
    cep: str | None = Field(default=None, max_length=16)
    telefone: str | None = Field(default=None, max_length=32)
    email: str | None = Field(default=None, max_length=255)
    website: str | None = Field(default=None, max_length=512)
    logo_url: str | None = Field(default=None, max_length=1024)


class IndustriaCreate(IndustriaBase):
    ativo: bool = True


class IndustriaUpdate(IndustriaBase):
    """Partial update: only fields present in the request body are written."""

    ativo: bool | None = None


class IndustriaSummary(BaseModel):
    """Industry as listed by GET /api/industrias."""

    id: int
    nome: str
    codigo_gestor: str
    cnpj: str
    razao_social: str | None = None
    cidade: str | None = None
    estado: str | None = None
    email: str | None = None
    website: str | None = None
    logo_url: str | None = None
    data_cadastro: datetime
    ativo: bool


class Industria(IndustriaSummary):
    """Full industry record."""

    endereco: str | None = None
    cep: str | None = None
    telefone: str | None = None


class PbmItem(BaseModel):
    id: int
    nome: str
    codigo_gestor: str
    ativo: bool


class ProdutoItem(BaseModel):
    id: int
    nome: str
    codigo_ean: str | None = None
    ativo: bool


class IndustriaDetail(Industria):
    """Industry with the PBMs and products that reference it."""

    pbms: list[PbmItem] = Field(default_factory=list)
    produtos: list[ProdutoItem] = Field(default_factory=list)


class IndustriaDeleted(BaseModel):
    message: str
    id: int
