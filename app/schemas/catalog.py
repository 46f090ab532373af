from typing import Annotated, Optional
from pydantic import BaseModel, ConfigDict, Field


class ActionTypeResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    nome: str
    pontuacao: int
    ativa: bool
    criado_em: Optional[str] = None


class ActionTypeListResponse(BaseModel):
    total: int
    items: list[ActionTypeResponse]


class ActionTypeUpdateRequest(BaseModel):
    """Partial update. Omitted fields are left unchanged."""
    nome: Optional[Annotated[str, Field(min_length=1, max_length=255)]] = None
    pontuacao: Optional[Annotated[int, Field(gt=0)]] = None
    ativa: Optional[bool] = None
