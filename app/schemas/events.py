"""
Action event schemas.

POST /registro-acoes  → ActionEventCreateRequest → ActionEventResponse
GET  /registro-acoes  → ActionEventListResponse
"""
from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Annotated, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ActionEventCreateRequest(BaseModel):
    data_acao: date = Field(description="ISO date of the action.", examples=["2025-03-14"])
    acao_id: int
    quantidade: Annotated[int, Field(gt=0, description="Repetitions on that date.")]
    incorporadora_id: int
    empreendimento_id: int
    imobiliaria_id: int
    corretor_id: int
    vgv: Optional[Annotated[Decimal, Field(ge=0, max_digits=12, decimal_places=2)]] = None
    anotacoes: Optional[str] = Field(default=None, max_length=10_000)

    @field_validator("anotacoes", mode="before")
    @classmethod
    def blank_to_none(cls, v):
        if isinstance(v, str) and not v.strip():
            return None
        return v


class ActionEventResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    data_acao: str
    acao_id: int
    quantidade: int
    pontuacao_total: int = Field(description="Point snapshot taken when the event was recorded.")
    incorporadora_id: int
    empreendimento_id: int
    imobiliaria_id: int
    corretor_id: int
    vgv: str
    anotacoes: Optional[str] = None
    criado_em: str


class ActionEventListResponse(BaseModel):
    total: int
    items: list[ActionEventResponse]
