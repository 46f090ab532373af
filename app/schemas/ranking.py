"""
Ranking response schemas.

GET /dashboard/consultoria    → RankingResponse
GET /dashboard/incorporadora  → RankingResponse
"""
from pydantic import BaseModel, ConfigDict, Field


class BreakdownEntryResponse(BaseModel):
    """Points earned by one action type within an agency."""
    model_config = ConfigDict(from_attributes=True)

    acao_id: int
    acao_nome: str
    quantidade: int = Field(description="Number of events of this action type.")
    pontuacao_acao: int = Field(description="Summed point snapshots for this action type.")


class RankingRowResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    posicao: int = Field(description="1-based rank position.")
    imobiliaria_id: int
    imobiliaria_nome: str
    total_acoes: int = Field(description="Distinct events recorded for the agency.")
    pontuacao_total: int = Field(description="Sum of the agency's event point snapshots.")
    percentual: float = Field(
        description="Share of total_pontos, in percent (0 when the total is 0).",
        examples=[25.0],
    )
    detalhes_acoes: list[BreakdownEntryResponse] = Field(
        description="Per-action-type breakdown, highest points first."
    )


class RankingStatisticsResponse(BaseModel):
    total_imobiliarias: int
    total_acoes: int
    total_pontos: int


class RankingResponse(BaseModel):
    """Ordered leaderboard plus aggregate statistics."""
    ranking: list[RankingRowResponse]
    estatisticas: RankingStatisticsResponse
