"""
Dashboard router: agency leaderboards.

GET /dashboard/consultoria                 : cross-tenant ranking (consulting firm)
GET /dashboard/consultoria/filtros         : developers + projects for the filter form
GET /dashboard/incorporadora               : ranking scoped to one developer
GET /dashboard/incorporadora/filtros       : that developer's projects
"""
from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.core.errors import MissingRequiredScopeError
from app.db.base import get_db
from app.schemas.common import ErrorResponse
from app.schemas.filters import ConsultingFiltersResponse, DeveloperFiltersResponse
from app.schemas.ranking import (
    BreakdownEntryResponse,
    RankingResponse,
    RankingRowResponse,
    RankingStatisticsResponse,
)
from app.services.filters import consulting_filter_data, developer_filter_data
from app.services.ranking import (
    Global,
    RankingFilter,
    RankingResult,
    ScopedToDeveloper,
    compute_ranking,
    parse_iso_date,
    parse_optional_id,
    percent_of_total,
)

router = APIRouter(prefix="/dashboard", tags=["dashboard"])

_DATE_FROM_DOC = "Inclusive lower bound, ISO date (YYYY-MM-DD). Blank means no bound."
_DATE_TO_DOC = "Inclusive upper bound, ISO date (YYYY-MM-DD). Blank means no bound."

_ERROR_RESPONSES = {
    422: {"model": ErrorResponse, "description": "Malformed date or unknown referenced id."},
    503: {"model": ErrorResponse, "description": "Data store unavailable. Safe to retry."},
}


# ---------------------------------------------------------------------------
# Serialization helper
# ---------------------------------------------------------------------------

def _result_to_response(result: RankingResult) -> RankingResponse:
    total_pontos = result.estatisticas.total_pontos
    return RankingResponse(
        ranking=[
            RankingRowResponse(
                posicao=position,
                imobiliaria_id=row.imobiliaria_id,
                imobiliaria_nome=row.imobiliaria_nome,
                total_acoes=row.total_acoes,
                pontuacao_total=row.pontuacao_total,
                percentual=round(percent_of_total(row.pontuacao_total, total_pontos), 2),
                detalhes_acoes=[
                    BreakdownEntryResponse(
                        acao_id=d.acao_id,
                        acao_nome=d.acao_nome,
                        quantidade=d.quantidade,
                        pontuacao_acao=d.pontuacao_acao,
                    )
                    for d in row.detalhes_acoes
                ],
            )
            for position, row in enumerate(result.rows, start=1)
        ],
        estatisticas=RankingStatisticsResponse(
            total_imobiliarias=result.estatisticas.total_imobiliarias,
            total_acoes=result.estatisticas.total_acoes,
            total_pontos=total_pontos,
        ),
    )


# ---------------------------------------------------------------------------
# GET /dashboard/consultoria
# ---------------------------------------------------------------------------

@router.get(
    "/consultoria",
    response_model=RankingResponse,
    summary="Agency ranking across all developers",
    responses=_ERROR_RESPONSES,
)
def ranking_consultoria(
    data_inicio: Optional[str] = Query(default=None, description=_DATE_FROM_DOC, examples=["2025-01-01"]),
    data_fim: Optional[str] = Query(default=None, description=_DATE_TO_DOC, examples=["2025-12-31"]),
    incorporadora_id: Optional[str] = Query(
        default=None,
        description="Optional developer filter. Omit or leave blank to rank across every developer.",
    ),
    empreendimento_id: Optional[str] = Query(
        default=None, description="Restrict to one project. Blank means every project."
    ),
    db: Session = Depends(get_db),
):
    """
    Leaderboard of agencies by summed points for the consulting firm.

    Rows are ordered by `pontuacao_total` desc, then `total_acoes` desc.
    Agencies with no matching events are not listed.
    """
    ranking_filter = RankingFilter(
        date_from=parse_iso_date(data_inicio, "data_inicio"),
        date_to=parse_iso_date(data_fim, "data_fim"),
        project_id=parse_optional_id(empreendimento_id, "empreendimento_id"),
        developer_id=parse_optional_id(incorporadora_id, "incorporadora_id"),
    )
    result = compute_ranking(db=db, ranking_filter=ranking_filter, scope=Global())
    return _result_to_response(result)


@router.get(
    "/consultoria/filtros",
    response_model=ConsultingFiltersResponse,
    summary="Filter options for the consulting dashboard",
)
def filtros_consultoria(db: Session = Depends(get_db)):
    return consulting_filter_data(db)


# ---------------------------------------------------------------------------
# GET /dashboard/incorporadora
# ---------------------------------------------------------------------------

@router.get(
    "/incorporadora",
    response_model=RankingResponse,
    summary="Agency ranking for a single developer",
    responses={
        400: {"model": ErrorResponse, "description": "incorporadora_id missing."},
        **_ERROR_RESPONSES,
    },
)
def ranking_incorporadora(
    incorporadora_id: Optional[str] = Query(
        default=None,
        description="Developer whose data is ranked. Required; blank counts as missing.",
    ),
    data_inicio: Optional[str] = Query(default=None, description=_DATE_FROM_DOC, examples=["2025-01-01"]),
    data_fim: Optional[str] = Query(default=None, description=_DATE_TO_DOC, examples=["2025-12-31"]),
    empreendimento_id: Optional[str] = Query(
        default=None, description="Restrict to one of the developer's projects."
    ),
    db: Session = Depends(get_db),
):
    """
    Leaderboard restricted to events recorded for `incorporadora_id`.
    Events of other developers are never counted, whatever the other filters.
    """
    developer_id = parse_optional_id(incorporadora_id, "incorporadora_id")
    if developer_id is None:
        raise MissingRequiredScopeError()
    ranking_filter = RankingFilter(
        date_from=parse_iso_date(data_inicio, "data_inicio"),
        date_to=parse_iso_date(data_fim, "data_fim"),
        project_id=parse_optional_id(empreendimento_id, "empreendimento_id"),
    )
    result = compute_ranking(
        db=db,
        ranking_filter=ranking_filter,
        scope=ScopedToDeveloper(developer_id),
    )
    return _result_to_response(result)


@router.get(
    "/incorporadora/filtros",
    response_model=DeveloperFiltersResponse,
    summary="Filter options for a developer dashboard",
    responses={400: {"model": ErrorResponse, "description": "incorporadora_id missing."}},
)
def filtros_incorporadora(
    incorporadora_id: Optional[str] = Query(default=None),
    db: Session = Depends(get_db),
):
    return developer_filter_data(db, parse_optional_id(incorporadora_id, "incorporadora_id"))
