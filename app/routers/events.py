"""
Action event router.

POST /registro-acoes   : record a scored action event
GET  /registro-acoes   : event history (newest first, paginated)
"""
from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from app.db.base import get_db
from app.models.action_event import ActionEvent
from app.schemas.common import ErrorResponse
from app.schemas.events import (
    ActionEventCreateRequest,
    ActionEventListResponse,
    ActionEventResponse,
)
from app.services.events import NewActionEvent, list_action_events, record_action_event
from app.services.ranking import (
    Global,
    RankingFilter,
    ScopedToDeveloper,
    parse_iso_date,
    parse_optional_id,
)

router = APIRouter(prefix="/registro-acoes", tags=["events"])


def _event_to_response(ev: ActionEvent) -> ActionEventResponse:
    return ActionEventResponse(
        id=ev.id,
        data_acao=str(ev.data_acao),
        acao_id=ev.acao_id,
        quantidade=ev.quantidade,
        pontuacao_total=ev.pontuacao_total,
        incorporadora_id=ev.incorporadora_id,
        empreendimento_id=ev.empreendimento_id,
        imobiliaria_id=ev.imobiliaria_id,
        corretor_id=ev.corretor_id,
        vgv=str(ev.vgv),
        anotacoes=ev.anotacoes,
        criado_em=ev.criado_em.isoformat() if ev.criado_em else "",
    )


@router.post(
    "",
    response_model=ActionEventResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Record an action event",
    responses={
        404: {"model": ErrorResponse, "description": "Unknown action type."},
        422: {"model": ErrorResponse, "description": "Inactive action type or unknown reference."},
        409: {"model": ErrorResponse, "description": "Rejected by a table constraint."},
        503: {"model": ErrorResponse, "description": "Data store unavailable. Safe to retry."},
    },
)
def create_registro(payload: ActionEventCreateRequest, db: Session = Depends(get_db)):
    """
    Record one action event. `pontuacao_total` is computed here as
    `quantidade × acao.pontuacao` and is never recomputed afterwards.
    """
    event = record_action_event(db, NewActionEvent(**payload.model_dump()))
    return _event_to_response(event)


@router.get(
    "",
    response_model=ActionEventListResponse,
    summary="List action events (newest first)",
)
def list_registros(
    incorporadora_id: Optional[str] = Query(
        default=None,
        description="When given, only this developer's events are returned.",
    ),
    data_inicio: Optional[str] = Query(default=None, description="ISO date, inclusive."),
    data_fim: Optional[str] = Query(default=None, description="ISO date, inclusive."),
    empreendimento_id: Optional[str] = Query(default=None),
    imobiliaria_id: Optional[str] = Query(default=None),
    corretor_id: Optional[str] = Query(default=None),
    acao_id: Optional[str] = Query(default=None),
    limit: int = Query(default=50, ge=1, le=200, description="Page size."),
    offset: int = Query(default=0, ge=0, description="Skip N items."),
    db: Session = Depends(get_db),
):
    developer_id = parse_optional_id(incorporadora_id, "incorporadora_id")
    scope = ScopedToDeveloper(developer_id) if developer_id is not None else Global()
    ranking_filter = RankingFilter(
        date_from=parse_iso_date(data_inicio, "data_inicio"),
        date_to=parse_iso_date(data_fim, "data_fim"),
        project_id=parse_optional_id(empreendimento_id, "empreendimento_id"),
    )
    total, items = list_action_events(
        db,
        ranking_filter,
        scope,
        imobiliaria_id=parse_optional_id(imobiliaria_id, "imobiliaria_id"),
        corretor_id=parse_optional_id(corretor_id, "corretor_id"),
        acao_id=parse_optional_id(acao_id, "acao_id"),
        limit=limit,
        offset=offset,
    )
    return ActionEventListResponse(
        total=total,
        items=[_event_to_response(ev) for ev in items],
    )
