"""
Action catalog router.

GET   /acoes        : list action types (optional name / active filters)
GET   /acoes/{id}   : one action type
PATCH /acoes/{id}   : edit point value, name or active flag
"""
from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.db.base import get_db
from app.models.action_type import ActionType
from app.schemas.catalog import (
    ActionTypeListResponse,
    ActionTypeResponse,
    ActionTypeUpdateRequest,
)
from app.schemas.common import ErrorResponse
from app.services.catalog import get_action_type, list_action_types, update_action_type

router = APIRouter(prefix="/acoes", tags=["catalog"])


def _action_type_to_response(a: ActionType) -> ActionTypeResponse:
    return ActionTypeResponse(
        id=a.id,
        nome=a.nome,
        pontuacao=a.pontuacao,
        ativa=a.ativa,
        criado_em=a.criado_em.isoformat() if a.criado_em else None,
    )


@router.get("", response_model=ActionTypeListResponse, summary="List action types")
def list_acoes(
    nome: Optional[str] = Query(default=None, description="Case-insensitive name fragment."),
    ativa: Optional[bool] = Query(default=None, description="Only active (true) or inactive (false)."),
    db: Session = Depends(get_db),
):
    items = list_action_types(db, nome=nome, ativa=ativa)
    return ActionTypeListResponse(
        total=len(items),
        items=[_action_type_to_response(a) for a in items],
    )


@router.get(
    "/{acao_id}",
    response_model=ActionTypeResponse,
    summary="Get one action type",
    responses={404: {"model": ErrorResponse, "description": "Unknown action type."}},
)
def get_acao(acao_id: int, db: Session = Depends(get_db)):
    return _action_type_to_response(get_action_type(db, acao_id))


@router.patch(
    "/{acao_id}",
    response_model=ActionTypeResponse,
    summary="Edit an action type",
    responses={
        404: {"model": ErrorResponse, "description": "Unknown action type."},
        409: {"model": ErrorResponse, "description": "Name already in use."},
    },
)
def patch_acao(acao_id: int, payload: ActionTypeUpdateRequest, db: Session = Depends(get_db)):
    """
    Change the point value, name or active flag of an action type.

    Events already recorded keep their stored `pontuacao_total`; only events
    recorded after the change use the new point value. Deactivated types
    stay in the catalog and in the history but reject new events.
    """
    action_type = update_action_type(
        db,
        acao_id,
        nome=payload.nome,
        pontuacao=payload.pontuacao,
        ativa=payload.ativa,
    )
    return _action_type_to_response(action_type)
