"""
Action event service: record scored events and list the event history.

Public API
----------
record_action_event(db, data)                     -> ActionEvent   (commits)
list_action_events(db, ranking_filter, scope, …)  -> (total, page)
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Optional

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.errors import (
    ConstraintViolationError,
    InactiveActionTypeError,
    ReferenceNotFoundError,
    StoreUnavailableError,
)
from app.models.action_event import ActionEvent
from app.models.agency import Agency
from app.models.agent import Agent
from app.models.developer import Developer
from app.models.project import Project
from app.services.catalog import get_catalog_entry
from app.services.ranking import RankingFilter, RankingScope, event_clauses, validate_filter

logger = logging.getLogger(__name__)


@dataclass
class NewActionEvent:
    """Service-level DTO so this layer stays schema-agnostic."""
    data_acao: date
    acao_id: int
    quantidade: int
    incorporadora_id: int
    empreendimento_id: int
    imobiliaria_id: int
    corretor_id: int
    vgv: Optional[Decimal] = None
    anotacoes: Optional[str] = None


def _check_references(db: Session, data: NewActionEvent) -> None:
    try:
        for model, field_name in (
            (Developer, "incorporadora_id"),
            (Agency, "imobiliaria_id"),
            (Agent, "corretor_id"),
        ):
            value = getattr(data, field_name)
            if db.get(model, value) is None:
                raise ReferenceNotFoundError(field=field_name, value=value)

        project = db.get(Project, data.empreendimento_id)
    except SQLAlchemyError as exc:
        logger.exception("Reference lookup failed while recording an event")
        raise StoreUnavailableError(operation="record_action_event") from exc
    if project is None or project.incorporadora_id != data.incorporadora_id:
        raise ReferenceNotFoundError(field="empreendimento_id", value=data.empreendimento_id)


def record_action_event(db: Session, data: NewActionEvent) -> ActionEvent:
    """
    Persist a new event with its point snapshot:
    pontuacao_total = quantidade * current catalog pontuacao.
    Inactive action types are rejected.
    """
    _check_references(db, data)
    entry = get_catalog_entry(db, data.acao_id)
    if not entry.ativa:
        raise InactiveActionTypeError(data.acao_id)

    event = ActionEvent(
        data_acao=data.data_acao,
        acao_id=entry.acao_id,
        quantidade=data.quantidade,
        pontuacao_total=data.quantidade * entry.pontuacao,
        incorporadora_id=data.incorporadora_id,
        empreendimento_id=data.empreendimento_id,
        imobiliaria_id=data.imobiliaria_id,
        corretor_id=data.corretor_id,
        vgv=data.vgv if data.vgv is not None else Decimal("0"),
        anotacoes=data.anotacoes,
    )
    db.add(event)
    try:
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        logger.warning("Action event rejected by a table constraint: %s", exc.orig)
        raise ConstraintViolationError(operation="record_action_event") from exc
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception("Failed to persist action event")
        raise StoreUnavailableError(operation="record_action_event") from exc
    db.refresh(event)
    logger.info(
        "Recorded action event %d: acao=%d x%d = %d pts (imobiliaria=%d)",
        event.id, event.acao_id, event.quantidade, event.pontuacao_total, event.imobiliaria_id,
    )
    return event


def list_action_events(
    db: Session,
    ranking_filter: RankingFilter,
    scope: RankingScope,
    imobiliaria_id: Optional[int] = None,
    corretor_id: Optional[int] = None,
    acao_id: Optional[int] = None,
    limit: int = 50,
    offset: int = 0,
) -> tuple[int, list[ActionEvent]]:
    """Return (total, page) of events, newest data_acao first."""
    clauses = event_clauses(ranking_filter, scope)
    if imobiliaria_id is not None:
        clauses.append(ActionEvent.imobiliaria_id == imobiliaria_id)
    if corretor_id is not None:
        clauses.append(ActionEvent.corretor_id == corretor_id)
    if acao_id is not None:
        clauses.append(ActionEvent.acao_id == acao_id)

    try:
        validate_filter(db, ranking_filter, scope)
        q = db.query(ActionEvent).filter(*clauses)
        total = q.count()
        items = (
            q.order_by(ActionEvent.data_acao.desc(), ActionEvent.id.desc())
            .offset(offset)
            .limit(limit)
            .all()
        )
    except SQLAlchemyError as exc:
        logger.exception("Event history query failed (scope=%r)", scope)
        raise StoreUnavailableError(operation="list_action_events") from exc
    return total, items
