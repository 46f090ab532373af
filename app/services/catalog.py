"""
Action catalog: point values and active flags per action type.

The ranking engine never reads from here; it trusts the point snapshot
stored on each event. The catalog is consulted only when an event is
recorded, and edited by administrators.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.errors import ActionTypeNotFoundError, DuplicateActionTypeError, StoreUnavailableError
from app.models.action_type import ActionType

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CatalogEntry:
    acao_id: int
    nome: str
    pontuacao: int
    ativa: bool


def get_action_type(db: Session, acao_id: int) -> ActionType:
    try:
        action_type = db.get(ActionType, acao_id)
    except SQLAlchemyError as exc:
        logger.exception("Catalog lookup failed (acao=%s)", acao_id)
        raise StoreUnavailableError(operation="get_action_type") from exc
    if action_type is None:
        raise ActionTypeNotFoundError(acao_id)
    return action_type


def get_catalog_entry(db: Session, acao_id: int) -> CatalogEntry:
    """Current point value and active flag for an action type."""
    action_type = get_action_type(db, acao_id)
    return CatalogEntry(
        acao_id=action_type.id,
        nome=action_type.nome,
        pontuacao=action_type.pontuacao,
        ativa=action_type.ativa,
    )


def list_action_types(
    db: Session,
    nome: Optional[str] = None,
    ativa: Optional[bool] = None,
) -> list[ActionType]:
    try:
        q = db.query(ActionType)
        if nome:
            q = q.filter(ActionType.nome.ilike(f"%{nome}%"))
        if ativa is not None:
            q = q.filter(ActionType.ativa == ativa)
        return q.order_by(ActionType.nome).all()
    except SQLAlchemyError as exc:
        logger.exception("Catalog listing failed")
        raise StoreUnavailableError(operation="list_action_types") from exc


def update_action_type(
    db: Session,
    acao_id: int,
    nome: Optional[str] = None,
    pontuacao: Optional[int] = None,
    ativa: Optional[bool] = None,
) -> ActionType:
    """
    Edit a catalog entry. Past events keep the pontuacao_total they were
    recorded with; only events recorded afterwards see the new value.
    """
    action_type = get_action_type(db, acao_id)
    if nome is not None:
        action_type.nome = nome
    if pontuacao is not None:
        action_type.pontuacao = pontuacao
    if ativa is not None:
        action_type.ativa = ativa

    try:
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        raise DuplicateActionTypeError(nome=nome or action_type.nome) from exc
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception("Failed to update action type %d", acao_id)
        raise StoreUnavailableError(operation="update_action_type") from exc
    db.refresh(action_type)
    logger.info(
        "Action type %d updated: pontuacao=%d ativa=%s",
        action_type.id, action_type.pontuacao, action_type.ativa,
    )
    return action_type
