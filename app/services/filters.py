"""
Dropdown data for the dashboard filter forms.
"""
from __future__ import annotations

import logging
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.errors import MissingRequiredScopeError, StoreUnavailableError
from app.models.developer import Developer
from app.models.project import Project

logger = logging.getLogger(__name__)


def _project_option(p: Project) -> dict:
    return {"id": p.id, "nome": p.nome, "incorporadora_id": p.incorporadora_id}


def consulting_filter_data(db: Session) -> dict:
    """All developers and all projects; the client narrows projects by developer."""
    try:
        developers = db.query(Developer).order_by(Developer.nome_exibicao).all()
        projects = db.query(Project).order_by(Project.nome).all()
    except SQLAlchemyError as exc:
        logger.exception("Filter data query failed (consulting)")
        raise StoreUnavailableError(operation="consulting_filter_data") from exc
    return {
        "incorporadoras": [
            {"id": d.id, "nome": d.nome_exibicao} for d in developers
        ],
        "empreendimentos": [_project_option(p) for p in projects],
    }


def developer_filter_data(db: Session, developer_id: Optional[int]) -> dict:
    if developer_id is None:
        raise MissingRequiredScopeError()
    try:
        projects = (
            db.query(Project)
            .filter(Project.incorporadora_id == developer_id)
            .order_by(Project.nome)
            .all()
        )
    except SQLAlchemyError as exc:
        logger.exception("Filter data query failed (incorporadora=%s)", developer_id)
        raise StoreUnavailableError(operation="developer_filter_data") from exc
    return {"empreendimentos": [_project_option(p) for p in projects]}
