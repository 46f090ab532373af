"""
Ranking engine: agency leaderboards computed from the action event log.

Definition
----------
Given a scope and a filter, select every ActionEvent that matches, then:
  1. Group by agency: total_acoes = distinct events, pontuacao_total = sum of
     each event's stored point snapshot.
  2. Order agencies by pontuacao_total desc, total_acoes desc (imobiliaria_id
     asc as the final, deterministic tie-break).
  3. Attach a per-action-type breakdown to each agency row, ordered by
     summed points desc.
  4. Compute the grand total over the whole filtered set and the display
     statistics (agency count, event count, total points).

Scope
-----
Global():                cross-tenant view for the consulting firm. The
                         filter's developer_id is a *soft* filter here.
ScopedToDeveloper(id):   one developer's tenant view. Every query is
                         constrained to incorporadora_id == id and the soft
                         developer filter is ignored.

Read-only: no writes, no locks, no commit. Store failures surface as
StoreUnavailableError, never as an empty result.

Public API
----------
compute_ranking(db, ranking_filter, scope)  -> RankingResult
event_clauses(ranking_filter, scope)        -> list of SQL filter clauses
validate_filter(db, ranking_filter, scope)  -> None (raises InvalidFilterError)
parse_iso_date(value, field)                -> date | None
parse_optional_id(value, field)             -> int | None
percent_of_total(row_points, grand_total)   -> float
"""
from __future__ import annotations

import logging
import re
from collections import defaultdict
from dataclasses import dataclass, field
from datetime import date
from typing import Optional, Union

from sqlalchemy import distinct, func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.errors import (
    InvalidFilterError,
    MissingRequiredScopeError,
    StoreUnavailableError,
)
from app.models.action_event import ActionEvent
from app.models.action_type import ActionType
from app.models.agency import Agency
from app.models.developer import Developer
from app.models.project import Project

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Scope (tagged value)
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Global:
    """No tenant restriction."""


@dataclass(frozen=True)
class ScopedToDeveloper:
    """Hard tenant restriction to a single developer."""
    developer_id: Optional[int]


RankingScope = Union[Global, ScopedToDeveloper]


# ---------------------------------------------------------------------------
# Filter and result types (plain dataclasses, no ORM, no Pydantic)
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class RankingFilter:
    date_from: Optional[date] = None     # inclusive
    date_to: Optional[date] = None       # inclusive
    project_id: Optional[int] = None
    developer_id: Optional[int] = None   # soft filter, Global scope only


@dataclass
class BreakdownEntry:
    acao_id: int
    acao_nome: str
    quantidade: int
    pontuacao_acao: int


@dataclass
class RankingRow:
    imobiliaria_id: int
    imobiliaria_nome: str
    total_acoes: int
    pontuacao_total: int
    detalhes_acoes: list[BreakdownEntry] = field(default_factory=list)


@dataclass
class RankingStatistics:
    total_imobiliarias: int
    total_acoes: int
    total_pontos: int


@dataclass
class RankingResult:
    rows: list[RankingRow]
    estatisticas: RankingStatistics


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

_ISO_DATE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def parse_iso_date(value: Optional[str], field_name: str) -> Optional[date]:
    """
    Parse a YYYY-MM-DD string. Blank or None means "no restriction".
    Locale formats such as DD/MM/YYYY are rejected, never guessed.
    """
    if value is None or not value.strip():
        return None
    raw = value.strip()
    if not _ISO_DATE.match(raw):
        raise InvalidFilterError(
            field=field_name,
            message=f"'{field_name}' must be an ISO date (YYYY-MM-DD).",
            value=raw,
        )
    try:
        return date.fromisoformat(raw)
    except ValueError as exc:
        raise InvalidFilterError(
            field=field_name,
            message=f"'{field_name}' is not a valid calendar date.",
            value=raw,
        ) from exc


def parse_optional_id(value: Optional[str], field_name: str) -> Optional[int]:
    """
    Parse an id taken from the query string. Blank or None means "no
    restriction", like blank dates; anything else must be an integer.
    """
    if value is None or not value.strip():
        return None
    raw = value.strip()
    try:
        return int(raw)
    except ValueError as exc:
        raise InvalidFilterError(
            field=field_name,
            message=f"'{field_name}' must be an integer id.",
            value=raw,
        ) from exc


def percent_of_total(row_points: float, grand_total: float) -> float:
    """Share of the grand total, in percent. 0 when the total is not positive."""
    if grand_total > 0:
        return row_points / grand_total * 100
    return 0.0


def _require_scope(scope: RankingScope) -> None:
    if isinstance(scope, ScopedToDeveloper) and scope.developer_id is None:
        raise MissingRequiredScopeError()


def event_clauses(ranking_filter: RankingFilter, scope: RankingScope) -> list:
    """
    Build the WHERE clauses shared by every query of one invocation.
    All clauses are conjunctive; a None filter field adds nothing.
    """
    _require_scope(scope)
    clauses = []
    if isinstance(scope, ScopedToDeveloper):
        clauses.append(ActionEvent.incorporadora_id == scope.developer_id)
    elif ranking_filter.developer_id is not None:
        clauses.append(ActionEvent.incorporadora_id == ranking_filter.developer_id)

    if ranking_filter.date_from is not None:
        clauses.append(ActionEvent.data_acao >= ranking_filter.date_from)
    if ranking_filter.date_to is not None:
        clauses.append(ActionEvent.data_acao <= ranking_filter.date_to)
    if ranking_filter.project_id is not None:
        clauses.append(ActionEvent.empreendimento_id == ranking_filter.project_id)
    return clauses


def validate_filter(db: Session, ranking_filter: RankingFilter, scope: RankingScope) -> None:
    """
    Reject inverted date ranges and references to ids that do not exist.
    In scoped mode a project owned by another developer is reported as
    not found, so the response does not reveal other tenants' data.
    """
    _require_scope(scope)
    f = ranking_filter
    if f.date_from is not None and f.date_to is not None and f.date_from > f.date_to:
        raise InvalidFilterError(
            field="data_inicio",
            message="'data_inicio' must not be later than 'data_fim'.",
            value=f.date_from,
        )

    if isinstance(scope, ScopedToDeveloper):
        developer_id = scope.developer_id
    else:
        developer_id = f.developer_id
    if developer_id is not None and db.get(Developer, developer_id) is None:
        raise InvalidFilterError(
            field="incorporadora_id",
            message=f"Incorporadora {developer_id} não encontrada.",
            value=developer_id,
        )

    if f.project_id is not None:
        project = db.get(Project, f.project_id)
        foreign = (
            project is not None
            and isinstance(scope, ScopedToDeveloper)
            and project.incorporadora_id != scope.developer_id
        )
        if project is None or foreign:
            raise InvalidFilterError(
                field="empreendimento_id",
                message=f"Empreendimento {f.project_id} não encontrado.",
                value=f.project_id,
            )


# ---------------------------------------------------------------------------
# Queries (pure reads)
# ---------------------------------------------------------------------------

def _agency_totals(db: Session, clauses: list) -> list[RankingRow]:
    rows = (
        db.query(
            Agency.id.label("imobiliaria_id"),
            Agency.nome.label("imobiliaria_nome"),
            func.count(distinct(ActionEvent.id)).label("total_acoes"),
            func.sum(ActionEvent.pontuacao_total).label("pontuacao_total"),
        )
        .select_from(ActionEvent)
        .join(Agency, ActionEvent.imobiliaria_id == Agency.id)
        .filter(*clauses)
        .group_by(Agency.id, Agency.nome)
        .all()
    )
    return [
        RankingRow(
            imobiliaria_id=r.imobiliaria_id,
            imobiliaria_nome=r.imobiliaria_nome,
            total_acoes=int(r.total_acoes),
            pontuacao_total=int(r.pontuacao_total or 0),
        )
        for r in rows
    ]


def _breakdown_by_agency(db: Session, clauses: list) -> dict[int, list[BreakdownEntry]]:
    rows = (
        db.query(
            ActionEvent.imobiliaria_id,
            ActionType.id.label("acao_id"),
            ActionType.nome.label("acao_nome"),
            func.count(ActionEvent.id).label("quantidade"),
            func.sum(ActionEvent.pontuacao_total).label("pontuacao_acao"),
        )
        .select_from(ActionEvent)
        .join(ActionType, ActionEvent.acao_id == ActionType.id)
        .filter(*clauses)
        .group_by(ActionEvent.imobiliaria_id, ActionType.id, ActionType.nome)
        .all()
    )
    by_agency: dict[int, list[BreakdownEntry]] = defaultdict(list)
    for r in rows:
        by_agency[r.imobiliaria_id].append(BreakdownEntry(
            acao_id=r.acao_id,
            acao_nome=r.acao_nome,
            quantidade=int(r.quantidade),
            pontuacao_acao=int(r.pontuacao_acao or 0),
        ))
    for entries in by_agency.values():
        entries.sort(key=lambda e: (-e.pontuacao_acao, -e.quantidade, e.acao_nome))
    return by_agency


def _grand_total(db: Session, clauses: list) -> int:
    total = (
        db.query(func.sum(ActionEvent.pontuacao_total))
        .filter(*clauses)
        .scalar()
    )
    return int(total or 0)


# ---------------------------------------------------------------------------
# Public entry point
# ---------------------------------------------------------------------------

def compute_ranking(
    db: Session,
    ranking_filter: Optional[RankingFilter] = None,
    scope: RankingScope = Global(),
) -> RankingResult:
    """
    Compute the agency leaderboard for the given filter and scope.

    Raises MissingRequiredScopeError for ScopedToDeveloper(None),
    InvalidFilterError for bad filters and StoreUnavailableError when the
    store fails. Zero matching events is a normal, empty result.
    """
    ranking_filter = ranking_filter or RankingFilter()
    clauses = event_clauses(ranking_filter, scope)
    logger.debug("compute_ranking scope=%r filter=%r", scope, ranking_filter)

    try:
        validate_filter(db, ranking_filter, scope)
        rows = _agency_totals(db, clauses)
        breakdown = _breakdown_by_agency(db, clauses)
        grand_total = _grand_total(db, clauses)
    except SQLAlchemyError as exc:
        logger.exception("Ranking query failed (scope=%r)", scope)
        raise StoreUnavailableError(operation="compute_ranking") from exc

    rows.sort(key=lambda r: (-r.pontuacao_total, -r.total_acoes, r.imobiliaria_id))
    for row in rows:
        row.detalhes_acoes = breakdown.get(row.imobiliaria_id, [])

    stats = RankingStatistics(
        total_imobiliarias=len(rows),
        total_acoes=sum(r.total_acoes for r in rows),
        total_pontos=grand_total,
    )
    logger.info(
        "Ranking computed: scope=%s agencies=%d events=%d points=%d",
        type(scope).__name__, stats.total_imobiliarias, stats.total_acoes, stats.total_pontos,
    )
    return RankingResult(rows=rows, estatisticas=stats)
