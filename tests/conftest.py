"""
Shared pytest fixtures.

Uses a SQLite database so no Postgres is required for tests.
Every table is emptied after each test, so each test seeds its own data.
"""
import itertools
import os
from datetime import date

os.environ.setdefault("DATABASE_URL", "sqlite:///./test_pontua.db")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, event
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import sessionmaker

from app.db.base import Base, get_db
from app.main import app
from app.models import ActionType, Agency, Agent, Developer, Project
from app.services.events import NewActionEvent, record_action_event

SQLITE_URL = "sqlite:///./test_pontua.db"

engine = create_engine(SQLITE_URL, connect_args={"check_same_thread": False})
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@event.listens_for(engine, "connect")
def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    # SQLite ignores FOREIGN KEY clauses (ondelete RESTRICT included) unless asked.
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def override_get_db():
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture(scope="session", autouse=True)
def create_tables():
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture(autouse=True)
def clean_tables():
    yield
    with engine.begin() as conn:
        for table in reversed(Base.metadata.sorted_tables):
            conn.execute(table.delete())


@pytest.fixture()
def db():
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture()
def client(db):
    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


class Seeder:
    """Creates reference rows and records events through the real service."""

    _seq = itertools.count(1)

    def __init__(self, db):
        self.db = db
        self.default_agent = None

    def _save(self, obj):
        self.db.add(obj)
        self.db.commit()
        self.db.refresh(obj)
        return obj

    def developer(self, nome: str = "Construtora") -> Developer:
        n = next(self._seq)
        return self._save(Developer(
            razao_social=f"{nome} S.A.",
            cnpj=f"{n:014d}",
            nome_exibicao=f"{nome} {n}",
        ))

    def project(self, developer: Developer, nome: str = "Residencial") -> Project:
        return self._save(Project(incorporadora_id=developer.id, nome=nome))

    def agency(self, nome: str) -> Agency:
        return self._save(Agency(nome=nome))

    def agent(self, nome: str = "Maria", sobrenome: str = "Santos") -> Agent:
        return self._save(Agent(nome=nome, sobrenome=sobrenome))

    def action_type(self, nome: str, pontuacao: int, ativa: bool = True) -> ActionType:
        return self._save(ActionType(nome=nome, pontuacao=pontuacao, ativa=ativa))

    def event(
        self,
        project: Project,
        agency: Agency,
        action_type: ActionType,
        quantidade: int = 1,
        data_acao: date = date(2025, 3, 10),
        agent: Agent | None = None,
    ):
        if agent is None:
            if self.default_agent is None:
                self.default_agent = self.agent()
            agent = self.default_agent
        return record_action_event(self.db, NewActionEvent(
            data_acao=data_acao,
            acao_id=action_type.id,
            quantidade=quantidade,
            incorporadora_id=project.incorporadora_id,
            empreendimento_id=project.id,
            imobiliaria_id=agency.id,
            corretor_id=agent.id,
        ))


@pytest.fixture()
def seed(db):
    return Seeder(db)


class BrokenSession:
    """Stands in for a session whose database connection is gone."""

    def _fail(self, *args, **kwargs):
        raise OperationalError("SELECT", {}, Exception("connection refused"))

    query = get = execute = commit = _fail

    def add(self, obj):
        pass

    def rollback(self):
        pass

    def close(self):
        pass


@pytest.fixture()
def broken_store(client):
    """Route every request in the test through a BrokenSession."""
    def _broken_db():
        yield BrokenSession()

    app.dependency_overrides[get_db] = _broken_db
    return client
