from sqlalchemy import create_engine
from sqlalchemy.orm import DeclarativeBase, sessionmaker

from app.core.config import settings


class Base(DeclarativeBase):
    pass


engine = create_engine(settings.DATABASE_URL, pool_pre_ping=settings.DB_POOL_PRE_PING)

SessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False)


def get_db():
    """Request-scoped session dependency. Closed after the response is sent."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
