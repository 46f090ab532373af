from datetime import datetime
from sqlalchemy import Integer, String, Boolean, DateTime, CheckConstraint, func
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import Base


class ActionType(Base):
    """Catalog entry: a scorable activity and its current point value."""

    __tablename__ = "acoes"
    __table_args__ = (
        CheckConstraint("pontuacao > 0", name="ck_acoes_pontuacao_positive"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    nome: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)
    pontuacao: Mapped[int] = mapped_column(Integer, nullable=False)
    ativa: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    criado_em: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
