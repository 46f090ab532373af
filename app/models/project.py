from datetime import datetime
from sqlalchemy import Integer, String, DateTime, ForeignKey, func
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import Base


class Project(Base):
    """Empreendimento. Belongs to exactly one developer."""

    __tablename__ = "empreendimentos"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    incorporadora_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("incorporadoras.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    nome: Mapped[str] = mapped_column(String(255), nullable=False)
    cidade: Mapped[str | None] = mapped_column(String(100), nullable=True)
    uf: Mapped[str | None] = mapped_column(String(2), nullable=True)
    criado_em: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
