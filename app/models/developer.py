from datetime import datetime
from sqlalchemy import Integer, String, DateTime, func
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import Base


class Developer(Base):
    """Incorporadora: the tenant that owns projects."""

    __tablename__ = "incorporadoras"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    razao_social: Mapped[str] = mapped_column(String(255), nullable=False)
    cnpj: Mapped[str] = mapped_column(String(20), nullable=False, unique=True)
    # Name shown in dropdowns and dashboards
    nome_exibicao: Mapped[str] = mapped_column(String(255), nullable=False)
    cidade: Mapped[str | None] = mapped_column(String(100), nullable=True)
    uf: Mapped[str | None] = mapped_column(String(2), nullable=True)
    email: Mapped[str | None] = mapped_column(String(255), nullable=True)
    criado_em: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
