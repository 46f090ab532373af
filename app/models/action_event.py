"""
ActionEvent: one recorded occurrence of an action (registro de ação).

pontuacao_total is a snapshot: quantidade * ActionType.pontuacao at the
moment the event was recorded. Catalog edits never rewrite it; the
ranking engine sums this column and never joins back to acoes.pontuacao.
"""
from datetime import datetime, date
from decimal import Decimal
from sqlalchemy import (
    Integer, Text, Numeric, DateTime, Date, ForeignKey, CheckConstraint, Index, func,
)
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import Base


class ActionEvent(Base):
    __tablename__ = "registro_acoes"
    __table_args__ = (
        CheckConstraint("quantidade > 0", name="ck_registro_acoes_quantidade_positive"),
        Index("ix_registro_acoes_incorporadora_data", "incorporadora_id", "data_acao"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    incorporadora_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("incorporadoras.id", ondelete="CASCADE"), nullable=False
    )
    empreendimento_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("empreendimentos.id", ondelete="CASCADE"),
        nullable=False, index=True,
    )
    imobiliaria_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("imobiliarias.id", ondelete="CASCADE"),
        nullable=False, index=True,
    )
    corretor_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("corretores.id", ondelete="CASCADE"), nullable=False
    )
    # RESTRICT: catalog entries referenced by events can only be deactivated
    acao_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("acoes.id", ondelete="RESTRICT"), nullable=False, index=True
    )
    data_acao: Mapped[date] = mapped_column(Date, nullable=False, index=True)
    quantidade: Mapped[int] = mapped_column(Integer, nullable=False)
    pontuacao_total: Mapped[int] = mapped_column(Integer, nullable=False)
    vgv: Mapped[Decimal] = mapped_column(
        Numeric(12, 2), nullable=False, default=Decimal("0"),
        comment="Sales value attached to the event; not used for scoring",
    )
    anotacoes: Mapped[str | None] = mapped_column(Text, nullable=True)
    criado_em: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
