"""initial schema

Revision ID: 0001
Revises:
Create Date: 2025-03-01 00:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "0001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # --- incorporadoras ---
    op.create_table(
        "incorporadoras",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("razao_social", sa.String(255), nullable=False),
        sa.Column("cnpj", sa.String(20), nullable=False),
        sa.Column("nome_exibicao", sa.String(255), nullable=False),
        sa.Column("cidade", sa.String(100), nullable=True),
        sa.Column("uf", sa.String(2), nullable=True),
        sa.Column("email", sa.String(255), nullable=True),
        sa.Column("criado_em", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("cnpj"),
    )
    op.create_index("ix_incorporadoras_id", "incorporadoras", ["id"])

    # --- empreendimentos ---
    op.create_table(
        "empreendimentos",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("incorporadora_id", sa.Integer(), nullable=False),
        sa.Column("nome", sa.String(255), nullable=False),
        sa.Column("cidade", sa.String(100), nullable=True),
        sa.Column("uf", sa.String(2), nullable=True),
        sa.Column("criado_em", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["incorporadora_id"], ["incorporadoras.id"], ondelete="CASCADE"),
    )
    op.create_index("ix_empreendimentos_id", "empreendimentos", ["id"])
    op.create_index("ix_empreendimentos_incorporadora_id", "empreendimentos", ["incorporadora_id"])

    # --- imobiliarias ---
    op.create_table(
        "imobiliarias",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("nome", sa.String(255), nullable=False),
        sa.Column("cidade", sa.String(100), nullable=True),
        sa.Column("uf", sa.String(2), nullable=True),
        sa.Column("criado_em", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_imobiliarias_id", "imobiliarias", ["id"])

    # --- corretores ---
    op.create_table(
        "corretores",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("nome", sa.String(255), nullable=False),
        sa.Column("sobrenome", sa.String(255), nullable=False),
        sa.Column("criado_em", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_corretores_id", "corretores", ["id"])

    # --- acoes ---
    op.create_table(
        "acoes",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("nome", sa.String(255), nullable=False),
        sa.Column("pontuacao", sa.Integer(), nullable=False),
        sa.Column("ativa", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("criado_em", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("nome"),
        sa.CheckConstraint("pontuacao > 0", name="ck_acoes_pontuacao_positive"),
    )
    op.create_index("ix_acoes_id", "acoes", ["id"])

    # --- registro_acoes ---
    op.create_table(
        "registro_acoes",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("incorporadora_id", sa.Integer(), nullable=False),
        sa.Column("empreendimento_id", sa.Integer(), nullable=False),
        sa.Column("imobiliaria_id", sa.Integer(), nullable=False),
        sa.Column("corretor_id", sa.Integer(), nullable=False),
        sa.Column("acao_id", sa.Integer(), nullable=False),
        sa.Column("data_acao", sa.Date(), nullable=False),
        sa.Column("quantidade", sa.Integer(), nullable=False),
        sa.Column("pontuacao_total", sa.Integer(), nullable=False),
        sa.Column("vgv", sa.Numeric(12, 2), nullable=False, server_default="0"),
        sa.Column("anotacoes", sa.Text(), nullable=True),
        sa.Column("criado_em", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["incorporadora_id"], ["incorporadoras.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["empreendimento_id"], ["empreendimentos.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["imobiliaria_id"], ["imobiliarias.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["corretor_id"], ["corretores.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["acao_id"], ["acoes.id"], ondelete="RESTRICT"),
        sa.CheckConstraint("quantidade > 0", name="ck_registro_acoes_quantidade_positive"),
    )
    op.create_index("ix_registro_acoes_id", "registro_acoes", ["id"])
    op.create_index("ix_registro_acoes_data_acao", "registro_acoes", ["data_acao"])
    op.create_index("ix_registro_acoes_empreendimento_id", "registro_acoes", ["empreendimento_id"])
    op.create_index("ix_registro_acoes_imobiliaria_id", "registro_acoes", ["imobiliaria_id"])
    op.create_index("ix_registro_acoes_acao_id", "registro_acoes", ["acao_id"])
    op.create_index(
        "ix_registro_acoes_incorporadora_data",
        "registro_acoes",
        ["incorporadora_id", "data_acao"],
    )


def downgrade() -> None:
    op.drop_table("registro_acoes")
    op.drop_table("acoes")
    op.drop_table("corretores")
    op.drop_table("imobiliarias")
    op.drop_table("empreendimentos")
    op.drop_table("incorporadoras")
