"""seed default action catalog

Revision ID: 0002
Revises: 0001
Create Date: 2025-03-01

Inserts the three starter action types. Point values can be edited
later through PATCH /acoes/{id}; recorded events keep their snapshot.
"""
from alembic import op

revision = "0002"
down_revision = "0001"
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.execute("""
        INSERT INTO acoes (nome, pontuacao, ativa)
        VALUES
          ('Visita com cliente', 10,  true),
          ('Proposta enviada',   20,  true),
          ('Venda concretizada', 100, true)
    """)


def downgrade() -> None:
    op.execute("""
        DELETE FROM acoes
        WHERE nome IN ('Visita com cliente', 'Proposta enviada', 'Venda concretizada')
          AND id NOT IN (SELECT DISTINCT acao_id FROM registro_acoes)
    """)
