"""Initial migration: shared cards and paraphrases

Revision ID: initial
Revises:
Create Date: 2026-10-19 00:00:00.000000

"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = 'initial'
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        'shared_cards',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('front', sa.String(), nullable=False),
        sa.Column('back', sa.String(), nullable=False),
        sa.Column('translation', sa.String(), nullable=False, server_default=''),
        sa.Column('example', sa.String(), nullable=False, server_default=''),
        sa.Column('unit', sa.String(), nullable=False, server_default='General'),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_shared_cards_unit'), 'shared_cards', ['unit'], unique=False)

    # Variations are stored as a JSON array of strings
    op.create_table(
        'paraphrases',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('original', sa.String(), nullable=False),
        sa.Column('variations', sa.JSON(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint('id')
    )


def downgrade() -> None:
    op.drop_table('paraphrases')
    op.drop_index(op.f('ix_shared_cards_unit'), table_name='shared_cards')
    op.drop_table('shared_cards')
