"""create game_result

Revision ID: 1a2b3c4d5e6f
Revises:
Create Date: 2026-10-19 00:00:00
"""

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '1a2b3c4d5e6f'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        'game_result',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('session_code', sa.String(length=4), nullable=False),
        sa.Column('score', sa.Integer(), nullable=False),
        sa.Column('total_rounds', sa.Integer(), nullable=False),
        sa.Column('correct_answers', sa.Integer(), nullable=False),
        sa.Column('round_history', sa.Text(), nullable=True),
        sa.Column('finished_at', sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )
    with op.batch_alter_table('game_result') as batch_op:
        batch_op.create_index(batch_op.f('ix_game_result_session_code'), ['session_code'], unique=False)


def downgrade():
    with op.batch_alter_table('game_result') as batch_op:
        batch_op.drop_index(batch_op.f('ix_game_result_session_code'))
    op.drop_table('game_result')
