"""Create assessments table

Revision ID: 001_create_assessments
Revises: 
Create Date: 2026-10-19 00:00:00.000000

"""
from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision = '001_create_assessments'
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    """Create assessments table."""
    json_list = sa.JSON().with_variant(postgresql.JSONB(), 'postgresql')
    op.create_table(
        'assessments',
        sa.Column('id', sa.Integer(), nullable=False, autoincrement=True),
        sa.Column('name', sa.Text(), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('role', sa.String(length=20), nullable=False),
        sa.Column('experience_level', sa.String(length=20), nullable=False),
        sa.Column('technical_self_rating', sa.Integer(), nullable=False),
        sa.Column('technical_mcq_answer', sa.Text(), nullable=False),
        sa.Column('technical_mcq_correct', sa.Boolean(), nullable=False),
        sa.Column('has_resume', sa.Boolean(), nullable=False),
        sa.Column('resume_text', sa.Text(), nullable=True),
        sa.Column('communication_rating', sa.Integer(), nullable=False),
        sa.Column('has_portfolio', sa.Boolean(), nullable=False),
        sa.Column('portfolio_url', sa.Text(), nullable=True),
        sa.Column('score_technical', sa.Integer(), nullable=False, comment='out of 40'),
        sa.Column('score_resume', sa.Integer(), nullable=False, comment='out of 20'),
        sa.Column('score_communication', sa.Integer(), nullable=False, comment='out of 20'),
        sa.Column('score_portfolio', sa.Integer(), nullable=False, comment='out of 20'),
        sa.Column('total_score', sa.Integer(), nullable=False, comment='0-100'),
        sa.Column('readiness_level', sa.String(length=32), nullable=False),
        sa.Column('strengths', json_list, nullable=False),
        sa.Column('gaps', json_list, nullable=False),
        sa.Column('improvement_plan', json_list, nullable=False),
        sa.Column('ai_feedback', sa.Text(), nullable=False),
        sa.Column('estimated_days', sa.Integer(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_assessments_readiness_level', 'assessments', ['readiness_level'])
    op.create_index('idx_assessments_role_total', 'assessments', ['role', 'total_score'])


def downgrade() -> None:
    """Drop assessments table."""
    op.drop_index('idx_assessments_role_total', table_name='assessments')
    op.drop_index('ix_assessments_readiness_level', table_name='assessments')
    op.drop_table('assessments')
