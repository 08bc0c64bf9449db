"""create_companies_and_jobs

Creates the companies and jobs tables.

Revision ID: 3f1c2a7d9b10
Revises:
Create Date: 2026-10-18 09:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '3f1c2a7d9b10'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create companies, then jobs referencing them."""
    op.create_table(
        'companies',
        sa.Column('handle', sa.String(25), primary_key=True),
        sa.Column('name', sa.Text(), nullable=False, unique=True),
        sa.Column('description', sa.Text(), nullable=False, server_default=''),
        sa.Column('num_employees', sa.Integer(), sa.CheckConstraint('num_employees >= 0'), nullable=True),
        sa.Column('logo_url', sa.Text(), nullable=True),
    )

    op.create_table(
        'jobs',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('title', sa.Text(), nullable=False),
        sa.Column('salary', sa.Integer(), sa.CheckConstraint('salary >= 0'), nullable=True),
        sa.Column('equity', sa.Numeric(), sa.CheckConstraint('equity <= 1.0'), nullable=True),
        sa.Column(
            'company_handle',
            sa.String(25),
            sa.ForeignKey('companies.handle', ondelete='CASCADE'),
            nullable=False,
        ),
    )
    op.create_index('ix_jobs_id', 'jobs', ['id'])
    op.create_index('ix_jobs_title', 'jobs', ['title'])
    op.create_index('ix_jobs_company_handle', 'jobs', ['company_handle'])


def downgrade() -> None:
    """Drop jobs before the companies they reference."""
    op.drop_index('ix_jobs_company_handle', table_name='jobs')
    op.drop_index('ix_jobs_title', table_name='jobs')
    op.drop_index('ix_jobs_id', table_name='jobs')
    op.drop_table('jobs')
    op.drop_table('companies')
