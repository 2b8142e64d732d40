"""create people table

Revision ID: 001_people
Revises: 
Create Date: 2026-10-18

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
import sqlmodel


# revision identifiers
revision: str = '001_people'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        'people',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('first_name', sqlmodel.sql.sqltypes.AutoString(length=100), nullable=False),
        sa.Column('last_name', sqlmodel.sql.sqltypes.AutoString(length=100), nullable=False),
        sa.Column('email', sqlmodel.sql.sqltypes.AutoString(length=255), nullable=False),
        sa.Column('birth_date', sa.Date(), nullable=False),
        sa.Column('document', sqlmodel.sql.sqltypes.AutoString(length=20), nullable=False),
        sa.Column('active', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint('id'),
    )

    # the unique indexes are the final arbiter for duplicate email/document
    op.create_index('ix_people_email', 'people', ['email'], unique=True)
    op.create_index('ix_people_document', 'people', ['document'], unique=True)
    op.create_index('ix_people_active', 'people', ['active'])


def downgrade() -> None:
    op.drop_index('ix_people_active', 'people')
    op.drop_index('ix_people_document', 'people')
    op.drop_index('ix_people_email', 'people')
    op.drop_table('people')
