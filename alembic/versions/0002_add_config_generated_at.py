"""add generated_at to project_configs

Revision ID: 0002
Revises: 0001
Create Date: 2026-10-19
"""

from alembic import op
import sqlalchemy as sa

revision = "0002"
down_revision = "0001"
branch_labels = None
depends_on = None


def upgrade():
    op.add_column("project_configs", sa.Column("generated_at", sa.DateTime(), nullable=True))


def downgrade():
    with op.batch_alter_table("project_configs") as batch_op:
        batch_op.drop_column("generated_at")
