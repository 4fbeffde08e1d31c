"""add tokens table

Revision ID: 5b2e81c07d4a
Revises:
Create Date: 2026-10-19 10:12:40.118203
"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "5b2e81c07d4a"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "tokens",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("document_id", sa.String(length=64), nullable=False),

        sa.Column("email", sa.String(length=320), nullable=False),
        sa.Column("device_id", sa.String(length=200), nullable=False, server_default=""),

        sa.Column("expires_at", sa.Integer(), nullable=False),
        sa.Column("is_radio_off", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("is_trial", sa.Boolean(), nullable=False, server_default=sa.false()),

        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    )

    op.create_index("ix_tokens_document_id", "tokens", ["document_id"], unique=True)
    op.create_index("ix_tokens_email", "tokens", ["email"])


def downgrade() -> None:
    op.drop_index("ix_tokens_email", table_name="tokens")
    op.drop_index("ix_tokens_document_id", table_name="tokens")
    op.drop_table("tokens")
