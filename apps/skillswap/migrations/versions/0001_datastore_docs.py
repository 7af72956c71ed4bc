"""create datastore_docs table

Revision ID: 0001_datastore_docs
Revises:
Create Date: 2026-10-19
"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision: str = "0001_datastore_docs"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "datastore_docs",
        sa.Column("id", sa.Uuid(), primary_key=True, nullable=False),
        sa.Column("collection", sa.Text(), nullable=False),
        sa.Column("doc_id", sa.String(length=96), nullable=False),
        sa.Column("data", sa.JSON(), nullable=False, server_default=sa.text("'{}'")),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.func.now(),
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.func.now(),
        ),
        sa.UniqueConstraint(
            "collection", "doc_id", name="uq_datastore_docs_collection_doc_id"
        ),
    )
    op.create_index("ix_datastore_docs_collection", "datastore_docs", ["collection"])


def downgrade() -> None:
    op.drop_index("ix_datastore_docs_collection", table_name="datastore_docs")
    op.drop_table("datastore_docs")
