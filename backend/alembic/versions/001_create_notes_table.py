"""Create notes table

Revision ID: 001
Revises: None
Create Date: 2026-10-19 00:00:00.000000+00:00

What:  Creates the `notes` table holding every user's notes.
How:   PostgreSQL UUID primary key, TIMESTAMP WITH TIME ZONE timestamps and a
       composite (user_id, created_at DESC) index for the per-user listing.

Rollback: downgrade() drops the table entirely (destructive — all notes lost).
"""

from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers
revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create the notes table with all columns, constraints, and indexes."""
    op.create_table(
        "notes",

        sa.Column(
            "id",
            postgresql.UUID(as_uuid=True),
            server_default=sa.text("gen_random_uuid()"),
            nullable=False,
            comment="Unique note identifier",
        ),

        # Owner; filtered on by every query
        sa.Column(
            "user_id",
            sa.String(255),
            nullable=False,
            comment="Identity id of the owner, as reported by the identity provider",
        ),

        sa.Column("title", sa.Text(), nullable=False),
        sa.Column("content", sa.Text(), nullable=False),

        sa.Column(
            "created_at",
            sa.TIMESTAMP(timezone=True),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=False,
            comment="When this note was created (UTC)",
        ),
        sa.Column(
            "updated_at",
            sa.TIMESTAMP(timezone=True),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=False,
            comment="When this note was last written (UTC)",
        ),

        sa.PrimaryKeyConstraint("id"),
    )

    # Serves: WHERE user_id = :owner ORDER BY created_at DESC
    op.create_index(
        "idx_notes_user_created_at",
        "notes",
        ["user_id", sa.text("created_at DESC")],
    )


def downgrade() -> None:
    """Drop the notes table entirely. Destructive: all note data is lost."""
    op.drop_index("idx_notes_user_created_at", table_name="notes")
    op.drop_table("notes")
