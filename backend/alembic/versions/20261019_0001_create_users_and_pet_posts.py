"""Create users and pet_posts tables."""

from collections.abc import Sequence

from alembic import op
import sqlalchemy as sa

revision: str = "20261019_0001"
down_revision: str | None = None
branch_labels: Sequence[str] | None = None
depends_on: Sequence[str] | None = None

TIMESTAMP_DEFAULT = sa.text("CURRENT_TIMESTAMP")


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("username", sa.String(length=30), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("password_hash", sa.String(length=255), nullable=False),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=TIMESTAMP_DEFAULT,
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=TIMESTAMP_DEFAULT,
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_users_username", "users", ["username"], unique=True)
    op.create_index("ix_users_email", "users", ["email"], unique=True)

    op.create_table(
        "pet_posts",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("title", sa.String(length=200), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("pet_type", sa.String(length=16), nullable=False),
        sa.Column("breed", sa.String(length=100), nullable=False),
        sa.Column("image_url", sa.String(length=255), nullable=True),
        sa.Column("author_id", sa.String(length=36), nullable=False),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=TIMESTAMP_DEFAULT,
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=TIMESTAMP_DEFAULT,
            nullable=False,
        ),
        sa.CheckConstraint(
            "pet_type IN ('Dog', 'Cat', 'Bird', 'Other')",
            name="ck_pet_posts_pet_type",
        ),
        sa.ForeignKeyConstraint(["author_id"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        "ix_pet_posts_created_at_id",
        "pet_posts",
        ["created_at", "id"],
        unique=False,
    )
    op.create_index(
        "ix_pet_posts_author_created_at",
        "pet_posts",
        ["author_id", "created_at"],
        unique=False,
    )
    op.create_index(
        "ix_pet_posts_pet_type_created_at",
        "pet_posts",
        ["pet_type", "created_at"],
        unique=False,
    )


def downgrade() -> None:
    op.drop_index("ix_pet_posts_pet_type_created_at", table_name="pet_posts")
    op.drop_index("ix_pet_posts_author_created_at", table_name="pet_posts")
    op.drop_index("ix_pet_posts_created_at_id", table_name="pet_posts")
    op.drop_table("pet_posts")
    op.drop_index("ix_users_email", table_name="users")
    op.drop_index("ix_users_username", table_name="users")
    op.drop_table("users")
