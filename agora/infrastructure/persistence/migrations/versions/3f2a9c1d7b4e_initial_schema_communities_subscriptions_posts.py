"""initial_schema_communities_subscriptions_posts

Revision ID: 3f2a9c1d7b4e
Revises:
Create Date: 2026-10-19 10:12:41.208113

"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision: str = "3f2a9c1d7b4e"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
    ]


def upgrade() -> None:
    """Upgrade schema - community, app_user, subscription, post, reaction."""

    op.create_table(
        "community",
        sa.Column("id", sa.String(36), nullable=False),
        sa.Column("owner_id", sa.String(36), nullable=False),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("is_private", sa.Boolean(), nullable=False, server_default="false"),
        sa.Column("icon_url", sa.Text(), nullable=True),
        sa.Column("banner_url", sa.Text(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_community_owner_id", "community", ["owner_id"])

    op.create_table(
        "app_user",
        sa.Column("user_id", sa.String(36), nullable=False),
        sa.Column("profile_id", sa.String(36), nullable=False),
        sa.Column("username", sa.String(30), nullable=False),
        sa.Column("profile_picture_url", sa.Text(), nullable=True),
        sa.Column("banner_url", sa.Text(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("user_id"),
        sa.UniqueConstraint("profile_id"),
        sa.UniqueConstraint("username"),
    )

    op.create_table(
        "subscription",
        sa.Column("id", sa.String(24), nullable=False),
        sa.Column("user_id", sa.String(36), nullable=False),
        sa.Column("community_id", sa.String(36), nullable=False),
        sa.Column("role", sa.String(16), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint(
            "user_id", "community_id", name="uq_subscription_user_community"
        ),
        sa.CheckConstraint(
            "role IN ('member', 'admin', 'owner')", name="ck_subscription_role"
        ),
    )
    op.create_index("ix_subscription_user_id", "subscription", ["user_id"])
    op.create_index("ix_subscription_community_id", "subscription", ["community_id"])

    op.create_table(
        "post",
        sa.Column("id", sa.String(24), nullable=False),
        sa.Column("community_id", sa.String(36), nullable=False),
        sa.Column("author_id", sa.String(36), nullable=False),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("kind", sa.String(16), nullable=False),
        sa.Column("images", sa.JSON(), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_post_author_id", "post", ["author_id"])
    op.create_index("ix_post_community_created", "post", ["community_id", "created_at"])

    op.create_table(
        "reaction",
        sa.Column("id", sa.String(24), nullable=False),
        sa.Column("post_id", sa.String(24), nullable=False),
        sa.Column("user_id", sa.String(36), nullable=False),
        sa.Column("type", sa.String(16), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("post_id", "user_id", name="uq_reaction_post_user"),
    )
    op.create_index("ix_reaction_post_id", "reaction", ["post_id"])


def downgrade() -> None:
    """Downgrade schema - drop all tables."""
    op.drop_index("ix_reaction_post_id", table_name="reaction")
    op.drop_table("reaction")
    op.drop_index("ix_post_community_created", table_name="post")
    op.drop_index("ix_post_author_id", table_name="post")
    op.drop_table("post")
    op.drop_index("ix_subscription_community_id", table_name="subscription")
    op.drop_index("ix_subscription_user_id", table_name="subscription")
    op.drop_table("subscription")
    op.drop_table("app_user")
    op.drop_index("ix_community_owner_id", table_name="community")
    op.drop_table("community")
