"""Create identity tables.

Creates the schema for users, user groups, roles, their join tables,
pending deletions and the append-only domain event log:
- Optimistic locking (version) and audit columns on every aggregate table
- Unique natural keys (email, username, external_id, group name, role code)

Revision ID: 001
Revises: None
Create Date: 2026-10-17
"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _aggregate_columns() -> list[sa.Column]:
    return [
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("version", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("created_by", sa.Uuid(), nullable=True),
        sa.Column("last_modified_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("last_modified_by", sa.Uuid(), nullable=True),
    ]


def upgrade() -> None:
    """Upgrade database schema."""
    # ====================================
    # AGGREGATE TABLES
    # ====================================

    op.create_table(
        "users",
        *_aggregate_columns(),
        sa.Column("email", sa.String(320), nullable=False, unique=True),
        sa.Column("external_id", sa.String(128), nullable=False, unique=True),
        sa.Column("username", sa.String(20), nullable=True, unique=True),
        sa.Column("sign_in_type", sa.String(20), nullable=False),
        sa.Column("display_name", sa.String(255), nullable=True),
        sa.Column("status", sa.String(20), nullable=True),
    )
    op.create_index("ix_users_status", "users", ["status"])
    op.create_index("ix_users_status_created", "users", ["status", "created_at"])

    op.create_table(
        "user_groups",
        *_aggregate_columns(),
        sa.Column("name", sa.String(255), nullable=False, unique=True),
        sa.Column("description", sa.String(1000), nullable=True),
    )

    op.create_table(
        "roles",
        *_aggregate_columns(),
        sa.Column("code", sa.String(64), nullable=False, unique=True),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("description", sa.String(1000), nullable=True),
    )

    # ====================================
    # JOIN / SIDE TABLES
    # ====================================

    op.create_table(
        "user_group_roles",
        sa.Column(
            "user_group_id",
            sa.Uuid(),
            sa.ForeignKey("user_groups.id", ondelete="CASCADE"),
            primary_key=True,
        ),
        sa.Column(
            "role_id", sa.Uuid(), sa.ForeignKey("roles.id", ondelete="CASCADE"), primary_key=True
        ),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index("ix_user_group_roles_role_id", "user_group_roles", ["role_id"])

    op.create_table(
        "user_group_users",
        sa.Column(
            "user_group_id",
            sa.Uuid(),
            sa.ForeignKey("user_groups.id", ondelete="CASCADE"),
            primary_key=True,
        ),
        sa.Column(
            "user_id", sa.Uuid(), sa.ForeignKey("users.id", ondelete="CASCADE"), primary_key=True
        ),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index("ix_user_group_users_user_id", "user_group_users", ["user_id"])

    op.create_table(
        "users_pending_deletion",
        sa.Column(
            "user_id", sa.Uuid(), sa.ForeignKey("users.id", ondelete="CASCADE"), primary_key=True
        ),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
    )

    # ====================================
    # DOMAIN EVENTS (append-only)
    # ====================================

    op.create_table(
        "domain_events",
        sa.Column("sequence", sa.BigInteger(), primary_key=True, autoincrement=True),
        sa.Column("event_id", sa.Uuid(), nullable=False, unique=True),
        sa.Column("aggregate_id", sa.Uuid(), nullable=False),
        sa.Column("aggregate_name", sa.String(64), nullable=False),
        sa.Column("event_type", sa.String(64), nullable=False),
        sa.Column("data", sa.JSON(), nullable=False),
        sa.Column("occurred_at", sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index(
        "ix_domain_events_aggregate",
        "domain_events",
        ["aggregate_name", "aggregate_id", "sequence"],
    )


def downgrade() -> None:
    """Downgrade database schema."""
    op.drop_index("ix_domain_events_aggregate", table_name="domain_events")
    op.drop_table("domain_events")
    op.drop_table("users_pending_deletion")
    op.drop_index("ix_user_group_users_user_id", table_name="user_group_users")
    op.drop_table("user_group_users")
    op.drop_index("ix_user_group_roles_role_id", table_name="user_group_roles")
    op.drop_table("user_group_roles")
    op.drop_table("roles")
    op.drop_table("user_groups")
    op.drop_index("ix_users_status_created", table_name="users")
    op.drop_index("ix_users_status", table_name="users")
    op.drop_table("users")
