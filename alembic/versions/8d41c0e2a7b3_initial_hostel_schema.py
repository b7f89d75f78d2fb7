"""initial hostel schema

Revision ID: 8d41c0e2a7b3
Revises:
Create Date: 2026-10-19 09:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "8d41c0e2a7b3"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _enum(name: str, *values: str) -> sa.Enum:
    return sa.Enum(*values, name=name, native_enum=False)


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("email", sa.String(), nullable=False),
        sa.Column("hashed_password", sa.String(), nullable=False),
        sa.Column("role", _enum("user_role", "STUDENT", "MANAGEMENT"), nullable=False),
        sa.Column("hostel", sa.String(), nullable=True),
        sa.Column("block", sa.String(), nullable=True),
        sa.Column("room", sa.String(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_users_id", "users", ["id"], unique=False)
    op.create_index("ix_users_email", "users", ["email"], unique=True)

    op.create_table(
        "issues",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("title", sa.String(), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("category", _enum(
            "issue_category",
            "PLUMBING", "ELECTRICAL", "CLEANLINESS", "INTERNET", "FURNITURE", "SECURITY", "OTHER",
        ), nullable=False),
        sa.Column("priority", _enum("issue_priority", "LOW", "MEDIUM", "HIGH", "EMERGENCY"), nullable=False),
        sa.Column("status", _enum(
            "issue_status", "REPORTED", "ASSIGNED", "IN_PROGRESS", "RESOLVED", "CLOSED",
        ), nullable=False),
        sa.Column("visibility", _enum("issue_visibility", "PUBLIC", "PRIVATE"), nullable=False),
        sa.Column("hostel", sa.String(), nullable=False),
        sa.Column("block", sa.String(), nullable=False),
        sa.Column("room", sa.String(), nullable=False),
        sa.Column("reporter_id", sa.Integer(), nullable=False),
        sa.Column("assigned_to", sa.String(), nullable=True),
        sa.Column("media_urls", sa.JSON(), nullable=False),
        sa.Column("reported_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("assigned_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("in_progress_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("resolved_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("closed_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.ForeignKeyConstraint(["reporter_id"], ["users.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_issues_id", "issues", ["id"], unique=False)
    op.create_index("ix_issues_category", "issues", ["category"], unique=False)
    op.create_index("ix_issues_priority", "issues", ["priority"], unique=False)
    op.create_index("ix_issues_status", "issues", ["status"], unique=False)
    op.create_index("ix_issues_hostel", "issues", ["hostel"], unique=False)
    op.create_index("ix_issues_reporter_id", "issues", ["reporter_id"], unique=False)
    op.create_index("ix_issues_reported_at", "issues", ["reported_at"], unique=False)

    op.create_table(
        "comments",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("issue_id", sa.Integer(), nullable=False),
        sa.Column("user_id", sa.Integer(), nullable=False),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(["issue_id"], ["issues.id"]),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_comments_id", "comments", ["id"], unique=False)
    op.create_index("ix_comments_issue_id", "comments", ["issue_id"], unique=False)
    op.create_index("ix_comments_user_id", "comments", ["user_id"], unique=False)
    op.create_index("ix_comments_created_at", "comments", ["created_at"], unique=False)

    op.create_table(
        "reactions",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("issue_id", sa.Integer(), nullable=False),
        sa.Column("user_id", sa.Integer(), nullable=False),
        sa.Column("type", _enum("reaction_type", "UPVOTE", "LIKE", "URGENT", "ME_TOO"), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.ForeignKeyConstraint(["issue_id"], ["issues.id"]),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"]),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("issue_id", "user_id", name="uq_reactions_issue_user"),
    )
    op.create_index("ix_reactions_id", "reactions", ["id"], unique=False)
    op.create_index("ix_reactions_issue_id", "reactions", ["issue_id"], unique=False)
    op.create_index("ix_reactions_user_id", "reactions", ["user_id"], unique=False)

    op.create_table(
        "announcements",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("title", sa.String(), nullable=False),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("type", _enum(
            "announcement_type", "CLEANING", "PEST_CONTROL", "DOWNTIME", "MAINTENANCE", "GENERAL",
        ), nullable=False),
        sa.Column("target_hostels", sa.JSON(), nullable=False),
        sa.Column("target_blocks", sa.JSON(), nullable=False),
        sa.Column("target_roles", sa.JSON(), nullable=False),
        sa.Column("author_id", sa.Integer(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(["author_id"], ["users.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_announcements_id", "announcements", ["id"], unique=False)
    op.create_index("ix_announcements_type", "announcements", ["type"], unique=False)
    op.create_index("ix_announcements_author_id", "announcements", ["author_id"], unique=False)
    op.create_index("ix_announcements_created_at", "announcements", ["created_at"], unique=False)

    op.create_table(
        "lost_found",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("type", _enum("lost_found_type", "LOST", "FOUND"), nullable=False),
        sa.Column("item_name", sa.String(), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("location", sa.String(), nullable=False),
        sa.Column("date", sa.DateTime(timezone=True), nullable=False),
        sa.Column("contact_info", sa.String(), nullable=True),
        sa.Column("image_urls", sa.JSON(), nullable=False),
        sa.Column("status", _enum("lost_found_status", "ACTIVE", "CLAIMED", "CLOSED"), nullable=False),
        sa.Column("claim_status", _enum("claim_status", "PENDING", "APPROVED", "REJECTED"), nullable=True),
        sa.Column("reporter_id", sa.Integer(), nullable=False),
        sa.Column("claimed_by", sa.Integer(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.ForeignKeyConstraint(["reporter_id"], ["users.id"]),
        sa.ForeignKeyConstraint(["claimed_by"], ["users.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_lost_found_id", "lost_found", ["id"], unique=False)
    op.create_index("ix_lost_found_type", "lost_found", ["type"], unique=False)
    op.create_index("ix_lost_found_status", "lost_found", ["status"], unique=False)
    op.create_index("ix_lost_found_reporter_id", "lost_found", ["reporter_id"], unique=False)
    op.create_index("ix_lost_found_created_at", "lost_found", ["created_at"], unique=False)

    op.create_table(
        "audit_logs",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("actor_id", sa.String(), nullable=False),
        sa.Column("actor_email", sa.String(), nullable=True),
        sa.Column("actor_role", sa.String(), nullable=True),
        sa.Column("action", sa.String(), nullable=False),
        sa.Column("entity_type", sa.String(), nullable=False),
        sa.Column("entity_id", sa.String(), nullable=False),
        sa.Column("source", sa.String(), nullable=True),
        sa.Column("status", sa.String(), nullable=True),
        sa.Column("due_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("risk_level", sa.String(), nullable=False, server_default="low"),
        sa.Column("description", sa.String(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_audit_logs_id", "audit_logs", ["id"], unique=False)
    op.create_index("ix_audit_logs_actor_id", "audit_logs", ["actor_id"], unique=False)
    op.create_index("ix_audit_logs_actor_email", "audit_logs", ["actor_email"], unique=False)
    op.create_index("ix_audit_logs_action", "audit_logs", ["action"], unique=False)
    op.create_index("ix_audit_logs_entity_type", "audit_logs", ["entity_type"], unique=False)
    op.create_index("ix_audit_logs_entity_id", "audit_logs", ["entity_id"], unique=False)
    op.create_index("ix_audit_logs_source", "audit_logs", ["source"], unique=False)
    op.create_index("ix_audit_logs_status", "audit_logs", ["status"], unique=False)
    op.create_index("ix_audit_logs_due_at", "audit_logs", ["due_at"], unique=False)
    op.create_index("ix_audit_logs_risk_level", "audit_logs", ["risk_level"], unique=False)


def downgrade() -> None:
    """Downgrade schema."""
    for name in ("risk_level", "due_at", "status", "source", "entity_id", "entity_type",
                 "action", "actor_email", "actor_id", "id"):
        op.drop_index(f"ix_audit_logs_{name}", table_name="audit_logs")
    op.drop_table("audit_logs")

    for name in ("created_at", "reporter_id", "status", "type", "id"):
        op.drop_index(f"ix_lost_found_{name}", table_name="lost_found")
    op.drop_table("lost_found")

    for name in ("created_at", "author_id", "type", "id"):
        op.drop_index(f"ix_announcements_{name}", table_name="announcements")
    op.drop_table("announcements")

    for name in ("user_id", "issue_id", "id"):
        op.drop_index(f"ix_reactions_{name}", table_name="reactions")
    op.drop_table("reactions")

    for name in ("created_at", "user_id", "issue_id", "id"):
        op.drop_index(f"ix_comments_{name}", table_name="comments")
    op.drop_table("comments")

    for name in ("reported_at", "reporter_id", "hostel", "status", "priority", "category", "id"):
        op.drop_index(f"ix_issues_{name}", table_name="issues")
    op.drop_table("issues")

    op.drop_index("ix_users_email", table_name="users")
    op.drop_index("ix_users_id", table_name="users")
    op.drop_table("users")
