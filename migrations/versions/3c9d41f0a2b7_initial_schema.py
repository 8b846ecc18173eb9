"""initial_schema

Create the SkillSwap schema:
- Skills (catalog, maintained by the taxonomy service)
- User skills (teach/learn declarations with proficiency)
- Matches (learner/teacher pairing per skill)
- Messages (ordered conversation log per match)
- Notifications (per-user notices with JSON payload)

Users live with the identity provider; user ids are stored without a
foreign key.

Revision ID: 3c9d41f0a2b7
Revises:
Create Date: 2025-11-04 10:12:48.532190

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = "3c9d41f0a2b7"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _create_enum(name: str, values: Sequence[str]) -> None:
    labels = ", ".join(f"'{value}'" for value in values)
    op.execute(f"""
        DO $$ BEGIN
            CREATE TYPE {name} AS ENUM ({labels});
        EXCEPTION
            WHEN duplicate_object THEN null;
        END $$;
    """)


def upgrade() -> None:
    """Upgrade schema."""
    # gen_random_uuid() is built in from Postgres 13
    _create_enum("skill_role", ["teach", "learn"])
    _create_enum("match_status", ["pending", "accepted", "completed", "cancelled"])
    _create_enum("message_type", ["text", "file", "system"])
    _create_enum(
        "notification_type",
        [
            "match_request",
            "match_response",
            "match_completed",
            "match_cancelled",
            "new_message",
        ],
    )

    # ========================================================================
    # SKILLS table
    # ========================================================================
    op.create_table(
        "skills",
        sa.Column(
            "id", sa.UUID(), server_default=sa.text("gen_random_uuid()"), nullable=False
        ),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("category", sa.String(100), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("name", name="uq_skills_name"),
    )

    # ========================================================================
    # USER_SKILLS table
    # ========================================================================
    op.create_table(
        "user_skills",
        sa.Column(
            "id", sa.UUID(), server_default=sa.text("gen_random_uuid()"), nullable=False
        ),
        sa.Column("user_id", sa.UUID(), nullable=False),
        sa.Column("skill_id", sa.UUID(), nullable=False),
        sa.Column(
            "role",
            postgresql.ENUM("teach", "learn", name="skill_role", create_type=False),
            nullable=False,
        ),
        sa.Column("proficiency_level", sa.Integer(), nullable=False),
        sa.Column("note", sa.Text(), nullable=True),
        sa.Column(
            "created_at",
            sa.TIMESTAMP(timezone=True),
            server_default=sa.text("NOW()"),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["skill_id"], ["skills.id"], ondelete="CASCADE"),
        sa.UniqueConstraint("user_id", "skill_id", "role", name="uq_user_skill_role"),
        sa.CheckConstraint(
            "proficiency_level BETWEEN 1 AND 10", name="check_proficiency_level"
        ),
    )
    op.execute("""
        CREATE INDEX idx_user_skills_discovery
        ON user_skills (skill_id, role, proficiency_level DESC, created_at DESC)
    """)
    op.create_index("idx_user_skills_user_id", "user_skills", ["user_id"])

    # ========================================================================
    # MATCHES table
    # ========================================================================
    op.create_table(
        "matches",
        sa.Column(
            "id", sa.UUID(), server_default=sa.text("gen_random_uuid()"), nullable=False
        ),
        sa.Column("teacher_id", sa.UUID(), nullable=False),
        sa.Column("learner_id", sa.UUID(), nullable=False),
        sa.Column("skill_id", sa.UUID(), nullable=False),
        sa.Column(
            "status",
            postgresql.ENUM(
                "pending",
                "accepted",
                "completed",
                "cancelled",
                name="match_status",
                create_type=False,
            ),
            server_default="pending",
            nullable=False,
        ),
        sa.Column("message", sa.Text(), nullable=True),
        sa.Column(
            "created_at",
            sa.TIMESTAMP(timezone=True),
            server_default=sa.text("NOW()"),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.TIMESTAMP(timezone=True),
            server_default=sa.text("NOW()"),
            nullable=False,
        ),
        sa.Column("accepted_at", sa.TIMESTAMP(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["skill_id"], ["skills.id"]),
        sa.CheckConstraint("teacher_id <> learner_id", name="check_match_distinct_users"),
    )
    op.create_index(
        "uq_matches_pending_triple",
        "matches",
        ["teacher_id", "learner_id", "skill_id"],
        unique=True,
        postgresql_where=sa.text("status = 'pending'"),
    )
    op.create_index("idx_matches_teacher_id", "matches", ["teacher_id"])
    op.create_index("idx_matches_learner_id", "matches", ["learner_id"])
    op.create_index("idx_matches_created_at", "matches", ["created_at"])

    # ========================================================================
    # MESSAGES table
    # ========================================================================
    op.create_table(
        "messages",
        sa.Column(
            "id", sa.UUID(), server_default=sa.text("gen_random_uuid()"), nullable=False
        ),
        sa.Column("match_id", sa.UUID(), nullable=False),
        sa.Column("sender_id", sa.UUID(), nullable=False),
        sa.Column("body", sa.Text(), nullable=False),
        sa.Column(
            "type",
            postgresql.ENUM(
                "text", "file", "system", name="message_type", create_type=False
            ),
            server_default="text",
            nullable=False,
        ),
        sa.Column("file_url", sa.Text(), nullable=True),
        sa.Column("seq", sa.Integer(), nullable=False),
        sa.Column(
            "created_at",
            sa.TIMESTAMP(timezone=True),
            server_default=sa.text("NOW()"),
            nullable=False,
        ),
        sa.Column("read_at", sa.TIMESTAMP(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["match_id"], ["matches.id"], ondelete="CASCADE"),
        sa.UniqueConstraint("match_id", "seq", name="uq_messages_match_seq"),
    )
    op.create_index(
        "idx_messages_match_order", "messages", ["match_id", "created_at", "seq"]
    )
    op.create_index(
        "idx_messages_unread",
        "messages",
        ["match_id", "sender_id"],
        postgresql_where=sa.text("read_at IS NULL"),
    )

    # ========================================================================
    # NOTIFICATIONS table
    # ========================================================================
    op.create_table(
        "notifications",
        sa.Column(
            "id", sa.UUID(), server_default=sa.text("gen_random_uuid()"), nullable=False
        ),
        sa.Column("user_id", sa.UUID(), nullable=False),
        sa.Column(
            "type",
            postgresql.ENUM(
                "match_request",
                "match_response",
                "match_completed",
                "match_cancelled",
                "new_message",
                name="notification_type",
                create_type=False,
            ),
            nullable=False,
        ),
        sa.Column("title", sa.String(200), nullable=False),
        sa.Column("body", sa.Text(), nullable=False),
        sa.Column(
            "payload",
            postgresql.JSONB(),
            server_default=sa.text("'{}'::jsonb"),
            nullable=False,
        ),
        sa.Column("read", sa.Boolean(), server_default=sa.text("false"), nullable=False),
        sa.Column(
            "created_at",
            sa.TIMESTAMP(timezone=True),
            server_default=sa.text("NOW()"),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("id"),
    )
    op.execute("""
        CREATE INDEX idx_notifications_user_created
        ON notifications (user_id, created_at DESC)
    """)
    op.create_index(
        "idx_notifications_user_unread",
        "notifications",
        ["user_id"],
        postgresql_where=sa.text("read = false"),
    )


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_table("notifications")
    op.drop_table("messages")
    op.drop_table("matches")
    op.drop_table("user_skills")
    op.drop_table("skills")

    op.execute("DROP TYPE IF EXISTS notification_type")
    op.execute("DROP TYPE IF EXISTS message_type")
    op.execute("DROP TYPE IF EXISTS match_status")
    op.execute("DROP TYPE IF EXISTS skill_role")
