"""SQLAlchemy table definitions for SkillSwap.

They match the schema defined in Alembic migrations.
"""

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
    Enum,
    ForeignKey,
    Index,
    Integer,
    MetaData,
    String,
    Table,
    Text,
    UniqueConstraint,
    text,
)
from sqlalchemy.dialects import postgresql
from sqlalchemy.dialects.postgresql import TIMESTAMP, UUID

# Metadata object for all tables
metadata = MetaData()

# ============================================================================
# SKILLS TABLE (catalog, owned by the taxonomy service; read-only here)
# ============================================================================
skills_table = Table(
    "skills",
    metadata,
    Column("id", UUID, primary_key=True, server_default=text("gen_random_uuid()")),
    Column("name", String(100), nullable=False),
    Column("category", String(100), nullable=False),
    Column("description", Text, nullable=True),
    UniqueConstraint("name", name="uq_skills_name"),
)

# ============================================================================
# USER SKILLS TABLE (teach/learn declarations)
# ============================================================================
user_skills_table = Table(
    "user_skills",
    metadata,
    Column("id", UUID, primary_key=True, server_default=text("gen_random_uuid()")),
    Column("user_id", UUID, nullable=False),  # Issued by the identity provider
    Column("skill_id", UUID, ForeignKey("skills.id", ondelete="CASCADE"), nullable=False),
    Column(
        "role",
        Enum("teach", "learn", name="skill_role", create_type=False),
        nullable=False,
    ),
    Column("proficiency_level", Integer, nullable=False),
    Column("note", Text, nullable=True),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    UniqueConstraint("user_id", "skill_id", "role", name="uq_user_skill_role"),
    CheckConstraint(
        "proficiency_level BETWEEN 1 AND 10", name="check_proficiency_level"
    ),
)

# Discovery lookup: skill + role, best first
Index(
    "idx_user_skills_discovery",
    user_skills_table.c.skill_id,
    user_skills_table.c.role,
    user_skills_table.c.proficiency_level.desc(),
    user_skills_table.c.created_at.desc(),
)
Index("idx_user_skills_user_id", user_skills_table.c.user_id)

# ============================================================================
# MATCHES TABLE
# ============================================================================
matches_table = Table(
    "matches",
    metadata,
    Column("id", UUID, primary_key=True, server_default=text("gen_random_uuid()")),
    Column("teacher_id", UUID, nullable=False),
    Column("learner_id", UUID, nullable=False),
    Column("skill_id", UUID, ForeignKey("skills.id"), nullable=False),
    Column(
        "status",
        Enum(
            "pending",
            "accepted",
            "completed",
            "cancelled",
            name="match_status",
            create_type=False,
        ),
        nullable=False,
        server_default="pending",
    ),
    Column("message", Text, nullable=True),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column("accepted_at", TIMESTAMP(timezone=True), nullable=True),
    CheckConstraint("teacher_id <> learner_id", name="check_match_distinct_users"),
)

# At most one pending match per (teacher, learner, skill)
Index(
    "uq_matches_pending_triple",
    matches_table.c.teacher_id,
    matches_table.c.learner_id,
    matches_table.c.skill_id,
    unique=True,
    postgresql_where=matches_table.c.status == "pending",
)
Index("idx_matches_teacher_id", matches_table.c.teacher_id)
Index("idx_matches_learner_id", matches_table.c.learner_id)
Index("idx_matches_created_at", matches_table.c.created_at)

# ============================================================================
# MESSAGES TABLE
# ============================================================================
messages_table = Table(
    "messages",
    metadata,
    Column("id", UUID, primary_key=True, server_default=text("gen_random_uuid()")),
    Column(
        "match_id", UUID, ForeignKey("matches.id", ondelete="CASCADE"), nullable=False
    ),
    Column("sender_id", UUID, nullable=False),
    Column("body", Text, nullable=False),
    Column(
        "type",
        Enum("text", "file", "system", name="message_type", create_type=False),
        nullable=False,
        server_default="text",
    ),
    Column("file_url", Text, nullable=True),
    Column("seq", Integer, nullable=False),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column("read_at", TIMESTAMP(timezone=True), nullable=True),
    UniqueConstraint("match_id", "seq", name="uq_messages_match_seq"),
)

Index(
    "idx_messages_match_order",
    messages_table.c.match_id,
    messages_table.c.created_at,
    messages_table.c.seq,
)
# Unread lookups only touch the unread tail
Index(
    "idx_messages_unread",
    messages_table.c.match_id,
    messages_table.c.sender_id,
    postgresql_where=messages_table.c.read_at.is_(None),
)

# ============================================================================
# NOTIFICATIONS TABLE
# ============================================================================
notifications_table = Table(
    "notifications",
    metadata,
    Column("id", UUID, primary_key=True, server_default=text("gen_random_uuid()")),
    Column("user_id", UUID, nullable=False),
    Column(
        "type",
        Enum(
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
    Column("title", String(200), nullable=False),
    Column("body", Text, nullable=False),
    Column("payload", postgresql.JSONB, nullable=False, server_default="{}"),
    Column("read", Boolean, nullable=False, server_default="false"),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
)

Index(
    "idx_notifications_user_created",
    notifications_table.c.user_id,
    notifications_table.c.created_at.desc(),
)
Index(
    "idx_notifications_user_unread",
    notifications_table.c.user_id,
    postgresql_where=notifications_table.c.read.is_(False),
)
