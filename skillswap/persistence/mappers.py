"""Mappers for converting between database rows and domain models.

Since we're using Pydantic domain models (immutable), we use manual mapping
instead of SQLAlchemy's classical imperative mapping.
"""

from typing import Any, Dict
from uuid import UUID

from skillswap.domain.model import (
    Match,
    Message,
    Notification,
    Skill,
    UserSkillDeclaration,
)
from skillswap.domain.value import (
    MatchId,
    MatchStatus,
    MessageId,
    MessageType,
    NotificationId,
    NotificationType,
    SkillId,
    SkillRole,
    UserId,
    UserSkillId,
)
from skillswap.domain.value.types import ProficiencyLevel


def _uuid(value: Any) -> UUID:
    """asyncpg returns its own UUID type; normalize to uuid.UUID."""
    return value if type(value) is UUID else UUID(str(value))


def row_to_skill(row: Dict[str, Any]) -> Skill:
    return Skill(
        id=SkillId(_uuid(row["id"])),
        name=row["name"],
        category=row["category"],
        description=row.get("description"),
    )


def row_to_user_skill(row: Dict[str, Any]) -> UserSkillDeclaration:
    """Convert database row to UserSkillDeclaration domain model.

    Args:
        row: Database row as dict

    Returns:
        UserSkillDeclaration domain model
    """
    return UserSkillDeclaration(
        id=UserSkillId(_uuid(row["id"])),
        user_id=UserId(_uuid(row["user_id"])),
        skill_id=SkillId(_uuid(row["skill_id"])),
        role=SkillRole(row["role"]),
        proficiency_level=ProficiencyLevel(row["proficiency_level"]),
        note=row.get("note"),
        created_at=row["created_at"],
    )


def user_skill_to_dict(declaration: UserSkillDeclaration) -> Dict[str, Any]:
    """Convert UserSkillDeclaration domain model to database dict."""
    data = declaration.model_dump()
    data["role"] = declaration.role.value
    return data


def row_to_match(row: Dict[str, Any]) -> Match:
    """Convert database row to Match domain model.

    Args:
        row: Database row as dict

    Returns:
        Match domain model
    """
    return Match(
        id=MatchId(_uuid(row["id"])),
        teacher_id=UserId(_uuid(row["teacher_id"])),
        learner_id=UserId(_uuid(row["learner_id"])),
        skill_id=SkillId(_uuid(row["skill_id"])),
        status=MatchStatus(row["status"]),
        message=row.get("message"),
        created_at=row["created_at"],
        updated_at=row["updated_at"],
        accepted_at=row.get("accepted_at"),
    )


def match_to_dict(match: Match) -> Dict[str, Any]:
    """Convert Match domain model to database dict."""
    data = match.model_dump()
    data["status"] = match.status.value
    return data


def row_to_message(row: Dict[str, Any]) -> Message:
    """Convert database row to Message domain model."""
    return Message(
        id=MessageId(_uuid(row["id"])),
        match_id=MatchId(_uuid(row["match_id"])),
        sender_id=UserId(_uuid(row["sender_id"])),
        body=row["body"],
        type=MessageType(row["type"]),
        file_url=row.get("file_url"),
        created_at=row["created_at"],
        read_at=row.get("read_at"),
        seq=row["seq"],
    )


def message_to_dict(message: Message) -> Dict[str, Any]:
    """Convert Message domain model to database dict."""
    data = message.model_dump()
    data["type"] = message.type.value
    return data


def row_to_notification(row: Dict[str, Any]) -> Notification:
    """Convert database row to Notification domain model."""
    return Notification(
        id=NotificationId(_uuid(row["id"])),
        user_id=UserId(_uuid(row["user_id"])),
        type=NotificationType(row["type"]),
        title=row["title"],
        body=row["body"],
        payload=row["payload"] or {},
        read=row["read"],
        created_at=row["created_at"],
    )


def notification_to_dict(notification: Notification) -> Dict[str, Any]:
    """Convert Notification domain model to database dict."""
    data = notification.model_dump(mode="json")
    # Timestamps and ids stay native for the driver
    data["id"] = notification.id
    data["user_id"] = notification.user_id
    data["created_at"] = notification.created_at
    return data
