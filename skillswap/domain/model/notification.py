"""Notification entity."""

from datetime import datetime
from typing import Any

from pydantic import Field, field_validator

from skillswap.domain.model.common import DomainModel, utc_now
from skillswap.domain.value import NotificationId, NotificationType, UserId


class Notification(DomainModel):
    """User-facing notice derived from a lifecycle or message event.

    Only ever created for its recipient, and only the recipient may mark it read.
    """

    id: NotificationId
    user_id: UserId
    type: NotificationType
    title: str = Field(min_length=1, max_length=200)
    body: str = Field(max_length=2000)
    payload: dict[str, Any]
    read: bool = False
    created_at: datetime = Field(default_factory=utc_now)

    @field_validator("payload")
    @classmethod
    def validate_payload_has_match(cls, v: dict[str, Any]) -> dict[str, Any]:
        """Every notice points back at the match it came from."""
        if not v.get("match_id"):
            raise ValueError("Notification payload must include match_id")
        return v
