"""Strongly typed identifiers for SkillSwap domain entities.

Using NewType for strong typing prevents mixing up different entity IDs
and makes the code more self-documenting.
"""

from typing import NewType
from uuid import UUID

# Issued by the identity provider
UserId = NewType("UserId", UUID)

# Owned by the skill catalog
SkillId = NewType("SkillId", UUID)

# Core domain entity identifiers
UserSkillId = NewType("UserSkillId", UUID)
MatchId = NewType("MatchId", UUID)
MessageId = NewType("MessageId", UUID)
NotificationId = NewType("NotificationId", UUID)
