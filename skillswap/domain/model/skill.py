"""Skill entity.

Skills belong to the external skill catalog. This service only reads them.
"""

from typing import Optional

from pydantic import Field

from skillswap.domain.model.common import DomainModel
from skillswap.domain.value import SkillId


class Skill(DomainModel):
    """A teachable skill, e.g. "Guitar" in category "Music"."""

    id: SkillId
    name: str = Field(min_length=1, max_length=100)
    category: str = Field(min_length=1, max_length=100)
    description: Optional[str] = None
