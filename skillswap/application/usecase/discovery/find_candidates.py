"""Find teachers and learners use cases."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel

from skillswap.application.usecase.base import BaseUseCase
from skillswap.domain.model import UserSkillDeclaration
from skillswap.domain.service import DiscoveryService
from skillswap.domain.value import SkillId, SkillRole, UserId


class DeclarationItem(BaseModel):
    """Skill declaration as returned to API clients."""

    declaration_id: str
    user_id: str
    skill_id: str
    role: SkillRole
    proficiency_level: int
    proficiency_label: str
    note: str | None
    created_at: datetime


def to_declaration_item(declaration: UserSkillDeclaration) -> DeclarationItem:
    return DeclarationItem(
        declaration_id=str(declaration.id),
        user_id=str(declaration.user_id),
        skill_id=str(declaration.skill_id),
        role=declaration.role,
        proficiency_level=declaration.proficiency_level.root,
        proficiency_label=declaration.proficiency_level.label,
        note=declaration.note,
        created_at=declaration.created_at,
    )


class FindCandidatesRequest(BaseModel):
    """Find teachers or learners request."""

    user_id: str  # User ID from authenticated user
    skill_id: str  # UUID string


class FindCandidatesResponse(BaseModel):
    """Find teachers or learners response.

    An empty list means nobody has declared the skill in that role yet.
    """

    skill_id: str
    skill_name: str
    role: SkillRole
    candidates: list[DeclarationItem]


class FindTeachersUseCase(BaseUseCase):
    """Use case for finding who can teach a skill."""

    role = SkillRole.TEACH

    def __init__(self, discovery_service: DiscoveryService) -> None:
        """Initialize find use case.

        Args:
            discovery_service: Discovery domain service
        """
        self.discovery_service = discovery_service

    async def _find(
        self, user_id: UserId, skill_id: SkillId
    ) -> list[UserSkillDeclaration]:
        return await self.discovery_service.find_teachers(user_id, skill_id)

    async def execute(self, request: FindCandidatesRequest) -> FindCandidatesResponse:
        """Execute lookup.

        Raises:
            SkillNotFoundError: If the skill is unknown
            StoreUnavailableError: If the lookup failed
        """
        skill_id = SkillId(UUID(request.skill_id))
        skill = await self.discovery_service.get_skill(skill_id)
        declarations = await self._find(UserId(UUID(request.user_id)), skill_id)
        return FindCandidatesResponse(
            skill_id=str(skill.id),
            skill_name=skill.name,
            role=self.role,
            candidates=[to_declaration_item(d) for d in declarations],
        )


class FindLearnersUseCase(FindTeachersUseCase):
    """Use case for finding who wants to learn a skill."""

    role = SkillRole.LEARN

    async def _find(
        self, user_id: UserId, skill_id: SkillId
    ) -> list[UserSkillDeclaration]:
        return await self.discovery_service.find_learners(user_id, skill_id)
