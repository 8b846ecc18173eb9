"""Skill declaration use cases."""

from uuid import UUID

from pydantic import BaseModel, Field

from skillswap.application.usecase.base import BaseUseCase
from skillswap.domain.service import DiscoveryService
from skillswap.domain.value import SkillId, SkillRole, UserId, UserSkillId

from .find_candidates import DeclarationItem, to_declaration_item


class DeclareSkillRequest(BaseModel):
    """Declare skill request."""

    user_id: str  # User ID from authenticated user
    skill_id: str  # UUID string
    role: SkillRole
    proficiency_level: int = Field(ge=1, le=10)
    note: str | None = Field(default=None, max_length=1000)


class DeclareSkillUseCase(BaseUseCase):
    """Use case for adding a skill the caller teaches or wants to learn."""

    def __init__(self, discovery_service: DiscoveryService) -> None:
        """Initialize declare skill use case.

        Args:
            discovery_service: Discovery domain service
        """
        self.discovery_service = discovery_service

    async def execute(self, request: DeclareSkillRequest) -> DeclarationItem:
        """Execute declare flow.

        Raises:
            SkillNotFoundError: If the skill is unknown
            DuplicateDeclarationError: If already declared in this role
        """
        declaration = await self.discovery_service.declare_skill(
            user_id=UserId(UUID(request.user_id)),
            skill_id=SkillId(UUID(request.skill_id)),
            role=request.role,
            proficiency_level=request.proficiency_level,
            note=request.note,
        )
        return to_declaration_item(declaration)


class UpdateDeclarationRequest(BaseModel):
    """Update declaration request."""

    declaration_id: str  # UUID string
    user_id: str  # User ID from authenticated user
    proficiency_level: int | None = Field(default=None, ge=1, le=10)
    note: str | None = Field(default=None, max_length=1000)


class UpdateDeclarationUseCase(BaseUseCase):
    """Use case for editing the caller's own declaration."""

    def __init__(self, discovery_service: DiscoveryService) -> None:
        """Initialize update declaration use case.

        Args:
            discovery_service: Discovery domain service
        """
        self.discovery_service = discovery_service

    async def execute(self, request: UpdateDeclarationRequest) -> DeclarationItem:
        declaration = await self.discovery_service.update_declaration(
            UserSkillId(UUID(request.declaration_id)),
            UserId(UUID(request.user_id)),
            proficiency_level=request.proficiency_level,
            note=request.note,
        )
        return to_declaration_item(declaration)


class RemoveDeclarationRequest(BaseModel):
    """Remove declaration request."""

    declaration_id: str  # UUID string
    user_id: str  # User ID from authenticated user


class RemoveDeclarationUseCase(BaseUseCase):
    """Use case for deleting the caller's own declaration."""

    def __init__(self, discovery_service: DiscoveryService) -> None:
        """Initialize remove declaration use case.

        Args:
            discovery_service: Discovery domain service
        """
        self.discovery_service = discovery_service

    async def execute(self, request: RemoveDeclarationRequest) -> None:
        await self.discovery_service.remove_declaration(
            UserSkillId(UUID(request.declaration_id)), UserId(UUID(request.user_id))
        )


class ListDeclarationsRequest(BaseModel):
    """List declarations request."""

    user_id: str  # UUID string, any user's declarations are public


class ListDeclarationsResponse(BaseModel):
    """List declarations response."""

    declarations: list[DeclarationItem]


class ListDeclarationsUseCase(BaseUseCase):
    """Use case for a user's declared skills, newest first."""

    def __init__(self, discovery_service: DiscoveryService) -> None:
        """Initialize list declarations use case.

        Args:
            discovery_service: Discovery domain service
        """
        self.discovery_service = discovery_service

    async def execute(self, request: ListDeclarationsRequest) -> ListDeclarationsResponse:
        declarations = await self.discovery_service.list_declarations(
            UserId(UUID(request.user_id))
        )
        return ListDeclarationsResponse(
            declarations=[to_declaration_item(d) for d in declarations]
        )
