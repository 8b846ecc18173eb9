"""Discovery domain service."""

from typing import List, Optional
from uuid import uuid4

import logfire
from sqlalchemy.exc import IntegrityError

from skillswap.domain.error import (
    DuplicateDeclarationError,
    NotAuthorizedError,
    NotFoundError,
    SkillNotFoundError,
)
from skillswap.domain.model import Skill, UserSkillDeclaration
from skillswap.domain.repository import SkillRepository, UserSkillRepository
from skillswap.domain.value import SkillId, SkillRole, UserId, UserSkillId
from skillswap.domain.value.types import ProficiencyLevel

from .base import DEFAULT_STORE_TIMEOUT, Service


class DiscoveryService(Service):
    """Surfaces candidate teachers and learners, and manages the
    declarations they are found by."""

    def __init__(
        self,
        user_skill_repository: UserSkillRepository,
        skill_repository: SkillRepository,
        store_timeout: float = DEFAULT_STORE_TIMEOUT,
    ) -> None:
        """Initialize discovery service.

        Args:
            user_skill_repository: Declaration repository
            skill_repository: Skill catalog
            store_timeout: Seconds allowed per store interaction
        """
        self.user_skill_repository = user_skill_repository
        self.skill_repository = skill_repository
        self.store_timeout = store_timeout

    async def find_teachers(
        self, requesting_user_id: UserId, skill_id: SkillId
    ) -> List[UserSkillDeclaration]:
        """Find users offering to teach a skill.

        Ordered by proficiency (highest first), then most recently
        declared. An empty list means nobody teaches it yet; a failed
        lookup raises instead.

        Args:
            requesting_user_id: Caller, excluded from the result
            skill_id: Skill to learn

        Returns:
            At most one declaration per user

        Raises:
            SkillNotFoundError: If the skill is not in the catalog
            StoreUnavailableError: If the lookup failed
        """
        return await self._find(requesting_user_id, skill_id, SkillRole.TEACH)

    async def find_learners(
        self, requesting_user_id: UserId, skill_id: SkillId
    ) -> List[UserSkillDeclaration]:
        """Find users wanting to learn a skill, ordered like find_teachers."""
        return await self._find(requesting_user_id, skill_id, SkillRole.LEARN)

    async def _find(
        self, requesting_user_id: UserId, skill_id: SkillId, role: SkillRole
    ) -> List[UserSkillDeclaration]:
        with logfire.span(
            "discovery_service.find",
            skill_id=str(skill_id),
            role=role.value,
        ):
            await self.get_skill(skill_id)

            async with self.store_call("discovery.find"):
                declarations = await self.user_skill_repository.find_by_skill_and_role(
                    skill_id, role
                )

            seen: set[UserId] = set()
            result = []
            for declaration in declarations:
                if declaration.user_id == requesting_user_id:
                    continue
                if declaration.user_id in seen:
                    continue
                seen.add(declaration.user_id)
                result.append(declaration)

            logfire.info(
                "Discovery lookup", skill_id=str(skill_id), role=role.value, found=len(result)
            )
            return result

    async def get_skill(self, skill_id: SkillId) -> Skill:
        """Look up a catalog skill.

        Raises:
            SkillNotFoundError: If the skill is not in the catalog
        """
        async with self.store_call("skill.get"):
            skill = await self.skill_repository.find_by_id(skill_id)
        if skill is None:
            logfire.error("Skill missing from catalog", skill_id=str(skill_id))
            raise SkillNotFoundError(skill_id)
        return skill

    async def declare_skill(
        self,
        user_id: UserId,
        skill_id: SkillId,
        role: SkillRole,
        proficiency_level: int,
        note: Optional[str] = None,
    ) -> UserSkillDeclaration:
        """Declare that a user teaches or wants to learn a skill.

        Raises:
            ValueError: If the proficiency level is outside 1-10
            SkillNotFoundError: If the skill is not in the catalog
            DuplicateDeclarationError: If the user already declared the
                skill in this role
        """
        with logfire.span(
            "discovery_service.declare_skill",
            user_id=str(user_id),
            skill_id=str(skill_id),
            role=role.value,
        ):
            await self.get_skill(skill_id)

            declaration = UserSkillDeclaration(
                id=UserSkillId(uuid4()),
                user_id=user_id,
                skill_id=skill_id,
                role=role,
                proficiency_level=ProficiencyLevel(proficiency_level),
                note=(note or "").strip() or None,
            )

            async with self.store_call("discovery.declare"):
                try:
                    return await self.user_skill_repository.save(declaration)
                except IntegrityError:
                    logfire.warn(
                        "Duplicate skill declaration",
                        user_id=str(user_id),
                        skill_id=str(skill_id),
                    )
                    raise DuplicateDeclarationError(user_id, skill_id, role.value)

    async def update_declaration(
        self,
        declaration_id: UserSkillId,
        caller_id: UserId,
        proficiency_level: Optional[int] = None,
        note: Optional[str] = None,
    ) -> UserSkillDeclaration:
        """Change the level or note of one's own declaration.

        Raises:
            NotFoundError: If the declaration does not exist
            NotAuthorizedError: If the caller does not own it
        """
        with logfire.span(
            "discovery_service.update_declaration",
            declaration_id=str(declaration_id),
            caller_id=str(caller_id),
        ):
            declaration = await self._get_owned(declaration_id, caller_id)

            updates: dict[str, object] = {}
            if proficiency_level is not None:
                updates["proficiency_level"] = ProficiencyLevel(proficiency_level)
            if note is not None:
                updates["note"] = note.strip() or None

            if not updates:
                return declaration

            updated = declaration.model_copy(update=updates)
            async with self.store_call("discovery.update"):
                return await self.user_skill_repository.save(updated)

    async def remove_declaration(
        self, declaration_id: UserSkillId, caller_id: UserId
    ) -> None:
        """Delete one's own declaration.

        Raises:
            NotFoundError: If the declaration does not exist
            NotAuthorizedError: If the caller does not own it
        """
        with logfire.span(
            "discovery_service.remove_declaration",
            declaration_id=str(declaration_id),
            caller_id=str(caller_id),
        ):
            await self._get_owned(declaration_id, caller_id)
            async with self.store_call("discovery.remove"):
                await self.user_skill_repository.delete(declaration_id)
            logfire.info("Skill declaration removed", declaration_id=str(declaration_id))

    async def list_declarations(self, user_id: UserId) -> List[UserSkillDeclaration]:
        async with self.store_call("discovery.list"):
            return await self.user_skill_repository.find_by_user(user_id)

    async def _get_owned(
        self, declaration_id: UserSkillId, caller_id: UserId
    ) -> UserSkillDeclaration:
        async with self.store_call("discovery.get"):
            declaration = await self.user_skill_repository.find_by_id(declaration_id)

        if declaration is None:
            raise NotFoundError("Skill declaration", str(declaration_id))

        if declaration.user_id != caller_id:
            logfire.warn(
                "Declaration change by non-owner",
                declaration_id=str(declaration_id),
                caller_id=str(caller_id),
            )
            raise NotAuthorizedError("skill declaration", declaration_id, caller_id)

        return declaration
