"""Unit tests for DiscoveryService."""

from uuid import uuid4

import pytest

from skillswap.domain.error import (
    DuplicateDeclarationError,
    NotAuthorizedError,
    NotFoundError,
    SkillNotFoundError,
)
from skillswap.domain.service import DiscoveryService
from skillswap.domain.value import SkillId, SkillRole, UserSkillId
from tests.conftest import new_user
from tests.di.catalog import GUITAR, PYTHON
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


class TestFind:
    """Tests for find_teachers and find_learners."""

    @pytest.mark.asyncio
    async def test_teachers_ordered_by_proficiency(self, unit_env, alice):
        discovery_service = await unit_env.get(DiscoveryService)
        novice, expert, master = new_user(), new_user(), new_user()
        await discovery_service.declare_skill(novice, GUITAR.id, SkillRole.TEACH, 2)
        await discovery_service.declare_skill(master, GUITAR.id, SkillRole.TEACH, 9)
        await discovery_service.declare_skill(expert, GUITAR.id, SkillRole.TEACH, 7)

        teachers = await discovery_service.find_teachers(alice, GUITAR.id)

        assert [t.user_id for t in teachers] == [master, expert, novice]
        assert teachers[0].proficiency_level.label == "Master"

    @pytest.mark.asyncio
    async def test_requester_and_other_roles_excluded(self, unit_env, alice, bob):
        discovery_service = await unit_env.get(DiscoveryService)
        await discovery_service.declare_skill(alice, GUITAR.id, SkillRole.TEACH, 5)
        await discovery_service.declare_skill(bob, GUITAR.id, SkillRole.LEARN, 1)

        teachers = await discovery_service.find_teachers(alice, GUITAR.id)
        learners = await discovery_service.find_learners(alice, GUITAR.id)

        assert teachers == []
        assert [d.user_id for d in learners] == [bob]

    @pytest.mark.asyncio
    async def test_nobody_teaches_returns_empty(self, unit_env, alice):
        discovery_service = await unit_env.get(DiscoveryService)

        assert await discovery_service.find_teachers(alice, PYTHON.id) == []

    @pytest.mark.asyncio
    async def test_unknown_skill_raises(self, unit_env, alice):
        discovery_service = await unit_env.get(DiscoveryService)

        with pytest.raises(SkillNotFoundError):
            await discovery_service.find_teachers(alice, SkillId(uuid4()))


class TestDeclarations:
    """Tests for declaring, editing and removing skills."""

    @pytest.mark.asyncio
    async def test_declare_same_role_twice_raises(self, unit_env, alice):
        discovery_service = await unit_env.get(DiscoveryService)
        await discovery_service.declare_skill(alice, GUITAR.id, SkillRole.TEACH, 5)

        with pytest.raises(DuplicateDeclarationError):
            await discovery_service.declare_skill(alice, GUITAR.id, SkillRole.TEACH, 6)

        # Learning the same skill is a different declaration
        learn = await discovery_service.declare_skill(
            alice, GUITAR.id, SkillRole.LEARN, 3
        )
        assert learn.role is SkillRole.LEARN

    @pytest.mark.asyncio
    async def test_proficiency_out_of_range_rejected(self, unit_env, alice):
        discovery_service = await unit_env.get(DiscoveryService)

        with pytest.raises(ValueError):
            await discovery_service.declare_skill(alice, GUITAR.id, SkillRole.TEACH, 11)

    @pytest.mark.asyncio
    async def test_update_own_declaration(self, unit_env, alice):
        discovery_service = await unit_env.get(DiscoveryService)
        declaration = await discovery_service.declare_skill(
            alice, GUITAR.id, SkillRole.TEACH, 5, note="Rock and blues"
        )

        updated = await discovery_service.update_declaration(
            declaration.id, alice, proficiency_level=8
        )

        assert updated.proficiency_level.root == 8
        assert updated.note == "Rock and blues"

    @pytest.mark.asyncio
    async def test_update_by_other_user_raises(self, unit_env, alice, bob):
        discovery_service = await unit_env.get(DiscoveryService)
        declaration = await discovery_service.declare_skill(
            alice, GUITAR.id, SkillRole.TEACH, 5
        )

        with pytest.raises(NotAuthorizedError):
            await discovery_service.update_declaration(declaration.id, bob, note="mine")

    @pytest.mark.asyncio
    async def test_remove_declaration(self, unit_env, alice):
        discovery_service = await unit_env.get(DiscoveryService)
        declaration = await discovery_service.declare_skill(
            alice, GUITAR.id, SkillRole.TEACH, 5
        )

        await discovery_service.remove_declaration(declaration.id, alice)

        assert await discovery_service.list_declarations(alice) == []
        with pytest.raises(NotFoundError):
            await discovery_service.remove_declaration(declaration.id, alice)

    @pytest.mark.asyncio
    async def test_remove_unknown_raises_not_found(self, unit_env, alice):
        discovery_service = await unit_env.get(DiscoveryService)

        with pytest.raises(NotFoundError):
            await discovery_service.remove_declaration(UserSkillId(uuid4()), alice)
