"""Unit tests for discovery use cases."""

import pytest

from skillswap.application.usecase.discovery import (
    DeclareSkillRequest,
    DeclareSkillUseCase,
    FindCandidatesRequest,
    FindLearnersUseCase,
    FindTeachersUseCase,
    ListDeclarationsRequest,
    ListDeclarationsUseCase,
    RemoveDeclarationRequest,
    RemoveDeclarationUseCase,
    UpdateDeclarationRequest,
    UpdateDeclarationUseCase,
)
from skillswap.domain.error import SkillNotFoundError
from skillswap.domain.value import SkillRole
from tests.conftest import new_user
from tests.di.catalog import GUITAR
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


async def _declare(unit_env, user, role, level, skill=GUITAR):
    use_case = await unit_env.get(DeclareSkillUseCase)
    return await use_case.execute(
        DeclareSkillRequest(
            user_id=str(user), skill_id=str(skill.id), role=role, proficiency_level=level
        )
    )


class TestFindCandidates:
    """Tests for FindTeachersUseCase and FindLearnersUseCase."""

    @pytest.mark.asyncio
    async def test_teachers_sorted_by_proficiency(self, unit_env, alice, bob, carol):
        await _declare(unit_env, alice, SkillRole.TEACH, 5)
        await _declare(unit_env, bob, SkillRole.TEACH, 9)
        await _declare(unit_env, carol, SkillRole.LEARN, 2)
        use_case = await unit_env.get(FindTeachersUseCase)

        response = await use_case.execute(
            FindCandidatesRequest(user_id=str(new_user()), skill_id=str(GUITAR.id))
        )

        assert response.skill_name == "Guitar"
        assert response.role is SkillRole.TEACH
        assert [c.user_id for c in response.candidates] == [str(bob), str(alice)]
        assert response.candidates[0].proficiency_label == "Master"

    @pytest.mark.asyncio
    async def test_learners_exclude_caller(self, unit_env, alice, carol):
        await _declare(unit_env, alice, SkillRole.LEARN, 1)
        await _declare(unit_env, carol, SkillRole.LEARN, 3)
        use_case = await unit_env.get(FindLearnersUseCase)

        response = await use_case.execute(
            FindCandidatesRequest(user_id=str(alice), skill_id=str(GUITAR.id))
        )

        assert [c.user_id for c in response.candidates] == [str(carol)]

    @pytest.mark.asyncio
    async def test_unknown_skill(self, unit_env, alice):
        use_case = await unit_env.get(FindTeachersUseCase)

        with pytest.raises(SkillNotFoundError):
            await use_case.execute(
                FindCandidatesRequest(user_id=str(alice), skill_id=str(new_user()))
            )


class TestManageDeclarations:
    """Tests for declaration management use cases."""

    @pytest.mark.asyncio
    async def test_update_list_remove(self, unit_env, alice):
        declared = await _declare(unit_env, alice, SkillRole.TEACH, 4)
        update = await unit_env.get(UpdateDeclarationUseCase)
        listing = await unit_env.get(ListDeclarationsUseCase)
        remove = await unit_env.get(RemoveDeclarationUseCase)

        updated = await update.execute(
            UpdateDeclarationRequest(
                declaration_id=declared.declaration_id,
                user_id=str(alice),
                proficiency_level=6,
                note="Jazz chords",
            )
        )
        listed = await listing.execute(ListDeclarationsRequest(user_id=str(alice)))
        await remove.execute(
            RemoveDeclarationRequest(
                declaration_id=declared.declaration_id, user_id=str(alice)
            )
        )
        emptied = await listing.execute(ListDeclarationsRequest(user_id=str(alice)))

        assert updated.proficiency_level == 6
        assert updated.note == "Jazz chords"
        assert [d.declaration_id for d in listed.declarations] == [
            declared.declaration_id
        ]
        assert emptied.declarations == []
