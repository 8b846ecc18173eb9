"""Skill discovery and declaration routes."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, status
from pydantic import BaseModel, Field

from skillswap.application.usecase.discovery import (
    DeclarationItem,
    DeclareSkillRequest,
    DeclareSkillUseCase,
    FindCandidatesRequest,
    FindCandidatesResponse,
    FindLearnersUseCase,
    FindTeachersUseCase,
    ListDeclarationsRequest,
    ListDeclarationsResponse,
    ListDeclarationsUseCase,
    RemoveDeclarationRequest,
    RemoveDeclarationUseCase,
    UpdateDeclarationRequest,
    UpdateDeclarationUseCase,
)
from skillswap.domain.service import JWTService
from skillswap.domain.value import SkillRole
from skillswap.interface.api.auth import require_principal

router = APIRouter(tags=["discovery"], route_class=DishkaRoute)


class DeclareSkillAPIRequest(BaseModel):
    """API request for declaring a skill."""

    skill_id: str
    role: SkillRole
    proficiency_level: int = Field(ge=1, le=10)
    note: str | None = Field(default=None, max_length=1000)


class UpdateDeclarationAPIRequest(BaseModel):
    """API request for editing a declaration."""

    proficiency_level: int | None = Field(default=None, ge=1, le=10)
    note: str | None = Field(default=None, max_length=1000)


@router.get("/skills/{skill_id}/teachers", response_model=FindCandidatesResponse)
async def find_teachers(
    skill_id: str,
    find_teachers_use_case: FromDishka[FindTeachersUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> FindCandidatesResponse:
    """Users who teach the skill, most proficient first."""
    principal = require_principal(jwt_service, auth_token, "find teachers")
    return await find_teachers_use_case.execute(
        FindCandidatesRequest(user_id=str(principal.user_id), skill_id=skill_id)
    )


@router.get("/skills/{skill_id}/learners", response_model=FindCandidatesResponse)
async def find_learners(
    skill_id: str,
    find_learners_use_case: FromDishka[FindLearnersUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> FindCandidatesResponse:
    """Users who want to learn the skill, most proficient first."""
    principal = require_principal(jwt_service, auth_token, "find learners")
    return await find_learners_use_case.execute(
        FindCandidatesRequest(user_id=str(principal.user_id), skill_id=skill_id)
    )


@router.get("/me/skills", response_model=ListDeclarationsResponse)
async def list_my_skills(
    list_use_case: FromDishka[ListDeclarationsUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> ListDeclarationsResponse:
    principal = require_principal(jwt_service, auth_token, "view your skills")
    return await list_use_case.execute(
        ListDeclarationsRequest(user_id=str(principal.user_id))
    )


@router.get("/users/{user_id}/skills", response_model=ListDeclarationsResponse)
async def list_user_skills(
    user_id: str,
    list_use_case: FromDishka[ListDeclarationsUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> ListDeclarationsResponse:
    require_principal(jwt_service, auth_token, "view skills")
    return await list_use_case.execute(ListDeclarationsRequest(user_id=user_id))


@router.post(
    "/me/skills", response_model=DeclarationItem, status_code=status.HTTP_201_CREATED
)
async def declare_skill(
    request: DeclareSkillAPIRequest,
    declare_use_case: FromDishka[DeclareSkillUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> DeclarationItem:
    """Declare a skill the caller teaches or wants to learn."""
    principal = require_principal(jwt_service, auth_token, "add skills")
    return await declare_use_case.execute(
        DeclareSkillRequest(
            user_id=str(principal.user_id),
            skill_id=request.skill_id,
            role=request.role,
            proficiency_level=request.proficiency_level,
            note=request.note,
        )
    )


@router.patch("/me/skills/{declaration_id}", response_model=DeclarationItem)
async def update_declaration(
    declaration_id: str,
    request: UpdateDeclarationAPIRequest,
    update_use_case: FromDishka[UpdateDeclarationUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> DeclarationItem:
    principal = require_principal(jwt_service, auth_token, "edit skills")
    return await update_use_case.execute(
        UpdateDeclarationRequest(
            declaration_id=declaration_id,
            user_id=str(principal.user_id),
            proficiency_level=request.proficiency_level,
            note=request.note,
        )
    )


@router.delete("/me/skills/{declaration_id}", status_code=status.HTTP_204_NO_CONTENT)
async def remove_declaration(
    declaration_id: str,
    remove_use_case: FromDishka[RemoveDeclarationUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> None:
    principal = require_principal(jwt_service, auth_token, "remove skills")
    await remove_use_case.execute(
        RemoveDeclarationRequest(
            declaration_id=declaration_id, user_id=str(principal.user_id)
        )
    )
