"""Discovery use cases."""

from .find_candidates import (
    DeclarationItem,
    FindCandidatesRequest,
    FindCandidatesResponse,
    FindLearnersUseCase,
    FindTeachersUseCase,
)
from .manage_declarations import (
    DeclareSkillRequest,
    DeclareSkillUseCase,
    ListDeclarationsRequest,
    ListDeclarationsResponse,
    ListDeclarationsUseCase,
    RemoveDeclarationRequest,
    RemoveDeclarationUseCase,
    UpdateDeclarationRequest,
    UpdateDeclarationUseCase,
)

__all__ = [
    "DeclarationItem",
    "DeclareSkillRequest",
    "DeclareSkillUseCase",
    "FindCandidatesRequest",
    "FindCandidatesResponse",
    "FindLearnersUseCase",
    "FindTeachersUseCase",
    "ListDeclarationsRequest",
    "ListDeclarationsResponse",
    "ListDeclarationsUseCase",
    "RemoveDeclarationRequest",
    "RemoveDeclarationUseCase",
    "UpdateDeclarationRequest",
    "UpdateDeclarationUseCase",
]
