"""Domain layer errors.

Every error carries a ``user_message`` that tells the person on the other
end whether their action was disallowed by policy, not possible yet, or
blocked by an outage.
"""

from uuid import UUID


class DomainError(Exception):
    """Base domain error."""

    user_message: str = "Something went wrong."

    # Whether the caller may retry the same call later
    retryable: bool = False


class SelfMatchError(DomainError):
    """Raised when a learner requests a match with themselves."""

    user_message = "You can't send a match request to yourself."

    def __init__(self, user_id: UUID):
        self.user_id = user_id
        super().__init__(f"User {user_id} cannot match with themselves")


class DuplicatePendingError(DomainError):
    """Raised when a pending match already exists for the same triple."""

    user_message = "You already have a pending request with this teacher for this skill."

    def __init__(self, existing_match_id: UUID | None):
        self.existing_match_id = existing_match_id
        super().__init__(
            f"A pending match already exists: {existing_match_id or 'unknown'}"
        )


class NotAuthorizedError(DomainError):
    """Raised when a user acts on a resource they don't control."""

    user_message = "You're not allowed to do that."

    def __init__(self, resource: str, resource_id: UUID | str, user_id: UUID | str):
        self.resource = resource
        self.resource_id = resource_id
        self.user_id = user_id
        super().__init__(
            f"User {user_id} is not authorized to modify {resource} {resource_id}"
        )


class InvalidTransitionError(DomainError):
    """Raised when a match status change is not an edge of the lifecycle."""

    user_message = "This match can no longer be changed that way."

    def __init__(self, match_id: UUID, current: str, target: str):
        self.match_id = match_id
        self.current = current
        self.target = target
        super().__init__(f"Match {match_id} cannot move from {current} to {target}")


class NotParticipantError(DomainError):
    """Raised when someone outside a match touches its conversation."""

    user_message = "Only the two people in this match can use its conversation."

    def __init__(self, match_id: UUID, user_id: UUID):
        self.match_id = match_id
        self.user_id = user_id
        super().__init__(f"User {user_id} is not a participant of match {match_id}")


class ChannelNotOpenError(DomainError):
    """Raised when the conversation of a match is not open."""

    user_message = "Messaging opens once the teacher accepts the request."

    def __init__(self, match_id: UUID, status: str, closed: bool = False):
        self.match_id = match_id
        self.status = status
        self.closed = closed
        if closed:
            self.user_message = "This conversation has been closed."
        super().__init__(f"Conversation for match {match_id} is not open ({status})")


class DuplicateDeclarationError(DomainError):
    """Raised when a user declares the same skill and role twice."""

    user_message = "You've already added this skill."

    def __init__(self, user_id: UUID, skill_id: UUID, role: str):
        super().__init__(f"User {user_id} already declared skill {skill_id} as {role}")


class NotFoundError(DomainError):
    """Raised when a requested resource is not found."""

    user_message = "We couldn't find what you were looking for."

    def __init__(self, resource: str, identifier: UUID | str):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} not found: {identifier}")


class DataIntegrityError(DomainError):
    """Raised when referenced data that must exist is missing."""

    user_message = "Some data behind this request is inconsistent. Please contact support."


class SkillNotFoundError(DataIntegrityError):
    """Raised when a skill id is absent from the skill catalog."""

    def __init__(self, skill_id: UUID):
        self.skill_id = skill_id
        super().__init__(f"Skill missing from catalog: {skill_id}")


class StoreUnavailableError(DomainError):
    """Raised when the data store cannot be reached in time."""

    user_message = "The service is temporarily unavailable. Please try again shortly."
    retryable = True

    def __init__(self, operation: str, reason: str):
        self.operation = operation
        self.reason = reason
        super().__init__(f"Store unavailable during {operation}: {reason}")
