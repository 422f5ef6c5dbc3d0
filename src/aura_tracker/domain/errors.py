"""Domain error types."""

from uuid import UUID


class AuraError(Exception):
    """Base class for application errors."""


class InvalidInputError(AuraError, ValueError):
    """Raised when caller input cannot be scored."""


class MissingTargetError(AuraError):
    """Raised when a profile lacks a target needed for scoring."""

    def __init__(self, field: str) -> None:
        super().__init__(f"Profile is missing required target: {field}")
        self.field = field


class ProfileNotFoundError(AuraError, LookupError):
    """Raised when no profile exists for a user id."""

    def __init__(self, user_id: UUID) -> None:
        super().__init__(f"Profile not found: {user_id}")
        self.user_id = user_id


class PartialUpdateError(AuraError):
    """Raised when a meal was stored but a dependent record was not updated."""

    def __init__(self, meal_id: UUID, stage: str) -> None:
        super().__init__(f"Meal {meal_id} stored but {stage} update failed")
        self.meal_id = meal_id
        self.stage = stage


class ProfileExistsError(AuraError):
    """Raised when onboarding a user who already has a profile."""

    def __init__(self, user_id: UUID) -> None:
        super().__init__(f"Profile already exists: {user_id}")
        self.user_id = user_id
