"""
Profiles module exceptions.
"""

from typing import Optional

from shared.exceptions import NotFoundError, ValidationError


class ProfileNotFoundError(NotFoundError):
    """Raised when a user has no base profile row."""

    def __init__(self, user_id: str):
        super().__init__(
            f"Profile not found: {user_id}",
            code="PROFILE_NOT_FOUND",
            details={"user_id": user_id},
        )


class RoleMismatchError(ValidationError):
    """Raised when a setup step does not match the user's role."""

    def __init__(self, expected: str, actual: Optional[str]):
        super().__init__(
            f"This step is for {expected} accounts",
            code="ROLE_MISMATCH",
            details={"expected": expected, "actual": actual},
        )


class MissingUserTypeError(ValidationError):
    """Raised when no role was chosen at sign-up or in the setup form."""

    def __init__(self):
        super().__init__(
            "Choose whether you are a pet owner, pet sitter or pet shelter",
            code="MISSING_USER_TYPE",
        )
