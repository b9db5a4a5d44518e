"""
Routing module data models.

Route paths, redirect decisions and the state a decision is made from.
"""

from enum import Enum
from typing import Optional
from pydantic import BaseModel, Field

from shared.models import UserIdentity
from modules.profiles.models import Profile


class Paths:
    """Canonical application paths."""

    ROOT = "/"
    AUTH = "/auth"
    PROFILE_SETUP = "/profile-setup"
    PET_OWNER = "/pet-owner"
    SITTER_DASHBOARD = "/pet-sitter-dashboard"
    SHELTER_DASHBOARD = "/pet-shelter-dashboard"
    ADMIN = "/admin"
    ADMIN_AUTH = "/admin/auth"


class DecisionKind(str, Enum):
    """Whether a navigation renders the target or moves elsewhere."""

    STAY = "stay"
    REDIRECT = "redirect"


class RouteDecision(BaseModel):
    """Result of a guard: render the current page or replace-navigate."""

    decision: DecisionKind
    path: Optional[str] = Field(None, description="Redirect target, set only for redirects")

    model_config = {"frozen": True}

    @classmethod
    def stay(cls) -> "RouteDecision":
        return cls(decision=DecisionKind.STAY)

    @classmethod
    def redirect(cls, path: str) -> "RouteDecision":
        return cls(decision=DecisionKind.REDIRECT, path=path)

    @property
    def is_redirect(self) -> bool:
        return self.decision == DecisionKind.REDIRECT


class AccessSnapshot(BaseModel):
    """
    Everything the redirect rules look at, read at decision time.

    ``role_profile_exists`` refers to the record matching
    ``profile.user_type`` (sitter or shelter); it is False for owners.
    """

    identity: Optional[UserIdentity] = None
    profile: Optional[Profile] = None
    role_profile_exists: bool = False

    model_config = {"frozen": True}


class GuardKind(str, Enum):
    """Which guard a page sits behind."""

    PUBLIC = "public"
    SIGNED_IN = "signed_in"
    PROFILE = "profile"
    PROFILE_SETUP = "profile_setup"
    ADMIN = "admin"


class PageView(BaseModel):
    """Minimal descriptor returned when a guarded page renders."""

    path: str
    user: Optional[UserIdentity] = None
    session_warning: bool = Field(False, description="Inactivity timeout is close")
