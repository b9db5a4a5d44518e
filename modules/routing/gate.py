"""
Profile-completeness gate and role router.

Pure functions only: the post-sign-in redirect and every route guard
decide through ``evaluate_access`` so the two can never drift apart.
"""

from typing import Optional

from modules.profiles.models import Profile, UserType
from .models import AccessSnapshot, GuardKind, Paths, RouteDecision


def evaluate_access(snapshot: AccessSnapshot, current_path: Optional[str]) -> RouteDecision:
    """
    Decide whether the user may stay on ``current_path``.

    Rules, first match wins:
        1. no identity                                  -> /auth
        2. no profile row                               -> /profile-setup
        3. phone or city empty                          -> /profile-setup
        4. owner on the sitter dashboard                -> /pet-owner
        5. sitter without a sitter record (any path)    -> /profile-setup
        6. shelter without a shelter record             -> /profile-setup
        7. otherwise                                    -> stay

    Rule 4 is deliberately one-sided: nothing stops a sitter from loading
    /pet-owner.

    Args:
        snapshot: Identity, profile and role-record existence
        current_path: Path being entered; None when there is no page yet
            (right after sign-in)
    """
    current_path = normalize_path(current_path) if current_path is not None else None

    if snapshot.identity is None:
        return RouteDecision.redirect(Paths.AUTH)

    profile = snapshot.profile
    if profile is None:
        return RouteDecision.redirect(Paths.PROFILE_SETUP)

    if not profile.is_complete:
        return RouteDecision.redirect(Paths.PROFILE_SETUP)

    if profile.user_type == UserType.PET_OWNER and current_path == Paths.SITTER_DASHBOARD:
        return RouteDecision.redirect(Paths.PET_OWNER)

    # Applies on the sitter dashboard as well, with no exemption for that
    # path: a brand-new sitter who signs in must land on profile setup,
    # and the dashboard cannot render without the sitter record.
    if profile.user_type == UserType.PET_SITTER and not snapshot.role_profile_exists:
        return RouteDecision.redirect(Paths.PROFILE_SETUP)

    if profile.user_type == UserType.PET_SHELTER and not snapshot.role_profile_exists:
        return RouteDecision.redirect(Paths.PROFILE_SETUP)

    return RouteDecision.stay()


def dashboard_path(profile: Profile, role_profile_exists: bool) -> str:
    """
    Canonical dashboard for a completed profile.

    Sitters and shelters only get their dashboard once their role record
    exists. Unrecognized roles fall back to the home page.
    """
    user_type = profile.user_type
    if user_type == UserType.PET_OWNER:
        return Paths.PET_OWNER
    if user_type == UserType.PET_SITTER:
        return Paths.SITTER_DASHBOARD if role_profile_exists else Paths.PROFILE_SETUP
    if user_type == UserType.PET_SHELTER:
        return Paths.SHELTER_DASHBOARD if role_profile_exists else Paths.PROFILE_SETUP
    return Paths.ROOT


def landing_path(snapshot: AccessSnapshot) -> str:
    """Where a user lands right after signing in."""
    decision = evaluate_access(snapshot, current_path=None)
    if decision.is_redirect:
        return decision.path
    return dashboard_path(snapshot.profile, snapshot.role_profile_exists)


def profile_setup_entry(
    snapshot: AccessSnapshot,
    edit_mode: bool = False,
    fallback_user_type: Optional[str] = None,
) -> RouteDecision:
    """
    Decide what happens when the profile-setup page is entered.

    Sitters and shelters whose role record already exists are sent to
    their dashboard, unless they came to edit their profile.

    Args:
        snapshot: Current access state
        edit_mode: True for ``/profile-setup?edit=true``
        fallback_user_type: Role from sign-up metadata, used before a
            profile row exists
    """
    if snapshot.identity is None:
        return RouteDecision.redirect(Paths.AUTH)

    if edit_mode or not snapshot.role_profile_exists:
        return RouteDecision.stay()

    user_type = snapshot.profile.user_type if snapshot.profile else fallback_user_type
    if user_type == UserType.PET_SITTER:
        return RouteDecision.redirect(Paths.SITTER_DASHBOARD)
    if user_type == UserType.PET_SHELTER:
        return RouteDecision.redirect(Paths.SHELTER_DASHBOARD)
    return RouteDecision.stay()


# Pages behind the profile-completeness gate.
PROFILE_GATED_PAGES = frozenset({
    Paths.PET_OWNER,
    "/pet-lover",
    "/pet-registration",
    "/create-care-request",
    "/find-sitters",
    "/my-care-requests",
    Paths.SITTER_DASHBOARD,
    Paths.SHELTER_DASHBOARD,
})

# Pages that only need a signed-in user.
SIGNED_IN_PAGES = frozenset({"/checkout", "/my-orders"})

CARE_REQUEST_PREFIX = "/care-request/"


def normalize_path(path: str) -> str:
    """Drop trailing slashes so ``/pet-owner/`` and ``/pet-owner`` are one page."""
    return path.rstrip("/") or Paths.ROOT


def guard_for(path: str) -> GuardKind:
    """Classify ``path`` by the guard it sits behind."""
    path = normalize_path(path)
    if path in PROFILE_GATED_PAGES or path.startswith(CARE_REQUEST_PREFIX):
        return GuardKind.PROFILE
    if path in SIGNED_IN_PAGES:
        return GuardKind.SIGNED_IN
    if path == Paths.PROFILE_SETUP:
        return GuardKind.PROFILE_SETUP
    if path == Paths.ADMIN:
        return GuardKind.ADMIN
    return GuardKind.PUBLIC
