"""
Routing module.

Profile-completeness gate, role router and page guards. Every redirect
decision for end users is made by ``evaluate_access``.
"""

from .gate import (
    dashboard_path,
    evaluate_access,
    guard_for,
    landing_path,
    normalize_path,
    profile_setup_entry,
)
from .guard import ProfileGate, require_identity
from .models import AccessSnapshot, GuardKind, PageView, Paths, RouteDecision
from .navigator import Navigator

__all__ = [
    "evaluate_access",
    "dashboard_path",
    "landing_path",
    "profile_setup_entry",
    "guard_for",
    "normalize_path",
    "ProfileGate",
    "require_identity",
    "AccessSnapshot",
    "GuardKind",
    "PageView",
    "Paths",
    "RouteDecision",
    "Navigator",
]
