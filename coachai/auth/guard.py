"""Navigation gating based on session state."""

from enum import Enum

from coachai.auth.manager import SessionManager


class RouteAccess(str, Enum):
    """Who a view is meant for."""

    PROTECTED = "protected"  # Requires a session (dashboard, chat)
    PUBLIC = "public"  # Only for signed-out users (sign-in, sign-up)


class RouteDecision(str, Enum):
    """What the navigation layer should do."""

    WAIT = "wait"  # Session still restoring; render a neutral placeholder
    ALLOW = "allow"
    REDIRECT_SIGN_IN = "redirect_sign_in"
    REDIRECT_DASHBOARD = "redirect_dashboard"


class RouteGuard:
    """Reads the session manager's snapshot and decides navigation."""

    def __init__(self, session_manager: SessionManager):
        self._session_manager = session_manager

    def decide(self, access: RouteAccess = RouteAccess.PROTECTED) -> RouteDecision:
        snapshot = self._session_manager.snapshot

        if snapshot.restoring:
            return RouteDecision.WAIT

        if access == RouteAccess.PUBLIC:
            return (
                RouteDecision.REDIRECT_DASHBOARD
                if snapshot.authenticated
                else RouteDecision.ALLOW
            )

        return RouteDecision.ALLOW if snapshot.authenticated else RouteDecision.REDIRECT_SIGN_IN
