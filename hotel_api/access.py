"""Role-gated routing for the guest portal and back-office"""

from typing import Dict, List, Optional, NamedTuple

from hotel_api.models.user import AppRole

# Decisions
RENDER = "render"
AUTHENTICATE = "authenticate"
REDIRECT = "redirect"
RETRY = "retry"
NOT_FOUND = "not_found"


class Route(NamedTuple):
    path: str
    name: str
    required_role: Optional[AppRole]  # None for public pages


class AccessDecision(NamedTuple):
    path: str
    action: str
    redirect_to: Optional[str] = None
    required_role: Optional[AppRole] = None


ROUTES: List[Route] = [
    Route("/", "Home", None),
    Route("/auth", "Sign in", None),
    # Back-office
    Route("/admin", "Admin", AppRole.ADMIN),
    Route("/admin/dashboard", "Dashboard", AppRole.ADMIN),
    Route("/admin/rooms", "Rooms", AppRole.ADMIN),
    Route("/admin/bookings", "Bookings", AppRole.ADMIN),
    Route("/admin/restaurant", "Restaurant", AppRole.ADMIN),
    Route("/admin/events", "Events", AppRole.ADMIN),
    Route("/admin/services", "Services", AppRole.ADMIN),
    Route("/admin/pricing", "Pricing", AppRole.ADMIN),
    Route("/admin/users", "Users", AppRole.ADMIN),
    Route("/admin/reports", "Reports", AppRole.ADMIN),
    Route("/admin/setup", "Settings", AppRole.ADMIN),
    # Guest portal
    Route("/guest", "Dashboard", AppRole.GUEST),
    Route("/guest/bookings", "My Bookings", AppRole.GUEST),
    Route("/guest/book", "Book Room", AppRole.GUEST),
    Route("/guest/room-service", "Room Service", AppRole.GUEST),
    Route("/guest/events", "Events", AppRole.GUEST),
    Route("/guest/services", "Services", AppRole.GUEST),
    Route("/guest/digital-key", "Digital Key", AppRole.GUEST),
    Route("/guest/billing", "Billing", AppRole.GUEST),
    Route("/guest/profile", "Profile", AppRole.GUEST),
    Route("/guest/settings", "Settings", AppRole.GUEST),
]

ROUTES_BY_PATH: Dict[str, Route] = {route.path: route for route in ROUTES}

HOME_PATHS: Dict[AppRole, str] = {
    AppRole.ADMIN: "/admin/dashboard",
    AppRole.GUEST: "/guest",
}


def normalize_path(path: str) -> str:
    path = "/" + path.strip().strip("/")
    return path


def home_path(role: Optional[AppRole]) -> str:
    """Where a user lands when a page requires a role they do not hold"""
    return HOME_PATHS.get(role, "/")


def decide(
    path: str,
    authenticated: bool,
    role: Optional[AppRole] = None,
    role_timed_out: bool = False,
) -> AccessDecision:
    """
    Decide what the portal shows for ``path``.

    Public pages always render. Protected pages ask for sign-in when there
    is no session, ask for a retry when the role lookup stalled, redirect to
    the role's home page when the role differs from the one the page
    requires (exact match, no hierarchy), and render otherwise.
    """
    path = normalize_path(path)
    route = ROUTES_BY_PATH.get(path)

    if route is None:
        return AccessDecision(path, NOT_FOUND)

    if route.required_role is None:
        return AccessDecision(path, RENDER)

    if not authenticated:
        return AccessDecision(path, AUTHENTICATE, required_role=route.required_role)

    if role_timed_out:
        return AccessDecision(path, RETRY, required_role=route.required_role)

    if role != route.required_role:
        return AccessDecision(
            path,
            REDIRECT,
            redirect_to=home_path(role),
            required_role=route.required_role,
        )

    return AccessDecision(path, RENDER, required_role=route.required_role)


def navigation_for(role: Optional[AppRole]) -> List[Route]:
    """Protected pages a role may open, in menu order"""
    if role is None:
        return []
    return [route for route in ROUTES if route.required_role == role and route.path != "/admin"]
