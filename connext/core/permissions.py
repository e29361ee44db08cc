from typing import List, Optional

PAGES = [
    "dashboard",
    "projects",
    "experts",
    "clients",
    "insight-hub",
    "consultations",
    "usage",
    "analytics",
    "employees",
    "settings",
]

ROLE_PERMISSIONS = {
    "admin": list(PAGES),
    "pm": ["dashboard", "projects", "experts", "clients", "insight-hub", "consultations", "usage"],
    "ra": ["dashboard", "projects", "experts", "clients", "insight-hub", "consultations"],
    "finance": ["dashboard", "clients", "usage", "analytics"],
}

PAGE_TO_ROUTE = {page: ("/" if page == "dashboard" else f"/{page}") for page in PAGES}
ROUTE_TO_PAGE = {route: page for page, route in PAGE_TO_ROUTE.items()}

ROLE_ALIASES = {
    "ra": "ra",
    "research associate": "ra",
    "pm": "pm",
    "project manager": "pm",
    "admin": "admin",
    "administrator": "admin",
    "finance": "finance",
}


def normalize_role(role) -> Optional[str]:
    """Map a stored role name (enum or free text) to one of admin, pm, ra, finance"""
    if role is None:
        return None
    value = getattr(role, "value", role)
    if not value:
        return None
    return ROLE_ALIASES.get(str(value).strip().lower())


def get_allowed_pages(role) -> List[str]:
    normalized = normalize_role(role)
    if not normalized:
        return []
    return list(ROLE_PERMISSIONS.get(normalized, []))


def can_access_page(role, page: str) -> bool:
    return page in get_allowed_pages(role)


def can_access_route(role, route: str) -> bool:
    """Check a client route by its first path segment. Routes outside the page table are open."""
    if not route.startswith("/"):
        route = f"/{route}"
    segments = route.split("/")
    base_path = "/".join(segments[:2]) or "/"
    page = ROUTE_TO_PAGE.get(base_path)
    if page is None:
        return True
    return can_access_page(role, page)
