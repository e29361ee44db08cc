import pytest

from connext.core.permissions import (
    PAGES, can_access_page, can_access_route, get_allowed_pages, normalize_role,
)
from connext.models.user import UserRole


def test_admin_sees_every_page():
    assert get_allowed_pages("admin") == PAGES


@pytest.mark.parametrize("raw, expected", [
    ("Research Associate", "ra"),
    ("Project Manager", "pm"),
    ("  ADMIN ", "admin"),
    (UserRole.FINANCE, "finance"),
    ("intern", None),
    (None, None),
])
def test_normalize_role(raw, expected):
    assert normalize_role(raw) == expected


def test_unknown_role_has_no_pages():
    assert get_allowed_pages("intern") == []
    assert not can_access_page("intern", "dashboard")


def test_finance_pages():
    assert can_access_page("finance", "usage")
    assert can_access_page("finance", "analytics")
    assert not can_access_page("finance", "experts")
    assert not can_access_page("finance", "projects")


def test_ra_cannot_open_admin_pages():
    assert not can_access_route("Research Associate", "/employees")
    assert not can_access_route("ra", "/analytics")
    assert can_access_route("ra", "/projects/42")


def test_route_checks_use_the_first_segment():
    assert not can_access_route("finance", "/experts/7/profile")
    assert can_access_route("finance", "usage")
    assert can_access_route("finance", "/")


def test_unknown_routes_are_open():
    assert can_access_route("finance", "/expert-invite/abc")
    assert can_access_route("ra", "/change-password")


def test_me_returns_allowed_pages(client, ra_headers):
    response = client.get("/api/auth/me", headers=ra_headers)
    assert response.status_code == 200
    body = response.json()
    assert body["role"] == "ra"
    assert "employees" not in body["allowedPages"]
    assert "consultations" in body["allowedPages"]


def test_staff_routes_reject_finance(client, finance_headers):
    response = client.get("/api/experts", headers=finance_headers)
    assert response.status_code == 403


def test_employee_admin_is_admin_only(client, pm_headers):
    response = client.get("/api/employees", headers=pm_headers)
    assert response.status_code == 403
