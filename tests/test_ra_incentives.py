from datetime import datetime

import pytest

from connext.models import CallRecord, Expert, User, UserRole
from connext.services.ra_incentives import compute_ra_incentive, is_eligible_call

SOURCED_AT = datetime(2024, 1, 10)


def _call(expert_id, when, status="completed", **kwargs):
    return CallRecord(expert_id=expert_id, project_id=1, call_date=when, status=status, **kwargs)


@pytest.fixture
def ra_user():
    return User(id=7, email="ra@mirae.com", full_name="Rita Recruiter", role=UserRole.RA)


@pytest.fixture
def sourced_experts():
    return [
        Expert(id=1, name="Expert One", sourced_at=SOURCED_AT),
        Expert(id=2, name="Expert Two", sourced_at=SOURCED_AT),
        Expert(id=3, name="Expert Three", sourced_at=SOURCED_AT),
    ]


def test_window_bounds_are_inclusive():
    assert is_eligible_call(_call(1, SOURCED_AT), SOURCED_AT, window_days=90)
    assert is_eligible_call(_call(1, datetime(2024, 4, 9)), SOURCED_AT, window_days=90)
    assert not is_eligible_call(_call(1, datetime(2024, 4, 9, 0, 1)), SOURCED_AT, window_days=90)
    assert not is_eligible_call(_call(1, datetime(2024, 1, 9)), SOURCED_AT, window_days=90)


def test_only_completed_calls_count():
    assert not is_eligible_call(_call(1, datetime(2024, 2, 1), status="scheduled"), SOURCED_AT)
    assert not is_eligible_call(_call(1, datetime(2024, 2, 1)), None)


def test_completed_at_is_the_fallback_date():
    call = _call(1, None, completed_at=datetime(2024, 2, 1))
    assert is_eligible_call(call, SOURCED_AT)
    assert not is_eligible_call(_call(1, None), SOURCED_AT)


def test_reporting_period_is_inclusive():
    call = _call(1, datetime(2024, 2, 1, 12, 0))
    assert is_eligible_call(call, SOURCED_AT, from_date=datetime(2024, 2, 1, 12, 0))
    assert is_eligible_call(call, SOURCED_AT, to_date=datetime(2024, 2, 1, 12, 0))
    assert not is_eligible_call(call, SOURCED_AT, from_date=datetime(2024, 2, 2))


def test_totals_add_up(ra_user, sourced_experts):
    calls = {
        1: [_call(1, datetime(2024, 2, 1)), _call(1, datetime(2024, 3, 1)), _call(1, datetime(2024, 6, 1))],
        2: [_call(2, datetime(2024, 2, 15)), _call(2, datetime(2024, 2, 20), status="cancelled")],
    }
    result = compute_ra_incentive(ra_user, sourced_experts, calls, per_call_brl=100.0, window_days=90)

    assert result.total_recruited_experts == 3
    assert result.experts_with_completed_calls == 2
    assert result.total_eligible_calls == 3
    assert result.total_incentive_brl == 300.0
    assert [e.expert_id for e in result.eligible_experts] == [1, 2]
    assert sum(e.incentive_brl for e in result.eligible_experts) == result.total_incentive_brl


def test_completed_call_outside_the_window_is_not_counted(ra_user, sourced_experts):
    calls = {3: [_call(3, datetime(2024, 9, 1))]}
    result = compute_ra_incentive(ra_user, sourced_experts, calls, per_call_brl=100.0, window_days=90)

    assert result.total_eligible_calls == 0
    assert result.experts_with_completed_calls == 0
    assert result.eligible_experts == []


def test_completed_call_outside_the_reporting_period_is_not_counted(ra_user, sourced_experts):
    calls = {1: [_call(1, datetime(2024, 2, 1))]}
    result = compute_ra_incentive(
        ra_user, sourced_experts, calls,
        from_date=datetime(2024, 3, 1), to_date=datetime(2024, 3, 31), per_call_brl=100.0,
    )

    assert result.experts_with_completed_calls == 0
    assert result.total_incentive_brl == 0


def test_ra_without_experts(ra_user):
    result = compute_ra_incentive(ra_user, [], {}, per_call_brl=100.0)
    assert result.total_recruited_experts == 0
    assert result.total_incentive_brl == 0


# API level

@pytest.fixture
def sourced_call(db, ra, project):
    expert = Expert(
        name="Sourced Expert", email="sourced@email.com", expertise="Grid storage",
        industry="Energy", sourced_by_ra_id=ra.id, sourced_at=datetime(2024, 1, 10),
    )
    db.add(expert)
    db.flush()
    db.add(CallRecord(
        project_id=project.id, expert_id=expert.id, status="completed",
        call_date=datetime(2024, 2, 1, 15, 30), cu_used=1,
    ))
    db.commit()
    return expert


def test_list_incentives(client, sourced_call, ra, finance_headers):
    response = client.get("/api/ra-incentives", headers=finance_headers)
    assert response.status_code == 200
    body = response.json()
    assert body["incentivePerCallBRL"] == 100.0
    assert body["eligibilityWindowDays"] == 90
    [summary] = body["summaries"]
    assert summary["raId"] == ra.id
    assert summary["totalEligibleCalls"] == 1
    assert summary["totalIncentiveBRL"] == 100.0


def test_to_date_at_midnight_covers_the_day(client, sourced_call, ra, admin_headers):
    response = client.get(
        f"/api/ra-incentives/{ra.id}",
        params={"fromDate": "2024-02-01T00:00:00", "toDate": "2024-02-01T00:00:00"},
        headers=admin_headers,
    )
    assert response.status_code == 200
    body = response.json()
    assert body["totalEligibleCalls"] == 1
    assert body["eligibleExperts"][0]["expertName"] == "Sourced Expert"


def test_period_outside_call(client, sourced_call, ra, admin_headers):
    response = client.get(
        f"/api/ra-incentives/{ra.id}", params={"fromDate": "2024-03-01T00:00:00"}, headers=admin_headers
    )
    assert response.json()["totalEligibleCalls"] == 0


def test_ra_sees_only_own_detail(client, db, ra, ra_headers):
    assert client.get(f"/api/ra-incentives/{ra.id}", headers=ra_headers).status_code == 200
    other = User(email="other.ra@mirae.com", full_name="Other RA", role=UserRole.RA)
    db.add(other)
    db.commit()
    assert client.get(f"/api/ra-incentives/{other.id}", headers=ra_headers).status_code == 403
    assert client.get("/api/ra-incentives", headers=ra_headers).status_code == 403


def test_detail_for_non_ra_is_not_found(client, pm, admin_headers):
    assert client.get(f"/api/ra-incentives/{pm.id}", headers=admin_headers).status_code == 404
