import pytest

from connext.models import CallRecord, ClientOrganization, Expert
from connext.services import pipeline


@pytest.fixture
def organization(db, project):
    organization = ClientOrganization(name="McKinsey & Company", industry="Consulting")
    db.add(organization)
    db.flush()
    project.client_organization_id = organization.id
    db.commit()
    return organization


@pytest.fixture
def selected_assignment(db, assignment):
    pipeline.invite(db, assignment)
    pipeline.accept(db, assignment)
    pipeline.select_for_client(db, assignment)
    return assignment


@pytest.fixture
def call(db, selected_assignment):
    call = CallRecord(
        project_expert_id=selected_assignment.id,
        project_id=selected_assignment.project_id,
        expert_id=selected_assignment.expert_id,
    )
    db.add(call)
    db.commit()
    db.refresh(call)
    return call


def test_schedule_then_complete_bills_credit_units(client, db, call, selected_assignment, organization, pm_headers):
    scheduled = client.post(
        f"/api/call-records/{call.id}/schedule",
        json={"scheduledStartTime": "2024-12-02T14:00:00Z", "scheduledEndTime": "2024-12-02T15:00:00Z"},
        headers=pm_headers,
    )
    assert scheduled.status_code == 200
    assert scheduled.json()["status"] == "scheduled"
    db.refresh(selected_assignment)
    assert selected_assignment.status == "scheduled"

    completed = client.post(
        f"/api/call-records/{call.id}/complete", json={"actualDurationMinutes": 61}, headers=pm_headers
    )
    assert completed.status_code == 200
    body = completed.json()
    assert body["status"] == "completed"
    assert body["cuUsed"] == 1.25
    assert body["actualDurationMinutes"] == 61

    db.refresh(selected_assignment)
    assert selected_assignment.status == "completed"
    db.refresh(organization)
    assert float(organization.total_cu_used) == 1.25
    assert float(organization.projects[0].total_cu_used) == 1.25


def test_completed_call_cannot_be_completed_again(client, call, pm_headers):
    first = client.post(f"/api/call-records/{call.id}/complete", json={"actualDurationMinutes": 30}, headers=pm_headers)
    assert first.json()["cuUsed"] == 0.5
    second = client.post(f"/api/call-records/{call.id}/complete", json={"actualDurationMinutes": 30}, headers=pm_headers)
    assert second.status_code == 409


def test_schedule_rejects_inverted_times(client, call, pm_headers):
    response = client.post(
        f"/api/call-records/{call.id}/schedule",
        json={"scheduledStartTime": "2024-12-02T15:00:00Z", "scheduledEndTime": "2024-12-02T14:00:00Z"},
        headers=pm_headers,
    )
    assert response.status_code == 400


def test_cancel_and_no_show(client, db, call, pm_headers):
    cancelled = client.post(f"/api/call-records/{call.id}/cancel", json={"reason": "Client rescheduled"}, headers=pm_headers)
    assert cancelled.json()["status"] == "cancelled"
    assert client.post(f"/api/call-records/{call.id}/no-show", headers=pm_headers).status_code == 409


def test_create_rejects_mismatched_assignment(client, db, call, project, pm_headers):
    other = Expert(name="Dr. Sarah Kim", email="sarah.kim@email.com", expertise="Medical AI", industry="Healthcare")
    db.add(other)
    db.commit()
    response = client.post(
        "/api/call-records",
        json={"projectId": project.id, "expertId": other.id, "projectExpertId": call.project_expert_id},
        headers=pm_headers,
    )
    assert response.status_code == 400


def test_list_filters_by_project(client, call, project, finance_headers):
    response = client.get("/api/call-records", params={"projectId": project.id}, headers=finance_headers)
    assert [c["id"] for c in response.json()] == [call.id]
    assert client.get("/api/call-records", params={"projectId": 999}, headers=finance_headers).json() == []
