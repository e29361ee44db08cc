from connext.models import Expert, ProjectActivity


def test_create_project_records_the_creating_pm(client, db, pm, pm_headers):
    response = client.post(
        "/api/projects",
        json={"name": "Grid Storage Outlook", "industry": "Energy", "clientName": "McKinsey & Company"},
        headers=pm_headers,
    )
    assert response.status_code == 201
    body = response.json()
    assert body["status"] == "new"
    assert body["createdByPmId"] == pm.id
    assert body["totalCuUsed"] == 0

    activity = db.query(ProjectActivity).filter(ProjectActivity.project_id == body["id"]).one()
    assert activity.activity_type == "project_created"


def test_ra_cannot_create_projects(client, ra_headers):
    response = client.post(
        "/api/projects",
        json={"name": "Grid Storage Outlook", "industry": "Energy", "clientName": "McKinsey"},
        headers=ra_headers,
    )
    assert response.status_code == 403


def test_unknown_client_organization_is_rejected(client, pm_headers):
    response = client.post(
        "/api/projects",
        json={"name": "X", "industry": "Energy", "clientName": "Nobody", "clientOrganizationId": 999},
        headers=pm_headers,
    )
    assert response.status_code == 400


def test_status_change_is_logged(client, db, project, ra_headers):
    response = client.patch(f"/api/projects/{project.id}", json={"status": "sourcing"}, headers=ra_headers)
    assert response.status_code == 200
    assert response.json()["status"] == "sourcing"

    activities = client.get(f"/api/projects/{project.id}/activities", headers=ra_headers).json()
    assert activities[0]["activityType"] == "project_status_changed"
    assert activities[0]["details"] == {"from": "new", "to": "sourcing"}


def test_missing_project_is_404(client, pm_headers):
    assert client.get("/api/projects/999", headers=pm_headers).status_code == 404


def test_detail_counts_assignments_by_status(client, project, assignment, vetting_question, pm_headers):
    client.post(f"/api/project-experts/{assignment.id}/invite", headers=pm_headers)

    response = client.get(f"/api/projects/{project.id}/detail", headers=pm_headers)
    assert response.status_code == 200
    body = response.json()
    assert body["pipelineCounts"] == {"invited": 1}
    assert [q["id"] for q in body["vettingQuestions"]] == [vetting_question.id]
    assert body["projectExperts"][0]["expertId"] == assignment.expert_id


def test_bulk_assign_skips_unknown_and_existing(client, db, project, assignment, expert, pm_headers):
    other = Expert(name="Dr. Sarah Kim", email="sarah.kim@email.com", expertise="Medical AI", industry="Healthcare")
    db.add(other)
    db.commit()

    response = client.post(
        f"/api/projects/{project.id}/experts/bulk",
        json={"expertIds": [expert.id, other.id, other.id, 999]},
        headers=pm_headers,
    )
    assert response.status_code == 200
    assert response.json() == {"created": [other.id], "skipped": [expert.id, 999]}


def test_send_invitations_only_invites_assigned_experts(client, db, project, assignment, pm_headers):
    first = client.post(f"/api/projects/{project.id}/invitations/send", json={}, headers=pm_headers)
    assert first.json() == {"invited": [assignment.id], "skipped": []}

    db.refresh(assignment)
    assert assignment.status == "invited"
    assert assignment.invitation_token

    again = client.post(f"/api/projects/{project.id}/invitations/send", json={}, headers=pm_headers)
    assert again.json() == {"invited": [], "skipped": [assignment.id]}


def test_ra_invite_link_credits_the_requesting_ra(client, project, ra, ra_headers):
    response = client.post(f"/api/projects/{project.id}/ra-invite-link", headers=ra_headers)
    assert response.status_code == 201
    body = response.json()
    assert body["inviteType"] == "ra"
    assert body["raId"] == ra.id
    assert f"/invite/{project.id}/ra/" in body["invitationUrl"]


def test_expert_create_and_duplicate_email(client, pm_headers):
    payload = {
        "name": "Emily Zhang", "email": "emily.zhang@email.com",
        "expertise": "Digital Payments", "industry": "Finance",
    }
    created = client.post("/api/experts", json=payload, headers=pm_headers)
    assert created.status_code == 201
    assert created.json()["sourcedByRaId"] is None

    duplicate = client.post("/api/experts", json={**payload, "email": "Emily.Zhang@email.com"}, headers=pm_headers)
    assert duplicate.status_code == 400


def test_expert_added_by_ra_is_credited(client, ra, ra_headers):
    response = client.post(
        "/api/experts",
        json={"name": "Michael Wong", "email": "michael.wong@email.com",
              "expertise": "Semiconductor Manufacturing", "industry": "Technology"},
        headers=ra_headers,
    )
    body = response.json()
    assert body["sourcedByRaId"] == ra.id
    assert body["sourcedAt"] is not None
    assert body["recruitedBy"] == ra.email


def test_expert_search(client, expert, pm_headers):
    hits = client.get("/api/experts/search", params={"q": "battery"}, headers=pm_headers).json()
    assert [e["id"] for e in hits] == [expert.id]
    assert client.get("/api/experts/search", params={"industry": "Finance"}, headers=pm_headers).json() == []


def test_organizations_and_pocs(client, project, pm_headers, finance_headers):
    org = client.post(
        "/api/client-organizations", json={"name": "JPMorgan Chase", "industry": "Finance"}, headers=pm_headers
    )
    assert org.status_code == 201
    org_id = org.json()["id"]
    assert org.json()["totalCuUsed"] == 0

    poc = client.post(
        "/api/client-pocs",
        json={"organizationId": org_id, "name": "Robert Johnson", "email": "robert.johnson@jpmorgan.com"},
        headers=pm_headers,
    )
    assert poc.status_code == 201

    pocs = client.get(f"/api/client-organizations/{org_id}/pocs", headers=finance_headers).json()
    assert [p["name"] for p in pocs] == ["Robert Johnson"]

    client.patch(f"/api/projects/{project.id}", json={"clientOrganizationId": org_id}, headers=pm_headers)
    projects = client.get(f"/api/client-organizations/{org_id}/projects", headers=pm_headers).json()
    assert [p["id"] for p in projects] == [project.id]

    assert client.post(
        "/api/client-organizations", json={"name": "Other"}, headers=finance_headers
    ).status_code == 403
