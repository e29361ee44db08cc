from datetime import timedelta

from connext import crud
from connext.core.utils import utcnow
from connext.models import Expert, ExpertInvitationLink, ProjectExpert
from connext.services import invitation_links as links
from connext.services import pipeline


def _invite(db, assignment) -> str:
    return pipeline.invite(db, assignment).invitation_token


# Per-assignment invitation tokens

def test_view_marks_invitation_opened(client, db, assignment, vetting_question):
    token = _invite(db, assignment)
    response = client.get(f"/api/expert-invite/{token}")
    assert response.status_code == 200
    body = response.json()
    assert body["invitationStatus"] == "opened"
    assert body["project"]["name"] == "Battery Technology Market Analysis"
    assert [q["id"] for q in body["vettingQuestions"]] == [vetting_question.id]


def test_accept_once_then_used(client, db, assignment, vetting_question):
    token = _invite(db, assignment)
    payload = {
        "vqAnswers": [{"questionId": vetting_question.id, "answer": "Twelve years"}],
        "availabilityNote": "Weekday mornings",
    }
    response = client.post(f"/api/expert-invite/{token}/accept", json=payload)
    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "accepted"
    assert body["invitationStatus"] == "accepted"
    assert body["pipelineStatus"] == "interested"
    assert body["respondedAt"] is not None

    again = client.post(f"/api/expert-invite/{token}/accept", json=payload)
    assert again.status_code == 409
    assert again.json()["reason"] == "usedLink"

    decline = client.post(f"/api/expert-invite/{token}/decline", json={})
    assert decline.status_code == 409
    assert decline.json()["reason"] == "usedLink"

    db.refresh(assignment)
    assert assignment.vq_answers == [{"questionId": vetting_question.id, "answer": "Twelve years"}]
    assert assignment.availability_note == "Weekday mornings"


def test_accept_requires_required_answers(client, db, assignment, vetting_question):
    token = _invite(db, assignment)
    response = client.post(f"/api/expert-invite/{token}/accept", json={"vqAnswers": []})
    assert response.status_code == 400

    # Token is still usable after a rejected submission
    assert client.get(f"/api/expert-invite/{token}").status_code == 200


def test_decline_once(client, db, assignment):
    token = _invite(db, assignment)
    response = client.post(f"/api/expert-invite/{token}/decline", json={"reason": "Too busy"})
    assert response.status_code == 200
    assert response.json()["status"] == "declined"
    assert response.json()["invitationStatus"] == "declined"

    db.refresh(assignment)
    assert assignment.decline_reason == "Too busy"
    assert client.get(f"/api/expert-invite/{token}").json()["reason"] == "usedLink"


def test_unknown_token_is_invalid(client):
    response = client.get("/api/expert-invite/does-not-exist")
    assert response.status_code == 404
    assert response.json()["reason"] == "invalidLink"


def test_expired_token(client, db, assignment):
    token = _invite(db, assignment)
    link = db.query(ExpertInvitationLink).filter_by(token=token).one()
    link.expires_at = utcnow() - timedelta(minutes=1)
    db.commit()

    response = client.post(f"/api/expert-invite/{token}/accept", json={})
    assert response.status_code == 410
    assert response.json()["reason"] == "expiredLink"


def test_deactivated_link_is_invalid(client, db, assignment, pm_headers):
    token = _invite(db, assignment)
    link = db.query(ExpertInvitationLink).filter_by(token=token).one()
    link.is_active = False
    db.commit()

    for response in (
        client.get(f"/api/expert-invite/{token}"),
        client.get(f"/api/invitation-links/{token}"),
    ):
        assert response.status_code == 404
        assert response.json()["reason"] == "invalidLink"

    db.refresh(assignment)
    assert assignment.invitation_status == "invited"


def test_token_only_on_assignment_still_resolves(client, db, assignment):
    assignment.status = "invited"
    assignment.invitation_status = "invited"
    assignment.invitation_token = "legacy-token"
    db.commit()

    response = client.post("/api/expert-invite/legacy-token/decline", json={})
    assert response.status_code == 200
    assert client.post("/api/expert-invite/legacy-token/decline", json={}).status_code == 409


def test_claim_is_single_winner(db, assignment):
    token = _invite(db, assignment)
    links.claim_invitation(db, token)
    db.commit()
    assert not crud.invitation_link.claim_assignment_response(db, project_expert_id=assignment.id)


# Quick invite

def test_quick_invite_decision_flow(client, db, project, expert, vetting_question, pm_headers):
    response = client.post(
        f"/api/projects/{project.id}/quick-invite", json={"expertId": expert.id}, headers=pm_headers
    )
    assert response.status_code == 200
    body = response.json()
    token = body["assignment"]["invitationToken"]
    assert body["invitationUrl"] == f"http://frontend.test/quick-invite/{token}/decision"

    # Asking again reuses the open invitation
    repeat = client.post(
        f"/api/projects/{project.id}/quick-invite", json={"expertId": expert.id}, headers=pm_headers
    )
    assert repeat.json()["assignment"]["invitationToken"] == token

    assert client.get(f"/api/quick-invite/{token}/decision").status_code == 200
    decided = client.post(
        f"/api/quick-invite/{token}/decide",
        json={"decision": "accepted", "sampleAnswers": {str(vetting_question.id): "Ten years"}},
    )
    assert decided.status_code == 200
    assert decided.json()["pipelineStatus"] == "interested"

    after = client.post(
        f"/api/projects/{project.id}/quick-invite", json={"expertId": expert.id}, headers=pm_headers
    )
    assert after.status_code == 409


def test_quick_invite_rejects_unknown_decision(client, db, assignment):
    token = _invite(db, assignment)
    response = client.post(f"/api/quick-invite/{token}/decide", json={"decision": "maybe"})
    assert response.status_code == 422


# Registration links

def test_general_link_registration(client, db, admin_headers):
    created = client.post("/api/invitation-links", json={"inviteType": "general"}, headers=admin_headers)
    assert created.status_code == 201
    token = created.json()["token"]
    assert created.json()["invitationUrl"] == f"http://frontend.test/register/{token}"

    registration = {
        "name": "Ana Souza",
        "email": "ana.souza@email.com",
        "expertise": "Payments",
        "industry": "Finance",
        "termsAccepted": True,
    }
    response = client.post(f"/api/register-expert/{token}", json=registration)
    assert response.status_code == 201
    assert response.json()["email"] == "ana.souza@email.com"

    again = client.post(
        f"/api/register-expert/{token}", json={**registration, "email": "other@email.com"}
    )
    assert again.status_code == 409
    assert again.json()["reason"] == "usedLink"


def test_ra_link_onboarding_credits_recruiter(client, db, project, vetting_question, ra, ra_headers):
    created = client.post(f"/api/projects/{project.id}/ra-invite-link", headers=ra_headers)
    assert created.status_code == 201
    token = created.json()["token"]
    assert created.json()["invitationUrl"] == f"http://frontend.test/invite/{project.id}/ra/{token}"

    landing = client.get(f"/api/invite/{project.id}/ra/{token}")
    assert landing.status_code == 200
    assert landing.json()["recruitedByRaId"] == ra.id

    submission = {
        "name": "Bruno Lima",
        "email": "bruno.lima@email.com",
        "expertise": "Battery recycling",
        "industry": "Energy",
        "vqAnswers": [{"questionId": vetting_question.id, "answer": "Eight years"}],
    }
    response = client.post(f"/api/invite/{project.id}/ra/{token}/submit", json=submission)
    assert response.status_code == 201

    expert = db.query(Expert).filter_by(email="bruno.lima@email.com").one()
    assert expert.sourced_by_ra_id == ra.id
    assert expert.sourced_at is not None
    assignment = db.query(ProjectExpert).filter_by(expert_id=expert.id).one()
    assert assignment.pipeline_status == "interested"


def test_onboarding_link_must_match_its_url(client, db, project, ra_headers):
    token = client.post(f"/api/projects/{project.id}/ra-invite-link", headers=ra_headers).json()["token"]
    response = client.get(f"/api/invite/{project.id}/general/{token}")
    assert response.status_code == 404
    assert response.json()["reason"] == "invalidLink"


def test_assignment_token_cannot_register(client, db, assignment):
    token = _invite(db, assignment)
    response = client.post(
        f"/api/register-expert/{token}",
        json={"name": "X", "email": "x@email.com", "expertise": "Y", "industry": "Z"},
    )
    assert response.status_code == 404
