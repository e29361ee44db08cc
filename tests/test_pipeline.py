import pytest

from connext.models import ExpertInvitationLink, ProjectActivity
from connext.services import pipeline
from connext.services.pipeline import AssignmentConflict


def test_allowed_transitions():
    assert pipeline.can_transition("assigned", "invited")
    assert pipeline.can_transition("invited", "declined")
    assert pipeline.can_transition("accepted", "client_selected")
    assert not pipeline.can_transition("assigned", "accepted")
    assert not pipeline.can_transition("completed", "scheduled")
    assert not pipeline.can_transition("invited", "invited")


def test_full_happy_path(db, assignment):
    pipeline.invite(db, assignment)
    assert assignment.status == "invited"
    assert assignment.invitation_status == "invited"
    assert len(assignment.invitation_token) == 64
    assert assignment.invited_at is not None

    pipeline.accept(db, assignment, vq_answers=[{"questionId": 1, "answer": "Ten years"}])
    assert assignment.status == "accepted"
    assert assignment.pipeline_status == "interested"
    assert assignment.responded_at is not None

    pipeline.select_for_client(db, assignment)
    assert assignment.pipeline_status == "shortlisted"
    assert assignment.selected_at is not None

    pipeline.schedule(db, assignment)
    assert assignment.status == "scheduled"
    assert assignment.pipeline_status == "accepted"

    pipeline.complete(db, assignment)
    assert assignment.status == "completed"
    assert assignment.pipeline_status == "completed"
    assert assignment.completed_at is not None

    activity_types = [a.activity_type for a in db.query(ProjectActivity).order_by(ProjectActivity.id)]
    assert activity_types == [
        "expert_invited", "expert_accepted", "expert_selected", "call_scheduled", "call_completed",
    ]


def test_invite_records_matching_link(db, assignment):
    pipeline.invite(db, assignment)
    link = db.query(ExpertInvitationLink).one()
    assert link.token == assignment.invitation_token
    assert link.invite_type == "existing"
    assert link.project_expert_id == assignment.id
    assert link.expires_at > assignment.invited_at


def test_skipping_a_step_is_a_conflict(db, assignment):
    with pytest.raises(AssignmentConflict) as exc_info:
        pipeline.select_for_client(db, assignment)
    assert exc_info.value.current == "assigned"
    assert exc_info.value.target == "client_selected"
    assert assignment.status == "assigned"


def test_reapplying_current_status_is_a_conflict(db, assignment):
    pipeline.invite(db, assignment)
    with pytest.raises(AssignmentConflict):
        pipeline.invite(db, assignment)


def test_decline_after_accept_keeps_invitation_answer(db, assignment):
    pipeline.invite(db, assignment)
    pipeline.accept(db, assignment)
    pipeline.decline(db, assignment, reason="Conflict of interest")
    assert assignment.status == "declined"
    assert assignment.invitation_status == "accepted"
    assert assignment.pipeline_status == "declined"
    assert assignment.decline_reason == "Conflict of interest"


def test_mark_opened_only_once(db, assignment):
    pipeline.invite(db, assignment)
    pipeline.mark_opened(db, assignment)
    first_open = assignment.opened_at
    assert assignment.invitation_status == "opened"

    pipeline.mark_opened(db, assignment)
    assert assignment.opened_at == first_open


def test_apply_status_cannot_go_back_to_assigned(db, assignment):
    pipeline.invite(db, assignment)
    with pytest.raises(AssignmentConflict):
        pipeline.apply_status(db, assignment, "assigned")


def test_missing_required_answers(db, vetting_question):
    questions = [vetting_question]
    assert pipeline.missing_required_answers(questions, []) == [vetting_question.id]
    assert pipeline.missing_required_answers(
        questions, [{"questionId": vetting_question.id, "answer": "  "}]
    ) == [vetting_question.id]
    assert pipeline.missing_required_answers(
        questions, [{"questionId": vetting_question.id, "answer": "Twelve years"}]
    ) == []


# API level

def test_patch_status_follows_transition_rules(client, assignment, pm_headers):
    response = client.patch(
        f"/api/project-experts/{assignment.id}", json={"status": "completed"}, headers=pm_headers
    )
    assert response.status_code == 409
    body = response.json()
    assert body["currentStatus"] == "assigned"
    assert body["requestedStatus"] == "completed"


def test_rejected_patch_leaves_the_assignment_untouched(client, db, assignment, pm_headers):
    response = client.patch(
        f"/api/project-experts/{assignment.id}",
        json={"notes": "Strong on cell chemistry", "status": "completed"},
        headers=pm_headers,
    )
    assert response.status_code == 409

    db.expire_all()
    db.refresh(assignment)
    assert assignment.notes is None
    assert assignment.status == "assigned"


def test_patch_with_legal_status_saves_notes_too(client, db, assignment, pm_headers):
    response = client.patch(
        f"/api/project-experts/{assignment.id}",
        json={"notes": "Strong on cell chemistry", "status": "invited"},
        headers=pm_headers,
    )
    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "invited"
    assert body["notes"] == "Strong on cell chemistry"


def test_staff_record_acceptance(client, db, assignment, vetting_question, pm_headers):
    pipeline.invite(db, assignment)
    response = client.post(
        f"/api/project-experts/{assignment.id}/accept",
        json={"vqAnswers": [{"questionId": vetting_question.id, "answer": "Ten years"}],
              "availabilityNote": "Fridays"},
        headers=pm_headers,
    )
    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "accepted"
    assert body["pipelineStatus"] == "interested"
    assert body["availabilityNote"] == "Fridays"

    # The expert's own link is spent once staff have answered for them
    token = assignment.invitation_token
    assert client.get(f"/api/expert-invite/{token}").status_code == 409


def test_staff_record_decline(client, db, assignment, pm_headers):
    pipeline.invite(db, assignment)
    response = client.post(
        f"/api/project-experts/{assignment.id}/decline", json={"reason": "Conflict of interest"}, headers=pm_headers
    )
    assert response.status_code == 200
    assert response.json()["status"] == "declined"
    db.refresh(assignment)
    assert assignment.decline_reason == "Conflict of interest"


def test_staff_accept_before_invite_is_a_conflict(client, assignment, pm_headers):
    response = client.post(f"/api/project-experts/{assignment.id}/accept", json={}, headers=pm_headers)
    assert response.status_code == 409
    assert response.json()["currentStatus"] == "assigned"


def test_invite_endpoint_returns_expert_invite_url(client, assignment, pm_headers):
    response = client.post(f"/api/project-experts/{assignment.id}/invite", headers=pm_headers)
    assert response.status_code == 200
    body = response.json()
    token = body["assignment"]["invitationToken"]
    assert body["invitationUrl"] == f"http://frontend.test/expert-invite/{token}"
    assert body["assignment"]["status"] == "invited"


def test_duplicate_assignment_is_rejected(client, assignment, pm_headers):
    response = client.post(
        "/api/project-experts",
        json={"projectId": assignment.project_id, "expertId": assignment.expert_id},
        headers=pm_headers,
    )
    assert response.status_code == 409
