from datetime import datetime

from connext.models import CallRecord, UsageRecord
from connext.services import pipeline
from connext.services.exports import build_client_shortlist, client_shortlist_pdf


def _accept(db, assignment, vetting_question):
    pipeline.invite(db, assignment)
    return pipeline.accept(
        db, assignment,
        vq_answers=[{"questionId": vetting_question.id, "answer": "Twelve years"}],
        availability_note="Weekday mornings",
    )


def test_shortlist_includes_interested_experts(client, db, project, assignment, vetting_question, pm_headers):
    _accept(db, assignment, vetting_question)

    response = client.get(f"/api/projects/{project.id}/client-shortlist", headers=pm_headers)
    assert response.status_code == 200
    body = response.json()
    assert body["projectTitle"] == project.name
    assert body["totalExperts"] == 1
    [item] = body["experts"]
    assert item["profile"]["name"] == "Dr. James Chen"
    assert item["vettingAnswers"] == [{
        "questionId": vetting_question.id,
        "questionText": vetting_question.question,
        "answerText": "Twelve years",
    }]
    assert item["availability"] == {"note": "Weekday mornings"}


def test_shortlist_leaves_out_experts_who_have_not_answered(db, project, assignment):
    pipeline.invite(db, assignment)
    assert build_client_shortlist(db, project).total_experts == 0


def test_pdf_download(client, db, project, assignment, vetting_question, pm_headers):
    _accept(db, assignment, vetting_question)

    response = client.get(f"/api/projects/{project.id}/client-shortlist/pdf", headers=pm_headers)
    assert response.status_code == 200
    assert response.headers["content-type"] == "application/pdf"
    assert f"shortlist_project_{project.id}.pdf" in response.headers["content-disposition"]
    assert response.content.startswith(b"%PDF")


def test_empty_shortlist_still_renders(db, project):
    assert client_shortlist_pdf(build_client_shortlist(db, project)).startswith(b"%PDF")


def test_dashboard_stats(client, db, project, assignment, expert, ra_headers):
    pipeline.invite(db, assignment)
    db.add(CallRecord(
        project_id=project.id, expert_id=expert.id, status="completed",
        actual_duration_minutes=61, cu_used=1.25, completed_at=datetime(2024, 12, 1, 17, 0),
    ))
    db.add(UsageRecord(
        project_id=project.id, expert_id=expert.id, call_date=datetime(2024, 12, 1),
        duration_minutes=61, credits_used=1.25,
    ))
    db.commit()

    response = client.get("/api/dashboard/stats", headers=ra_headers)
    assert response.status_code == 200
    body = response.json()
    assert body["totalProjects"] == 1
    assert body["projectsByStatus"] == {"new": 1}
    assert body["totalExperts"] == 1
    assert body["expertsByIndustry"] == {"Energy": 1}
    assert body["pendingInvitations"] == 1
    assert body["completedCalls"] == 1
    assert body["totalCallMinutes"] == 61
    assert body["totalCuUsed"] == 1.25
    assert body["totalUsageCredits"] == 1.25
    assert [p["id"] for p in body["recentProjects"]] == [project.id]
