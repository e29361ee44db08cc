import csv
import io
from datetime import datetime

from connext.models import UsageRecord
from connext.services.exports import USAGE_CSV_HEADERS, usage_csv


def test_create_list_and_delete(client, project, expert, finance_headers):
    payload = {
        "projectId": project.id,
        "expertId": expert.id,
        "callDate": "2024-12-01T16:00:00Z",
        "durationMinutes": 45,
        "creditsUsed": 0.75,
    }
    created = client.post("/api/usage", json=payload, headers=finance_headers)
    assert created.status_code == 201
    record_id = created.json()["id"]

    listed = client.get("/api/usage", headers=finance_headers)
    assert [r["id"] for r in listed.json()] == [record_id]

    assert client.delete(f"/api/usage/{record_id}", headers=finance_headers).status_code == 204
    assert client.delete(f"/api/usage/{record_id}", headers=finance_headers).status_code == 404


def test_usage_is_billing_only(client, ra_headers):
    assert client.get("/api/usage", headers=ra_headers).status_code == 403


def test_export_csv(client, db, project, expert, finance_headers):
    db.add(UsageRecord(
        project_id=project.id, expert_id=expert.id, call_date=datetime(2024, 12, 1, 16, 0),
        duration_minutes=61, credits_used=1.25, notes="Follow-up, part 2",
    ))
    db.commit()

    response = client.get("/api/usage/export", headers=finance_headers)
    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/csv")
    assert "usage-report-" in response.headers["content-disposition"]

    rows = list(csv.reader(io.StringIO(response.text)))
    assert rows[0] == ["Date", "Project", "Expert", "Duration (min)", "Credits Used", "Notes"]
    assert rows[1] == [
        "2024-12-01", "Battery Technology Market Analysis", "Dr. James Chen", "61", "1.25", "Follow-up, part 2",
    ]


def test_empty_export_has_only_the_header():
    rows = list(csv.reader(io.StringIO(usage_csv([]).decode("utf-8"))))
    assert rows == [USAGE_CSV_HEADERS]
