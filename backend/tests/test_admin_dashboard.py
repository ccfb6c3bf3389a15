def test_dashboard_statistics(client):
    response = client.get("/admin/dashboard")
    assert response.status_code == 200
    payload = response.json()

    assert payload["students"] == {
        "total": 12,
        "active": 4,
        "on_leave": 1,
        "dropout": 1,
        "alumni": 6,
    }
    assert payload["tracer"] == {
        "total_alumni": 6,
        "responded": 6,
        "response_rate": 100.0,
        "working": 3,
        "searching": 1,
        "entrepreneur": 2,
        "studying": 1,
    }
    assert payload["achievements"]["total"] == 6
    assert payload["achievements"]["verified"] == 4
    assert payload["achievements"]["pending"] == 2
    assert payload["achievements"]["by_category"]["event_participation"] == 3

    assert [point["value"] for point in payload["career_chart"]] == [3, 2, 1, 1]
    assert [point["name"] for point in payload["industry_distribution"]] == [
        "Banking & Finance",
        "Retail & E-Commerce",
        "State-Owned Enterprise",
    ]
    assert payload["achievement_categories"][0] == {
        "name": "Event participation",
        "value": 3,
        "color": None,
    }

    trend = {row["year"]: row for row in payload["graduate_trend"]}
    assert trend["2023"] == {"year": "2023", "working": 1, "entrepreneur": 2, "studying": 0}
    assert trend["2024"] == {"year": "2024", "working": 1, "entrepreneur": 0, "studying": 1}


def test_dashboard_skips_students_with_malformed_records(client, student_ids):
    from sipal.core.database import SessionLocal
    from sipal.models.entities import CareerRecordRow
    from uuid import UUID

    with SessionLocal() as db:
        db.add(
            CareerRecordRow(
                student_id=UUID(student_ids["20180001"]),
                status="working",
                payload={"position": "Clerk"},
                is_active=True,
            )
        )
        db.commit()

    payload = client.get("/admin/dashboard").json()
    assert payload["tracer"]["responded"] == 5
    assert payload["tracer"]["working"] == 2

    career = client.get(f"/students/{student_ids['20180001']}/career")
    assert career.status_code == 422
    assert career.json()["message"] == "Unable to compute status"


def test_insight_metrics(client):
    metrics = client.get("/admin/insights/metrics").json()
    assert metrics["employment_rate"] == 50
    assert metrics["entrepreneurship_rate"] == 33
    assert metrics["top_location"] == {"name": "Jakarta", "count": 3}
    assert metrics["top_department"] == {"name": "Administrasi Bisnis", "count": 3}
    assert metrics["study_count"] == 1
    assert metrics["searching_count"] == 1
    assert metrics["data_points"] == 6


def test_insights_text(client):
    payload = client.get("/admin/insights").json()
    assert payload["data_points_analyzed"] == 6
    assert payload["insights"][0].startswith("Employment: 50%")
    assert "fairly good" in payload["insights"][0]
    assert payload["insights"][-1].startswith("Recommendation:")


def test_export_students_csv(client):
    response = client.get("/admin/export/students.csv", params={"status": "alumni"})
    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/csv")
    lines = response.text.strip().split("\n")
    assert lines[0] == "Name,NIM,Status,Entry Year,Graduation Year,Email,Phone"
    assert len(lines) == 7


def test_export_tracer_csv(client):
    lines = client.get("/admin/export/tracer.csv").text.strip().split("\n")
    assert lines[0].startswith("Name,NIM,Graduation Year,Career Status")
    assert len(lines) == 1 + 8
    siti = [line for line in lines if "Siti Batik Online" in line]
    assert siti and siti[0].endswith("no,2023-09-10T00:00:00")


def test_export_rejects_unknown_status_filter(client):
    response = client.get("/admin/export/students.csv", params={"status": "graduated"})
    assert response.status_code == 422
    assert response.json() == {"detail": "Unknown status filter: graduated"}
