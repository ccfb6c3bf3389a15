def test_list_students_includes_career_summary(client):
    response = client.get("/students")
    assert response.status_code == 200
    rows = {row["nim"]: row for row in response.json()}
    assert len(rows) == 12

    ahmad = rows["20190001"]
    assert ahmad["status"] == "alumni"
    assert ahmad["has_career_records"] is True
    assert ahmad["achievement_count"] == 2
    assert ahmad["career_summary"].startswith("Working as Customer Service Officer")

    eko = rows["20210001"]
    assert eko["has_career_records"] is False
    assert eko["career_summary"] is None


def test_filter_students(client):
    alumni = client.get("/students", params={"status": "alumni"}).json()
    assert len(alumni) == 6
    assert {row["status"] for row in alumni} == {"alumni"}

    found = client.get("/students", params={"search": "siti"}).json()
    assert [row["nim"] for row in found] == ["20190002"]

    by_year = client.get("/students", params={"graduation_year": 2024}).json()
    assert sorted(row["nim"] for row in by_year) == ["20200001", "20200002"]


def test_unknown_status_filter_is_rejected(client):
    response = client.get("/students", params={"status": "graduated"})
    assert response.status_code == 422
    body = response.json()
    assert body["detail"] == "Unknown status filter: graduated"
    assert "message" not in body


def test_achievement_counts_follow_new_entries(client, student_ids):
    response = client.post(
        f"/students/{student_ids['20210001']}/achievements",
        json={
            "category": "self_development",
            "subcategory": "workshop",
            "title": "Public Speaking Workshop",
            "achieved_on": "2024-05-04",
        },
    )
    assert response.status_code == 201

    counts = {row["nim"]: row["achievement_count"] for row in client.get("/students").json()}
    assert counts["20210001"] == 3
    assert counts["20190001"] == 2
    assert counts["20220002"] == 1
    assert counts["20200005"] == 1
    assert counts["20230001"] == 0
    assert sum(counts.values()) == 7


def test_create_and_update_student(client):
    created = client.post(
        "/students",
        json={"nim": "20240009", "name": "Maya Anggraini", "entry_year": 2024},
    )
    assert created.status_code == 201
    student = created.json()
    assert student["status"] == "active"
    assert student["study_program"] == "Administrasi Bisnis Terapan"

    duplicate = client.post(
        "/students",
        json={"nim": "20240009", "name": "Someone Else", "entry_year": 2024},
    )
    assert duplicate.status_code == 409

    updated = client.put(
        f"/students/{student['id']}",
        json={"status": "alumni", "graduation_year": 2027},
    )
    assert updated.status_code == 200
    assert updated.json()["status"] == "alumni"
    assert updated.json()["graduation_year"] == 2027
    assert updated.json()["name"] == "Maya Anggraini"


def test_update_rejects_unknown_status(client, student_ids):
    response = client.put(f"/students/{student_ids['20210001']}", json={"status": "graduated"})
    assert response.status_code == 422


def test_delete_student_removes_related_rows(client, student_ids):
    student_id = student_ids["20190001"]
    assert client.delete(f"/students/{student_id}").status_code == 204
    assert client.get(f"/students/{student_id}").status_code == 404
    assert client.get(f"/students/{student_id}/career").status_code == 404
    assert len(client.get("/admin/achievements").json()) == 4


def test_missing_student_is_404(client):
    assert client.get("/students/not-a-uuid").status_code == 404
    assert client.get("/students/00000000-0000-0000-0000-000000000000").status_code == 404


def test_validate_identity_prefers_exact_name(client):
    response = client.post("/students/validate", json={"name": "budi santoso", "entry_year": 2020})
    assert response.status_code == 200
    assert response.json()["nim"] == "20200001"

    missing = client.post("/students/validate", json={"name": "Budi Santoso", "entry_year": 2019})
    assert missing.status_code == 404


def test_api_prefix_is_registered(client):
    assert client.get("/api/students").status_code == 200


def test_listing_cost_does_not_grow_with_students(client):
    from sqlalchemy import event

    from sipal.core.database import engine

    statements = []

    def record(conn, cursor, statement, parameters, context, executemany):
        statements.append(statement)

    event.listen(engine, "before_cursor_execute", record)
    try:
        client.get("/students")
        baseline = len(statements)
        for index in range(3):
            client.post(
                "/students",
                json={"nim": f"2024100{index}", "name": f"Student {index}", "entry_year": 2024},
            )
        statements.clear()
        client.get("/students")
        assert len(statements) == baseline
    finally:
        event.remove(engine, "before_cursor_execute", record)
