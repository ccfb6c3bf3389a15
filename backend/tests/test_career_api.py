def test_alumni_career_view_combines_job_and_business(client, student_ids):
    response = client.get(f"/students/{student_ids['20190001']}/career")
    assert response.status_code == 200
    payload = response.json()
    assert payload["visible"] is True
    assert payload["locked"] is None
    assert payload["empty_state"] is None
    assert payload["status"]["primary_text"] == (
        "Working as Customer Service Officer at PT Bank Central Asia Tbk "
        "and running a business Kopi Rizki"
    )
    assert payload["status"]["details"] == [
        "Customer Service Officer at PT Bank Central Asia Tbk (2023 - present)",
        "Kopi Rizki, Food & Beverage, 2 employees (2024 - present)",
    ]


def test_inactive_business_reported_in_details(client, student_ids):
    payload = client.get(f"/students/{student_ids['20190002']}/career").json()
    status = payload["status"]
    assert status["primary_text"] == "Running a business Siti Creative Agency"
    assert status["details"][-1] == (
        "Siti Batik Online, Retail & E-Commerce (2022 - 2023), no longer active"
    )


def test_non_alumni_get_locked_message(client, student_ids):
    titles = set()
    for nim, status in (("20210001", "active"), ("20220002", "on_leave"), ("20200005", "dropout")):
        payload = client.get(f"/students/{student_ids[nim]}/career").json()
        assert payload["visible"] is False
        assert payload["enrollment_status"] == status
        assert payload["status"] is None
        titles.add(payload["locked"]["title"])
    assert len(titles) == 3


def test_alumni_without_records_get_empty_state(client):
    created = client.post(
        "/students",
        json={"nim": "20170001", "name": "Nadia Putri", "status": "alumni", "entry_year": 2017, "graduation_year": 2021},
    ).json()
    payload = client.get(f"/students/{created['id']}/career").json()
    assert payload["visible"] is True
    assert payload["status"] == {"has_active_career": False, "primary_text": "", "details": []}
    assert payload["empty_state"]["cta_label"]


def test_submitting_a_record_appends(client, student_ids):
    student_id = student_ids["20200001"]
    response = client.post(
        f"/students/{student_id}/career/records",
        json={
            "status": "working",
            "payload": {"employer": "PT Tokopedia", "position": "Account Manager", "start_year": 2025},
            "is_active": True,
            "submitted_at": "2025-02-01T09:00:00",
        },
    )
    assert response.status_code == 201
    assert response.json()["status"] == "working"

    records = client.get(f"/students/{student_id}/career/records").json()
    assert len(records) == 2

    text = client.get(f"/students/{student_id}/career").json()["status"]["primary_text"]
    assert text.index("PT Tokopedia") < text.index("PT Shopee Indonesia")


def test_malformed_submission_is_rejected(client, student_ids):
    student_id = student_ids["20200001"]
    response = client.post(
        f"/students/{student_id}/career/records",
        json={"status": "working", "payload": {"position": "Engineer"}, "is_active": True},
    )
    assert response.status_code == 422
    assert "employer" in response.json()["detail"]
    assert len(client.get(f"/students/{student_id}/career/records").json()) == 1


def test_non_alumni_cannot_submit_or_list_records(client, student_ids):
    student_id = student_ids["20210001"]
    response = client.post(
        f"/students/{student_id}/career/records",
        json={"status": "searching", "payload": {"target_field": "Finance"}},
    )
    assert response.status_code == 403
    assert client.get(f"/students/{student_id}/career/records").status_code == 403


def test_records_of_demoted_student_are_hidden(client, student_ids):
    student_id = student_ids["20180001"]
    client.put(f"/students/{student_id}", json={"status": "active"})
    payload = client.get(f"/students/{student_id}/career").json()
    assert payload["visible"] is False
    assert payload["status"] is None


def test_records_with_offsets_are_ordered_by_instant(client, student_ids):
    student_id = student_ids["20200001"]
    for employer, submitted_at in (
        ("EarlierCo", "2024-01-01T10:00:00+07:00"),
        ("LaterCo", "2024-01-01T05:00:00Z"),
    ):
        response = client.post(
            f"/students/{student_id}/career/records",
            json={
                "status": "working",
                "payload": {"employer": employer, "position": "Analyst"},
                "is_active": True,
                "submitted_at": submitted_at,
            },
        )
        assert response.status_code == 201

    text = client.get(f"/students/{student_id}/career").json()["status"]["primary_text"]
    assert text.index("LaterCo") < text.index("EarlierCo")
