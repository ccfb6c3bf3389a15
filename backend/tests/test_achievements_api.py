def test_log_and_list_achievements(client, student_ids):
    student_id = student_ids["20210001"]
    response = client.post(
        f"/students/{student_id}/achievements",
        json={
            "category": "intellectual_property",
            "subcategory": "copyright",
            "title": "Copyright for Campus Marketing Module",
            "achieved_on": "2024-05-02",
            "level": "national",
        },
    )
    assert response.status_code == 201
    created = response.json()
    assert created["verified"] is False
    assert created["level"] == "national"

    rows = client.get(f"/students/{student_id}/achievements").json()
    assert [row["title"] for row in rows][0] == "Copyright for Campus Marketing Module"
    assert len(rows) == 3

    only_ip = client.get(
        f"/students/{student_id}/achievements", params={"category": "intellectual_property"}
    ).json()
    assert len(only_ip) == 1

    counts = client.get(f"/students/{student_id}/achievements/stats").json()
    assert counts["intellectual_property"] == 1
    assert counts["event_participation"] == 1
    assert counts["entrepreneurship"] == 0


def test_dropout_achievements_are_read_only(client, student_ids):
    student_id = student_ids["20200005"]
    response = client.post(
        f"/students/{student_id}/achievements",
        json={"category": "self_development", "title": "Volunteer Day", "achieved_on": "2024-01-01"},
    )
    assert response.status_code == 403
    assert len(client.get(f"/students/{student_id}/achievements").json()) == 1


def test_subcategory_must_match_category(client, student_ids):
    response = client.post(
        f"/students/{student_ids['20210001']}/achievements",
        json={
            "category": "scientific_work",
            "subcategory": "patent",
            "title": "Mismatched",
            "achieved_on": "2024-01-01",
        },
    )
    assert response.status_code == 422


def test_verify_and_delete_achievement(client, student_ids):
    pending = client.get("/admin/achievements", params={"verified": False}).json()
    assert len(pending) == 2

    target = pending[0]["id"]
    verified = client.put(f"/admin/achievements/{target}/verify", json={"verified": True})
    assert verified.status_code == 200
    assert verified.json()["verified"] is True
    assert len(client.get("/admin/achievements", params={"verified": False}).json()) == 1

    assert client.delete(f"/achievements/{target}").status_code == 204
    assert client.delete(f"/achievements/{target}").status_code == 404
