def _rating(**overrides):
    body = {
        "company_name": "PT Shopee Indonesia",
        "evaluator_name": "Rina Wulandari",
        "evaluator_position": "HR Manager",
        "industry_sector": "retail_commerce",
        "company_email": "hr@shopee.co.id",
        "evaluation_period": "2024-Q3",
        "technical_competence": 4,
        "work_ethics": 5,
        "communication": 4,
        "initiative": 3,
        "overall": 4,
        "strengths": "Reliable with clients",
    }
    body.update(overrides)
    return body


def test_employer_can_rate_alumni(client, student_ids):
    student_id = student_ids["20200001"]
    response = client.post(f"/students/{student_id}/ratings", json=_rating())
    assert response.status_code == 201
    payload = response.json()
    assert payload["student_id"] == student_id
    assert payload["industry_sector"] == "retail_commerce"
    assert payload["overall"] == 4

    ratings = client.get(f"/students/{student_id}/ratings").json()
    assert [row["company_name"] for row in ratings] == ["PT Shopee Indonesia"]


def test_scores_outside_one_to_five_are_rejected(client, student_ids):
    student_id = student_ids["20200001"]
    for field, value in (("overall", 6), ("communication", 0)):
        response = client.post(f"/students/{student_id}/ratings", json=_rating(**{field: value}))
        assert response.status_code == 422
    assert client.get(f"/students/{student_id}/ratings").json() == []


def test_rating_requires_known_sector_and_period(client, student_ids):
    student_id = student_ids["20200001"]
    assert client.post(
        f"/students/{student_id}/ratings", json=_rating(industry_sector="mining")
    ).status_code == 422
    assert client.post(
        f"/students/{student_id}/ratings", json=_rating(evaluation_period="2024-Q5")
    ).status_code == 422


def test_only_alumni_can_be_rated(client, student_ids):
    for nim in ("20210001", "20220002", "20200005"):
        response = client.post(f"/students/{student_ids[nim]}/ratings", json=_rating())
        assert response.status_code == 403
    assert client.post(
        "/students/00000000-0000-0000-0000-000000000000/ratings", json=_rating()
    ).status_code == 404


def test_rating_statistics(client, student_ids):
    student_id = student_ids["20190001"]
    client.post(
        f"/students/{student_id}/ratings",
        json=_rating(company_name="PT Bank Central Asia Tbk", industry_sector="banking_finance",
                     submitted_at="2024-04-01T08:00:00"),
    )
    client.post(
        f"/students/{student_id}/ratings",
        json=_rating(company_name="Kopi Rizki", overall=5, initiative=4, submitted_at="2024-10-01T08:00:00"),
    )

    stats = client.get(f"/students/{student_id}/ratings/stats").json()
    assert stats["total_evaluations"] == 2
    assert stats["average_overall"] == 4.5
    assert stats["average_label"] == "Very good"
    assert stats["category_averages"] == {
        "technical_competence": 4.0,
        "work_ethics": 5.0,
        "communication": 4.0,
        "initiative": 3.5,
        "overall": 4.5,
    }
    assert stats["latest_evaluation"]["company_name"] == "Kopi Rizki"


def test_statistics_without_ratings(client, student_ids):
    stats = client.get(f"/students/{student_ids['20180002']}/ratings/stats").json()
    assert stats["total_evaluations"] == 0
    assert stats["average_overall"] == 0.0
    assert stats["average_label"] is None
    assert stats["latest_evaluation"] is None


def test_rating_options(client):
    options = client.get("/ratings/options").json()
    assert options["scores"]["1"] == "Very poor"
    assert options["scores"]["5"] == "Very good"
    assert len(options["categories"]) == 5
    assert options["industry_sectors"]["banking_finance"] == "Banking & Finance"


def test_deleting_student_removes_ratings(client, student_ids):
    student_id = student_ids["20200001"]
    client.post(f"/students/{student_id}/ratings", json=_rating())
    assert client.delete(f"/students/{student_id}").status_code == 204
    assert client.get(f"/students/{student_id}/ratings").status_code == 404
