"""Employer satisfaction ratings for alumni."""
from typing import Iterable

from sipal.models.entities import IndustrySector, RatingCategory

SCORE_LABELS: dict[int, str] = {
    1: "Very poor",
    2: "Poor",
    3: "Fair",
    4: "Good",
    5: "Very good",
}

CATEGORY_LABELS: dict[RatingCategory, str] = {
    RatingCategory.technical_competence: "Technical competence",
    RatingCategory.work_ethics: "Work ethics",
    RatingCategory.communication: "Communication",
    RatingCategory.initiative: "Initiative",
    RatingCategory.overall: "Overall",
}

SECTOR_LABELS: dict[IndustrySector, str] = {
    IndustrySector.banking_finance: "Banking & Finance",
    IndustrySector.manufacturing: "Manufacturing",
    IndustrySector.retail_commerce: "Retail & E-Commerce",
    IndustrySector.technology: "Technology",
    IndustrySector.healthcare: "Healthcare",
    IndustrySector.education: "Education",
    IndustrySector.government: "Government",
    IndustrySector.hospitality: "Hospitality",
    IndustrySector.logistics: "Logistics",
    IndustrySector.consulting: "Consulting",
    IndustrySector.media: "Media",
    IndustrySector.other: "Other",
}


def score_label(score: int) -> str:
    return SCORE_LABELS[score]


def _average(values: list[int]) -> float:
    if not values:
        return 0.0
    return round(sum(values) / len(values), 2)


def rating_stats(ratings: Iterable) -> dict:
    """Summarise a student's ratings.

    Averages are rounded to two decimals and are 0.0 when nothing has been
    submitted. ``latest_evaluation`` is the most recently submitted rating.
    """
    rows = list(ratings)
    category_averages = {
        category.value: _average([getattr(row, category.value) for row in rows])
        for category in RatingCategory
    }
    latest = max(rows, key=lambda row: row.submitted_at) if rows else None
    average_overall = category_averages[RatingCategory.overall.value]
    return {
        "total_evaluations": len(rows),
        "average_overall": average_overall,
        "average_label": score_label(int(average_overall + 0.5)) if rows else None,
        "category_averages": category_averages,
        "latest_evaluation": latest,
    }
