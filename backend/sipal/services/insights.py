"""Rule-based narrative insights for the admin dashboard.

Everything here is local templating over the tracer statistics; no model is
called. Wording thresholds come from settings.
"""
from __future__ import annotations

from collections import Counter
from datetime import datetime
from typing import Any, Iterable, Mapping

from sipal.core.config import settings
from sipal.services.career_status import CareerBuckets


def _top(counter: Counter) -> dict[str, Any] | None:
    if not counter:
        return None
    name, count = sorted(counter.items(), key=lambda item: (-item[1], item[0]))[0]
    return {"name": name, "count": count}


def calculate_metrics(students: Iterable, buckets: Mapping[str, CareerBuckets]) -> dict[str, Any]:
    departments = {str(s.id): s.department for s in students}
    total = len(buckets)
    employed = [sid for sid, b in buckets.items() if b.working]
    entrepreneurs = [sid for sid, b in buckets.items() if b.entrepreneur]

    industries: Counter = Counter()
    locations: Counter = Counter()
    for sid in employed:
        for record in buckets[sid].working:
            if record.text("industry"):
                industries[record.text("industry")] += 1
            if record.text("location"):
                locations[record.text("location")] += 1
    department_counts = Counter(departments[sid] for sid in employed if departments.get(sid))

    return {
        "employment_rate": round(len(employed) / total * 100) if total else 0,
        "entrepreneurship_rate": round(len(entrepreneurs) / total * 100) if total else 0,
        "top_industry": _top(industries),
        "top_location": _top(locations),
        "top_department": _top(department_counts),
        "study_count": sum(1 for b in buckets.values() if b.studying),
        "searching_count": sum(1 for b in buckets.values() if b.searching),
        "data_points": total,
    }


def _employment_quality(rate: int) -> str:
    if rate >= settings.insight_employment_good:
        return "very good"
    if rate >= settings.insight_employment_fair:
        return "fairly good"
    return "in need of improvement"


def generate_insights(metrics: Mapping[str, Any], generated_at: datetime | None = None) -> dict[str, Any]:
    insights = [
        f"Employment: {metrics['employment_rate']}% of responding alumni are currently working, "
        f"an employability level that is {_employment_quality(metrics['employment_rate'])}."
    ]

    if metrics["entrepreneurship_rate"] >= settings.insight_entrepreneurship_high:
        follow_up = "Alumni show a strong entrepreneurial drive."
    else:
        follow_up = "A business incubation program could encourage more alumni to start ventures."
    insights.append(
        f"Entrepreneurship: {metrics['entrepreneurship_rate']}% of responding alumni run a business. {follow_up}"
    )

    top_industry = metrics.get("top_industry")
    if top_industry:
        insights.append(
            f"Leading industry: {top_industry['name']} employs the most alumni "
            f"({top_industry['count']}), suggesting the curriculum fits that sector."
        )
    top_location = metrics.get("top_location")
    if top_location:
        insights.append(
            f"Work location: {top_location['name']} is the most common workplace "
            f"({top_location['count']} alumni), a useful lead for industry partnerships."
        )
    top_department = metrics.get("top_department")
    if top_department:
        insights.append(
            f"Department: graduates of {top_department['name']} account for "
            f"{top_department['count']} working alumni."
        )
    if metrics["study_count"] > 0:
        insights.append(
            f"Further study: {metrics['study_count']} alumni are continuing to a higher degree."
        )
    if metrics["searching_count"] > 0:
        insights.append(
            f"Job seekers: {metrics['searching_count']} alumni are looking for work; "
            "job fairs or career counseling could help."
        )

    industry_name = top_industry["name"] if top_industry else "key"
    insights.append(
        f"Recommendation: strengthen partnerships with the {industry_name} industry "
        "and expand internship programs."
    )

    return {
        "insights": insights,
        "generated_at": generated_at or datetime.utcnow(),
        "data_points_analyzed": metrics["data_points"],
    }
