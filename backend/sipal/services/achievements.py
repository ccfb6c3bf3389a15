from typing import Iterable

from sipal.models.entities import AchievementCategory, AchievementLevel

CATEGORY_LABELS: dict[AchievementCategory, str] = {
    AchievementCategory.event_participation: "Event participation",
    AchievementCategory.scientific_work: "Scientific work",
    AchievementCategory.intellectual_property: "Intellectual property",
    AchievementCategory.applied_academic: "Applied academic",
    AchievementCategory.entrepreneurship: "Entrepreneurship",
    AchievementCategory.self_development: "Self development",
}

SUBCATEGORIES: dict[AchievementCategory, tuple[str, ...]] = {
    AchievementCategory.event_participation: ("seminar", "competition", "award", "conference"),
    AchievementCategory.scientific_work: (
        "journal_publication",
        "proceedings",
        "book_chapter",
        "research_paper",
    ),
    AchievementCategory.intellectual_property: (
        "patent",
        "copyright",
        "trademark",
        "industrial_design",
    ),
    AchievementCategory.applied_academic: (
        "internship",
        "course_portfolio",
        "entrepreneurship_course",
        "ecommerce_project",
        "ocai_assessment",
    ),
    AchievementCategory.entrepreneurship: ("active_business", "past_business"),
    AchievementCategory.self_development: (
        "student_exchange",
        "certification",
        "workshop",
        "volunteer",
    ),
}


def subcategory_matches(category: str, subcategory: str | None) -> bool:
    if subcategory is None:
        return True
    return subcategory in SUBCATEGORIES[AchievementCategory(category)]


def category_counts(achievements: Iterable) -> dict[str, int]:
    counts = {category.value: 0 for category in AchievementCategory}
    for achievement in achievements:
        if achievement.category in counts:
            counts[achievement.category] += 1
    return counts


def achievement_statistics(achievements: Iterable) -> dict:
    rows = list(achievements)
    by_level = {level.value: 0 for level in AchievementLevel}
    for row in rows:
        if row.level in by_level:
            by_level[row.level] += 1
    verified = sum(1 for row in rows if row.verified)
    return {
        "total": len(rows),
        "by_category": category_counts(rows),
        "by_level": by_level,
        "verified": verified,
        "pending": len(rows) - verified,
    }
