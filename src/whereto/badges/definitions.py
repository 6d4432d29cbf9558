"""Static badge catalogue.

Loaded once at import and never mutated; safe to share across requests.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum

from whereto.places.neighborhoods import NEIGHBORHOODS


class Metric(StrEnum):
    """Stats counter a badge threshold is compared against."""

    VISITS = "visits"
    NEIGHBORHOODS = "neighborhoods"
    FRIENDS = "friends"
    SAVES = "saves"
    RECOMMENDATIONS = "recommendations"
    STREAK = "streak"
    UNIQUE_INTENTS = "uniqueIntents"


class Category(StrEnum):
    EXPLORATION = "exploration"
    SOCIAL = "social"
    COLLECTOR = "collector"
    STREAK = "streak"


@dataclass(frozen=True, slots=True)
class BadgeDefinition:
    type: str
    name: str
    description: str
    icon: str
    category: Category
    metric: Metric
    requirement: int


TOTAL_INTENTS = 9

BADGE_DEFINITIONS: tuple[BadgeDefinition, ...] = (
    # Exploration
    BadgeDefinition("first_visit", "First Steps", "Verify your first visit", "🚶",
                    Category.EXPLORATION, Metric.VISITS, 1),
    BadgeDefinition("explorer_5", "Urban Explorer", "Visit 5 different places", "🧭",
                    Category.EXPLORATION, Metric.VISITS, 5),
    BadgeDefinition("explorer_10", "City Wanderer", "Visit 10 different places", "🗺️",
                    Category.EXPLORATION, Metric.VISITS, 10),
    BadgeDefinition("explorer_25", "Toronto Pro", "Visit 25 different places", "⭐",
                    Category.EXPLORATION, Metric.VISITS, 25),
    BadgeDefinition("explorer_50", "Legend", "Visit 50 different places", "👑",
                    Category.EXPLORATION, Metric.VISITS, 50),
    BadgeDefinition("neighborhood_3", "Neighborhood Hopper", "Explore 3 different neighborhoods", "🏘️",
                    Category.EXPLORATION, Metric.NEIGHBORHOODS, 3),
    BadgeDefinition("neighborhood_10", "District Master", "Explore 10 different neighborhoods", "🌆",
                    Category.EXPLORATION, Metric.NEIGHBORHOODS, 10),
    BadgeDefinition("neighborhood_all", "Toronto Completionist", "Explore all neighborhoods", "🏆",
                    Category.EXPLORATION, Metric.NEIGHBORHOODS, len(NEIGHBORHOODS)),
    # Social
    BadgeDefinition("first_friend", "Social Butterfly", "Add your first friend", "🦋",
                    Category.SOCIAL, Metric.FRIENDS, 1),
    BadgeDefinition("friends_5", "Squad Goals", "Have 5 friends", "👥",
                    Category.SOCIAL, Metric.FRIENDS, 5),
    BadgeDefinition("first_rec", "Taste Sharer", "Send your first recommendation", "💌",
                    Category.SOCIAL, Metric.RECOMMENDATIONS, 1),
    BadgeDefinition("rec_10", "Local Guide", "Send 10 recommendations", "📣",
                    Category.SOCIAL, Metric.RECOMMENDATIONS, 10),
    # Collector
    BadgeDefinition("first_save", "Bookmarked", "Save your first place", "🔖",
                    Category.COLLECTOR, Metric.SAVES, 1),
    BadgeDefinition("saves_25", "Curator", "Save 25 places", "📚",
                    Category.COLLECTOR, Metric.SAVES, 25),
    BadgeDefinition("saves_50", "Connoisseur", "Save 50 places", "🎯",
                    Category.COLLECTOR, Metric.SAVES, 50),
    BadgeDefinition("all_intents", "Well Rounded", "Save a place from every intent category", "🎨",
                    Category.COLLECTOR, Metric.UNIQUE_INTENTS, TOTAL_INTENTS),
    # Streaks
    BadgeDefinition("streak_3", "Getting Hooked", "Use WhereTo 3 days in a row", "🔥",
                    Category.STREAK, Metric.STREAK, 3),
    BadgeDefinition("streak_7", "Weekly Regular", "Use WhereTo 7 days in a row", "⚡",
                    Category.STREAK, Metric.STREAK, 7),
    BadgeDefinition("streak_30", "Devoted Explorer", "Use WhereTo 30 days in a row", "💎",
                    Category.STREAK, Metric.STREAK, 30),
)

_BY_TYPE = {d.type: d for d in BADGE_DEFINITIONS}


def find_definition(badge_type: str) -> BadgeDefinition | None:
    return _BY_TYPE.get(badge_type)
