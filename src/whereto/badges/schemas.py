"""Pydantic schemas for badge endpoints."""

from __future__ import annotations

from datetime import datetime

from whereto.schemas import CamelModel


class BadgeDefinitionResponse(CamelModel):
    type: str
    name: str
    description: str
    icon: str
    category: str
    metric: str
    requirement: int


class EarnedBadgeResponse(CamelModel):
    badge_type: str
    earned_at: datetime


class BadgesResponse(CamelModel):
    earned: list[EarnedBadgeResponse]
    definitions: list[BadgeDefinitionResponse]
    progress: dict[str, int]


class BadgeCheckResponse(CamelModel):
    new_badges: list[BadgeDefinitionResponse]
