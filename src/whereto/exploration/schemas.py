"""Pydantic schemas for neighbourhood exploration endpoints."""

from __future__ import annotations

from datetime import datetime

from whereto.schemas import CamelModel


class NeighborhoodProgress(CamelModel):
    name: str
    area: str
    explored: bool = False
    visit_count: int = 0
    unique_place_count: int = 0
    first_visit_date: datetime | None = None


class ExplorationStatsResponse(CamelModel):
    total_neighborhoods: int
    explored_count: int
    percentage: int
    neighborhoods: list[NeighborhoodProgress]


class NeighborhoodRef(CamelModel):
    name: str
    area: str


class NewNeighborhoodResponse(CamelModel):
    is_new_neighborhood: bool
    neighborhood: NeighborhoodRef | None = None
    total_explored: int
    total_neighborhoods: int
