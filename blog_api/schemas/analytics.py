"""Pydantic schemas for the admin dashboard."""

from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel, ConfigDict


class PostSummary(BaseModel):
    id: str
    title: str
    slug: str
    view_count: int = 0
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class StatusStats(BaseModel):
    status: str
    count: int
    views: int
    avg_views: float


class MonthlyStats(BaseModel):
    month: str  # e.g. "Oct 2026"
    count: int
    views: int
    avg_views: float


class DashboardStatsResponse(BaseModel):
    total_posts: int
    total_users: int
    total_views: int
    average_views: float
    popular_posts: List[PostSummary]
    recent_posts: List[PostSummary]
    posts_by_status: List[StatusStats]
    monthly_stats: List[MonthlyStats]
