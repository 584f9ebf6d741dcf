"""Service layer for the admin dashboard statistics."""

import logging
import math
from collections import OrderedDict
from datetime import datetime
from typing import List, Optional, Tuple

from sqlalchemy import desc, func, select
from sqlalchemy.orm import Session

from blog_api.core.exceptions import ServiceError
from blog_api.crud.post import crud_post
from blog_api.crud.user import crud_user
from blog_api.models.post import Post
from blog_api.schemas.analytics import (
    DashboardStatsResponse,
    MonthlyStats,
    PostSummary,
    StatusStats,
)

logger = logging.getLogger(__name__)

MONTH_WINDOW = 6
TOP_POSTS_LIMIT = 5


def round_one_decimal(value: float) -> float:
    """Round half-up to one decimal place (2.25 -> 2.3)."""
    return math.floor(value * 10 + 0.5) / 10


def _average(total: int, count: int) -> float:
    return round_one_decimal(total / count) if count else 0


def _shift_month(year: int, month: int, delta: int) -> Tuple[int, int]:
    index = year * 12 + (month - 1) + delta
    return index // 12, index % 12 + 1


class AnalyticsService:
    """
    Service computing the dashboard rollups.

    Totals and per-status figures are grouped in SQL; only the rows of the
    last six calendar months are read to build the monthly buckets.
    """

    def _month_buckets(self, now: datetime) -> "OrderedDict[str, List[int]]":
        """Six ``[count, views]`` buckets keyed ``"%b %Y"``, oldest first, ending with ``now``'s month."""
        buckets: "OrderedDict[str, List[int]]" = OrderedDict()
        for offset in range(MONTH_WINDOW - 1, -1, -1):
            year, month = _shift_month(now.year, now.month, -offset)
            buckets[datetime(year, month, 1).strftime("%b %Y")] = [0, 0]
        return buckets

    def get_dashboard_stats(self, db: Session, *, now: Optional[datetime] = None) -> DashboardStatsResponse:
        """
        Build the dashboard statistics.

        Args:
            db: Database session
            now: Reference time for the monthly window, defaults to the current UTC time

        Returns:
            DashboardStatsResponse with totals, top/recent posts, per-status and monthly stats
        """
        now = now or datetime.utcnow()
        try:
            total_posts = crud_post.count(db)
            total_users = crud_user.count(db)

            popular = db.scalars(
                select(Post).order_by(desc(Post.view_count)).limit(TOP_POSTS_LIMIT)
            ).unique().all()
            recent = db.scalars(
                select(Post).order_by(desc(Post.created_at)).limit(TOP_POSTS_LIMIT)
            ).unique().all()

            status_rows = db.execute(
                select(
                    Post.status,
                    func.count(Post.id),
                    func.coalesce(func.sum(Post.view_count), 0),
                )
                .group_by(Post.status)
                .order_by(Post.status)
            ).all()

            start_year, start_month = _shift_month(now.year, now.month, -(MONTH_WINDOW - 1))
            window_start = datetime(start_year, start_month, 1)
            monthly_rows = db.execute(
                select(Post.created_at, Post.view_count).where(Post.created_at >= window_start)
            ).all()
        except Exception as e:
            logger.error(f"Failed to load dashboard statistics: {e}")
            raise ServiceError(f"Failed to fetch dashboard stats: {e}") from e

        posts_by_status = []
        total_views = 0
        for status_value, count, views in status_rows:
            views = int(views or 0)
            total_views += views
            posts_by_status.append(
                StatusStats(
                    status=status_value,
                    count=count,
                    views=views,
                    avg_views=_average(views, count),
                )
            )

        buckets = self._month_buckets(now)
        for created_at, view_count in monthly_rows:
            if created_at is None:
                continue
            bucket = buckets.get(created_at.strftime("%b %Y"))
            if bucket is None:
                continue
            bucket[0] += 1
            bucket[1] += view_count or 0

        monthly_stats = [
            MonthlyStats(month=label, count=count, views=views, avg_views=_average(views, count))
            for label, (count, views) in buckets.items()
        ]

        return DashboardStatsResponse(
            total_posts=total_posts,
            total_users=total_users,
            total_views=total_views,
            average_views=_average(total_views, total_posts),
            popular_posts=[PostSummary.model_validate(p) for p in popular],
            recent_posts=[PostSummary.model_validate(p) for p in recent],
            posts_by_status=posts_by_status,
            monthly_stats=monthly_stats,
        )


# Singleton instance
analytics_service = AnalyticsService()
