"""Analytics endpoints for the admin dashboard."""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from blog_api.api.deps import get_db, require_role
from blog_api.core.exceptions import to_http_exception
from blog_api.models.user import User
from blog_api.schemas.analytics import DashboardStatsResponse
from blog_api.services.analytics_service import analytics_service

router = APIRouter(prefix="/analytics", tags=["Analytics"])


@router.get(
    "/dashboard",
    response_model=DashboardStatsResponse,
    summary="Get dashboard statistics",
    description="Totals, top and recent posts, per-status and monthly stats. Only accessible by admin."
)
def get_dashboard_stats(
    db: Session = Depends(get_db),
    current_user: User = Depends(require_role("admin"))
) -> DashboardStatsResponse:
    """
    Get dashboard statistics including:
    - Total posts, users and views, average views per post
    - Five most viewed and five most recent posts
    - Post count and views per status
    - Post count and views for each of the last six months
    """
    try:
        return analytics_service.get_dashboard_stats(db)
    except Exception as e:
        raise to_http_exception(e, "Failed to fetch dashboard stats")
