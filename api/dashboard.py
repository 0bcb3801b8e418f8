from typing import Literal

from fastapi import APIRouter, Depends, Query

from api.dependencies import get_dashboard_service
from schemas.dashboard import DataResponse
from services.dashboard_service import DashboardService
from utils.jwt_auth import require_roles, require_self_or_admin

router = APIRouter(dependencies=[Depends(require_roles("USER", "ADMIN"))])

UserType = Literal["brand", "creator"]


@router.get("/dashboard/profile/{user_id}", response_model=DataResponse, dependencies=[Depends(require_self_or_admin)])
def fetch_user_profile(
    user_id: str,
    user_type: UserType = Query("creator"),
    dashboard: DashboardService = Depends(get_dashboard_service),
):
    return dashboard.fetch_user_profile(user_id, user_type)


@router.get("/dashboard/brands/{brand_id}/missions", response_model=DataResponse)
def fetch_brand_missions(brand_id: str, dashboard: DashboardService = Depends(get_dashboard_service)):
    return dashboard.fetch_brand_missions(brand_id)


@router.get("/dashboard/creators/recommended", response_model=DataResponse)
def fetch_recommended_creators(
    category: str = Query(..., min_length=1),
    dashboard: DashboardService = Depends(get_dashboard_service),
):
    return dashboard.fetch_recommended_creators(category)


@router.get("/dashboard/creators/{creator_id}/missions", response_model=DataResponse)
def fetch_creator_missions(creator_id: str, dashboard: DashboardService = Depends(get_dashboard_service)):
    return dashboard.fetch_creator_missions(creator_id)


@router.get("/dashboard/stats/{user_id}", response_model=DataResponse, dependencies=[Depends(require_self_or_admin)])
def fetch_dashboard_stats(
    user_id: str,
    user_type: UserType = Query(...),
    dashboard: DashboardService = Depends(get_dashboard_service),
):
    return dashboard.fetch_dashboard_stats(user_id, user_type)


@router.get("/dashboard/activities/{user_id}", response_model=DataResponse, dependencies=[Depends(require_self_or_admin)])
def fetch_recent_activities(user_id: str, dashboard: DashboardService = Depends(get_dashboard_service)):
    return dashboard.fetch_recent_activities(user_id)


@router.get("/dashboard/notifications/{user_id}", response_model=DataResponse, dependencies=[Depends(require_self_or_admin)])
def fetch_notifications(user_id: str, dashboard: DashboardService = Depends(get_dashboard_service)):
    return dashboard.fetch_notifications(user_id)
