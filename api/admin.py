from typing import Literal, Optional

from fastapi import APIRouter, Depends, Query

from api.dependencies import get_admin_service
from schemas.dashboard import DataResponse, MissionStatusUpdate
from services.admin_service import AdminService
from utils.jwt_auth import require_roles
from utils.logger_factory import new_logger

router = APIRouter(dependencies=[Depends(require_roles("ADMIN"))])


@router.get("/admin/creators", response_model=DataResponse)
def list_creators(admin: AdminService = Depends(get_admin_service)):
    return admin.list_creators()


@router.get("/admin/missions", response_model=DataResponse)
def list_missions(
    status: Optional[Literal["pending", "inProgress", "completed", "cancelled"]] = Query(None),
    admin: AdminService = Depends(get_admin_service),
):
    return admin.list_missions(status)


@router.patch("/admin/missions/{mission_id}/status")
def update_mission_status(
    mission_id: str,
    payload: MissionStatusUpdate,
    admin: AdminService = Depends(get_admin_service),
):
    log = new_logger("update_mission_status")
    log.info(f"Updating mission {mission_id} to {payload.status}")
    mission = admin.update_mission_status(mission_id, payload.status)
    return {"success": True, "data": mission.to_dict()}


@router.get("/admin/payments", response_model=DataResponse)
def list_payments(
    status: Optional[Literal["pending", "processed", "failed"]] = Query(None),
    admin: AdminService = Depends(get_admin_service),
):
    return admin.list_payments(status)


@router.post("/admin/payments/{payment_id}/process")
def process_payment(payment_id: str, admin: AdminService = Depends(get_admin_service)):
    log = new_logger("process_payment")
    log.info(f"Processing payment {payment_id}")
    payment = admin.process_payment(payment_id)
    return {"success": True, "data": payment.to_dict()}
