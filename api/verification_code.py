from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from api.dependencies import get_auth_orchestrator
from schemas.verification_code import IssueCodeRequest, VerifyCodeRequest, ResetPasswordRequest, AuthResponse
from services.auth_service import AuthOrchestrator, AuthResult
from utils.logger_factory import new_logger

router = APIRouter()


def auth_response(result: AuthResult) -> JSONResponse:
    return JSONResponse(status_code=result.status_code, content=result.to_dict())


@router.post("/auth/login_code", response_model=AuthResponse)
def issue_login_code(payload: IssueCodeRequest, auth: AuthOrchestrator = Depends(get_auth_orchestrator)):
    log = new_logger("issue_login_code")
    log.info(f"Login code requested for {payload.email}")
    return auth_response(auth.issue_login_code(payload.email))


@router.post("/auth/reset_code", response_model=AuthResponse)
def issue_reset_code(payload: IssueCodeRequest, auth: AuthOrchestrator = Depends(get_auth_orchestrator)):
    log = new_logger("issue_reset_code")
    log.info(f"Reset code requested for {payload.email}")
    return auth_response(auth.issue_reset_code(payload.email))


@router.post("/auth/verify_login_code", response_model=AuthResponse)
def verify_login_code(payload: VerifyCodeRequest, auth: AuthOrchestrator = Depends(get_auth_orchestrator)):
    log = new_logger("verify_login_code")
    log.info(f"Verifying login code for {payload.email}")
    return auth_response(auth.verify_and_sign_in(payload.email, payload.code))


@router.post("/auth/reset_password", response_model=AuthResponse)
def reset_password(payload: ResetPasswordRequest, auth: AuthOrchestrator = Depends(get_auth_orchestrator)):
    log = new_logger("reset_password")
    log.info(f"Password reset attempt for {payload.email}")
    return auth_response(auth.verify_and_reset_password(payload.email, payload.code, payload.new_password))
