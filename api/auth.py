from fastapi import APIRouter, Depends

from api.dependencies import get_auth_orchestrator
from api.verification_code import auth_response
from schemas.auth import RegisterRequest, LoginRequest, GoogleSignInRequest
from schemas.verification_code import AuthResponse
from services.auth_service import AuthOrchestrator
from utils.logger_factory import new_logger

router = APIRouter()


@router.post("/auth/register", response_model=AuthResponse, status_code=201)
def register(payload: RegisterRequest, auth: AuthOrchestrator = Depends(get_auth_orchestrator)):
    log = new_logger("register")
    log.info(f"Registering {payload.email}")
    return auth_response(auth.register(payload.name, payload.email, payload.password))


@router.post("/auth/login", response_model=AuthResponse)
def login(payload: LoginRequest, auth: AuthOrchestrator = Depends(get_auth_orchestrator)):
    log = new_logger("login")
    log.info(f"Password login for {payload.email}")
    return auth_response(auth.login_with_password(payload.email, payload.password))


@router.post("/auth/google", response_model=AuthResponse)
def google_sign_in(payload: GoogleSignInRequest, auth: AuthOrchestrator = Depends(get_auth_orchestrator)):
    log = new_logger("google_sign_in")
    log.info("Google sign-in with ID token")
    return auth_response(auth.sign_in_with_google(payload.id_token))
