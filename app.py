import os
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from utils.collection_store import StoreConflictError, StoreError
from utils.logger_factory import new_logger

STORE_UNAVAILABLE = "Storage backend unavailable. Please try again later."
STORE_CONFLICT = "The request conflicts with an existing record."

# Request bodies under these prefixes carry passwords and verification codes
UNLOGGED_BODY_PREFIXES = ("/api/auth",)

app = FastAPI(title="Creator Marketplace API")


@app.middleware("http")
async def log_request_body(request: Request, call_next):
    log = new_logger("log_request_body")
    log.info(f"INCOMING REQUEST: {request.method} {request.url.path}")
    if request.method != "OPTIONS" and not request.url.path.startswith(UNLOGGED_BODY_PREFIXES):
        body = await request.body()
        if len(body) > 0:
            log.info(f"Request body ({request.method} {request.url.path}): {body[:1000]!r}")
    response = await call_next(request)
    return response


@app.exception_handler(StoreError)
async def store_error_handler(request: Request, exc: StoreError):
    log = new_logger("store_error_handler")
    log.error(f"{request.method} {request.url.path} failed: {exc}")
    return JSONResponse(status_code=503, content={"success": False, "error": STORE_UNAVAILABLE})


@app.exception_handler(StoreConflictError)
async def store_conflict_handler(request: Request, exc: StoreConflictError):
    log = new_logger("store_conflict_handler")
    log.warning(f"{request.method} {request.url.path} conflicted: {exc}")
    return JSONResponse(status_code=409, content={"success": False, "error": STORE_CONFLICT})


allowed_origins = [o.strip() for o in os.environ.get("CORS_ALLOWED_ORIGINS", "*").split(",") if o.strip()]

app.add_middleware(
    CORSMiddleware,
    allow_origins=allowed_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/")
def root():
    return {"message": "Creator Marketplace API deployed.  Note: the DB connection has not been verified yet."}

from api.verification_code import router as verification_code_router
from api.auth import router as auth_router
from api.user import router as users_router
from api.dashboard import router as dashboard_router
from api.admin import router as admin_router
from api.healthcheck import router as health_router

app.include_router(verification_code_router, prefix="/api")
app.include_router(auth_router, prefix="/api")
app.include_router(users_router, prefix="/api")
app.include_router(dashboard_router, prefix="/api")
app.include_router(admin_router, prefix="/api")
app.include_router(health_router, prefix="/api")
