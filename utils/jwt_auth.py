from datetime import datetime, timedelta, timezone
from fastapi import Depends, HTTPException, status
from fastapi.security.api_key import APIKeyHeader
from jose import JWTError, jwt
import os
from utils.logger_factory import new_logger

SECRET_KEY = os.environ.get("JWT_SECRET_KEY")
if not SECRET_KEY:
    raise RuntimeError("JWT_SECRET_KEY environment variable must be set for JWT authentication.")

ALGORITHM = os.environ.get("JWT_ALGORITHM", "HS256")
ACCESS_TOKEN_EXPIRE_MINUTES = int(os.environ.get("ACCESS_TOKEN_EXPIRE_MINUTES", "60"))

api_key_header = APIKeyHeader(name="Authorization", auto_error=False)


def create_access_token(user_id: str, email: str, role: str = "USER", expires_minutes: int = None) -> str:
    """Mint a short-lived session token for an account."""
    minutes = expires_minutes if expires_minutes is not None else ACCESS_TOKEN_EXPIRE_MINUTES
    payload = {
        "sub": user_id,
        "email": email,
        "role": role,
        "exp": datetime.now(timezone.utc) + timedelta(minutes=minutes),
    }
    return jwt.encode(payload, SECRET_KEY, algorithm=ALGORITHM)


def get_current_user(api_key: str = Depends(api_key_header)):
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )
    log = new_logger("get_current_user")

    if not api_key:
        log.error("Authorization header missing.")
        raise credentials_exception
    if not api_key.startswith("Bearer "):
        log.error("Authorization header malformed or missing 'Bearer '")
        raise credentials_exception
    token = api_key[len("Bearer "):]
    try:
        payload = jwt.decode(token, SECRET_KEY, algorithms=[ALGORITHM])
        user_id = payload.get("sub")
        role = payload.get("role")
        email = payload.get("email")
        if user_id is None or role is None:
            log.error(f"Invalid JWT: missing user ID or role. Claims: {sorted(payload.keys())}")
            raise credentials_exception
        log.info(f"User ID: {user_id}, Role: {role}")
        return {"user_id": user_id, "role": role, "email": email}
    except JWTError as e:
        log.error(f"JWT decoding failed: {str(e)}")
        raise credentials_exception


def require_roles(*roles):
    """
    Dependency for FastAPI endpoints to require one or more roles.
    Usage: @router.get(..., dependencies=[Depends(require_roles('ADMIN'))])
    """
    def role_checker(user=Depends(get_current_user)):
        log = new_logger("require_roles")
        if user["role"] not in roles:
            log.warning(
                f"Authorization failed: user_id={user.get('user_id')}, role={user.get('role')}, required_roles={roles}"
            )
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Forbidden")
        log.info(f"Authorization successful: user_id={user.get('user_id')}, role={user.get('role')}")
        return user
    return role_checker


def require_self_or_admin(user_id: str, user=Depends(get_current_user)):
    """
    Dependency for per-user routes with a {user_id} path parameter: the caller
    must be that user or an ADMIN.
    """
    log = new_logger("require_self_or_admin")
    if user["user_id"] != user_id and user["role"] != "ADMIN":
        log.warning(f"Authorization failed: user_id={user.get('user_id')} requested data of user_id={user_id}")
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Forbidden")
    return user
