from pydantic import BaseModel, Field
from typing import Optional, Dict, Any


class IssueCodeRequest(BaseModel):
    email: str = Field(..., min_length=3, max_length=256)


class VerifyCodeRequest(BaseModel):
    email: str = Field(..., min_length=3, max_length=256)
    code: str


class ResetPasswordRequest(BaseModel):
    email: str = Field(..., min_length=3, max_length=256)
    code: str
    new_password: str = Field(..., alias="newPassword", min_length=6)

    class Config:
        validate_by_name = True
        from_attributes = True


class AuthResponse(BaseModel):
    """Shape shared by every auth endpoint; unset fields are left out of the JSON body."""
    success: bool
    valid: Optional[bool] = None
    user: Optional[Dict[str, Any]] = None
    error: Optional[str] = None
    message: Optional[str] = None
    is_new_user: Optional[bool] = Field(None, alias="isNewUser")
    requires_google_sign_in: Optional[bool] = Field(None, alias="requiresGoogleSignIn")
    access_token: Optional[str] = Field(None, alias="accessToken")
    token_type: Optional[str] = Field(None, alias="tokenType")
    code: Optional[str] = None

    class Config:
        validate_by_name = True
        from_attributes = True
