from pydantic import BaseModel, Field
from typing import Optional, List
from datetime import datetime


class UserAccountDTO(BaseModel):
    uid: str = Field(..., validation_alias="id")
    email: str
    display_name: str = Field("", alias="displayName")
    first_name: str = Field("", alias="firstName")
    last_name: str = Field("", alias="lastName")
    phone_number: str = Field("", alias="phoneNumber")
    address: str = ""
    location: str = ""
    photo_url: Optional[str] = Field(None, alias="photoURL")
    profile_complete: bool = Field(False, alias="profileComplete")
    auth_provider: str = Field("email", alias="authProvider")
    user_type: Optional[str] = Field(None, alias="userType")
    categories: Optional[List[str]] = None
    role: str = "USER"
    sign_in_methods: List[str] = Field(default_factory=list, alias="signInMethods")
    created_at: Optional[datetime] = Field(None, alias="createdAt")
    updated_at: Optional[datetime] = Field(None, alias="updatedAt")

    class Config:
        validate_by_name = True
        from_attributes = True


class CompleteProfileRequest(BaseModel):
    first_name: str = Field(..., alias="firstName")
    last_name: str = Field(..., alias="lastName")
    phone_number: str = Field(..., alias="phoneNumber")
    address: str
    location: str
    display_name: Optional[str] = Field(None, alias="displayName")
    user_type: Optional[str] = Field(None, alias="userType")
    categories: Optional[List[str]] = None
    photo_url: Optional[str] = Field(None, alias="photoURL")

    class Config:
        validate_by_name = True
        from_attributes = True


class ProfileCompleteResponse(BaseModel):
    profile_complete: bool = Field(..., alias="profileComplete")

    class Config:
        validate_by_name = True
