from pydantic import BaseModel, Field


class RegisterRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=128)
    email: str = Field(..., min_length=3, max_length=256)
    password: str = Field(..., min_length=6)


class LoginRequest(BaseModel):
    email: str = Field(..., min_length=3, max_length=256)
    password: str


class GoogleSignInRequest(BaseModel):
    id_token: str = Field(..., min_length=1, alias="idToken")

    class Config:
        validate_by_name = True
        from_attributes = True
