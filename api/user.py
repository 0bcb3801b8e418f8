from fastapi import APIRouter, Depends

from api.dependencies import get_profile_service
from schemas.user_account import UserAccountDTO, CompleteProfileRequest, ProfileCompleteResponse
from services.profile_service import ProfileService
from utils.jwt_auth import get_current_user
from utils.logger_factory import new_logger

router = APIRouter()


@router.get("/users/me", response_model=UserAccountDTO)
def get_me(current_user=Depends(get_current_user), profiles: ProfileService = Depends(get_profile_service)):
    log = new_logger("get_me")
    user = profiles.get_profile(current_user["user_id"])
    log.info(f"Fetched profile for {user.id}")
    return UserAccountDTO.model_validate(user)


@router.put("/users/me/profile", response_model=UserAccountDTO)
def complete_profile(
    payload: CompleteProfileRequest,
    current_user=Depends(get_current_user),
    profiles: ProfileService = Depends(get_profile_service),
):
    log = new_logger("complete_profile")
    log.info(f"Completing profile for {current_user['user_id']}")
    user = profiles.complete_profile(current_user["user_id"], payload.model_dump(exclude_none=True))
    return UserAccountDTO.model_validate(user)


@router.get("/users/me/profile_complete", response_model=ProfileCompleteResponse)
def profile_complete(current_user=Depends(get_current_user), profiles: ProfileService = Depends(get_profile_service)):
    return ProfileCompleteResponse(profile_complete=profiles.is_profile_complete(current_user["user_id"]))
