from pydantic import BaseModel
from typing import Any, Literal


class DataResponse(BaseModel):
    success: bool = True
    data: Any
    source: Literal["store", "mock"]


class MissionStatusUpdate(BaseModel):
    status: Literal["pending", "inProgress", "completed", "cancelled"]
