# app/shared/schemas/common.py
from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime

class BaseResponse(BaseModel):
    success: bool
    message: str = ""
    timestamp: datetime = Field(default_factory=datetime.now)

class InsertResponse(BaseModel):
    inserted: bool
    id: Optional[int] = None

class StatusCount(BaseModel):
    status: str
    count: int
