from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime

class TrackingEventCreate(BaseModel):
    tracking_id: Optional[str] = Field(None, max_length=50)
    parcel_id: Optional[int] = None
    status: Optional[str] = Field(None, max_length=50)
    message: Optional[str] = None
    updated_by: Optional[str] = Field(None, description="Por defecto el usuario autenticado")

class TrackingEventResponse(BaseModel):
    id: int
    tracking_id: str
    parcel_id: Optional[int] = None
    status: str
    message: Optional[str] = None
    updated_by: Optional[str] = None
    timestamp: datetime

    class Config:
        from_attributes = True
