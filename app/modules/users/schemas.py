from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime

class UserUpsertRequest(BaseModel):
    email: str = Field(..., min_length=3, description="Email verificado del usuario")
    name: Optional[str] = Field(None, max_length=255)
    photo_url: Optional[str] = Field(None, max_length=500)

class UserUpsertResponse(BaseModel):
    inserted: bool
    id: int
    message: str

class UserRoleResponse(BaseModel):
    email: str
    role: str

class RoleUpdateRequest(BaseModel):
    role: str = Field(..., description="user | rider | admin")

class UserSummary(BaseModel):
    id: int
    email: str
    name: Optional[str] = None
    role: str
    created_at: Optional[datetime] = None
    last_login: Optional[datetime] = None

    class Config:
        from_attributes = True
