from pydantic import BaseModel, ConfigDict, Field
from typing import Optional

class RiderApplicationRequest(BaseModel):
    """Solicitud para ser rider; campos adicionales se guardan en `details`"""
    model_config = ConfigDict(extra="allow")

    name: Optional[str] = Field(None, max_length=255)
    email: str = Field(..., min_length=3, description="Email del solicitante")
    phone: Optional[str] = Field(None, max_length=50)
    region: Optional[str] = Field(None, max_length=100)
    district: Optional[str] = Field(None, max_length=100)
    city: Optional[str] = Field(None, max_length=100)
    national_id: Optional[str] = Field(None, max_length=50)
    bike_brand: Optional[str] = Field(None, max_length=100)
    bike_registration: Optional[str] = Field(None, max_length=50)

class RiderCreatedResponse(BaseModel):
    inserted: bool
    id: int
    status: str

class RiderStatusUpdateRequest(BaseModel):
    status: str = Field(..., description="approved | pending | inactive | cancelled")
    email: Optional[str] = Field(None, description="Email del usuario a promover al aprobar")

class RiderStatusUpdateResponse(BaseModel):
    success: bool
    id: int
    status: str
    role_updated: bool = False
