from pydantic import BaseModel, ConfigDict, Field
from typing import Optional
from decimal import Decimal

from app.shared.schemas.common import BaseResponse

class ParcelCreateRequest(BaseModel):
    """Paquete nuevo; los campos no declarados se guardan tal cual en `details`"""
    model_config = ConfigDict(extra="allow")

    tracking_id: Optional[str] = Field(None, max_length=50)
    title: Optional[str] = Field(None, max_length=255)
    parcel_type: Optional[str] = Field(None, max_length=50)
    weight: Optional[Decimal] = Field(None, ge=0)
    sender_name: Optional[str] = None
    sender_region: Optional[str] = None
    sender_district: Optional[str] = None
    receiver_name: Optional[str] = None
    receiver_region: Optional[str] = None
    receiver_district: Optional[str] = None
    cost: Decimal = Field(Decimal("0"), ge=0, description="Costo del envío")
    created_by: Optional[str] = Field(None, description="Email del creador")

class ParcelCreatedResponse(BaseModel):
    inserted: bool
    id: int
    tracking_id: str

class ParcelDeletedResponse(BaseResponse):
    id: int
