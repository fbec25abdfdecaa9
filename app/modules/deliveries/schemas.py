from pydantic import BaseModel, Field
from typing import List, Optional
from datetime import datetime

class AssignRiderRequest(BaseModel):
    rider_id: int = Field(..., description="ID del rider")
    rider_name: Optional[str] = Field(None, description="Nombre a mostrar del rider")
    rider_email: Optional[str] = Field(None, description="Email del rider")

class AssignRiderResponse(BaseModel):
    success: bool
    parcel_id: int
    rider_id: int
    rider_email: str
    delivery_status: str
    assigned_at: datetime

class DeliveryStatusUpdateRequest(BaseModel):
    status: str = Field(..., description="rider_assigned | in-transit | delivered")

class DeliveryStatusUpdateResponse(BaseModel):
    success: bool
    parcel_id: int
    delivery_status: str
    changed: bool
    picked_at: Optional[datetime] = None
    delivered_at: Optional[datetime] = None

class RecordEarningsRequest(BaseModel):
    parcel_id: int = Field(..., description="Paquete entregado")
    rider_email: Optional[str] = Field(None, description="Por defecto el rider autenticado")

class RecordEarningsResponse(BaseModel):
    success: bool
    parcel_id: int
    amount: int
    total_earnings: int
    pending_earnings: int

class CashoutRequest(BaseModel):
    rider_email: Optional[str] = Field(None, description="Por defecto el rider autenticado")

class CashoutResponse(BaseModel):
    success: bool
    parcel_id: int
    amount: int
    cashout_status: str
    cashed_out_at: datetime
    pending_earnings: int
    cashed_out_earnings: int

class EarningEntry(BaseModel):
    parcel_id: int
    amount: int
    status: str
    date: datetime
    cashed_out_at: Optional[datetime] = None

    class Config:
        from_attributes = True

class EarningsSummaryResponse(BaseModel):
    total: int
    cashed_out: int
    pending: int
    today: int
    week: int
    month: int
    year: int
    history: List[EarningEntry] = []
