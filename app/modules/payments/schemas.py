from pydantic import BaseModel, Field
from typing import Optional
from decimal import Decimal
from datetime import datetime

class PaymentConfirmRequest(BaseModel):
    parcel_id: int
    email: str = Field(..., description="Email de quien paga")
    transaction_id: str = Field(..., min_length=1)
    amount: Decimal = Field(..., ge=0)
    payment_method: Optional[str] = Field(None, max_length=50)
    payment_time: Optional[datetime] = Field(None, description="Por defecto la hora actual")

class PaymentConfirmResponse(BaseModel):
    inserted: bool
    id: int
    parcel_id: int
    payment_status: str

class PaymentRecord(BaseModel):
    id: int
    parcel_id: int
    user_email: str
    transaction_id: str
    amount: float
    payment_method: Optional[str] = None
    payment_time: datetime

    class Config:
        from_attributes = True

class PaymentIntentRequest(BaseModel):
    amount_in_cents: int = Field(..., gt=0, description="Monto en centavos")

class PaymentIntentResponse(BaseModel):
    client_secret: str
