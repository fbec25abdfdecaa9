# app/modules/payments/router.py
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from typing import List, Optional

from app.config.database import get_db
from app.core.auth.dependencies import get_current_identity, ensure_same_identity
from app.core.auth.schemas import Identity
from app.shared.services.payment_gateway_client import PaymentGatewayClient, get_payment_gateway
from .service import PaymentsService
from .schemas import (
    PaymentConfirmRequest, PaymentConfirmResponse, PaymentRecord,
    PaymentIntentRequest, PaymentIntentResponse
)

router = APIRouter()

@router.get("/payment-history", response_model=List[PaymentRecord])
async def get_payment_history(
    email: Optional[str] = Query(None, description="Debe coincidir con el usuario autenticado"),
    identity: Identity = Depends(get_current_identity),
    db: Session = Depends(get_db)
):
    """Pagos del usuario autenticado, más recientes primero"""
    user_email = ensure_same_identity(identity, email)
    service = PaymentsService(db)
    return await service.payment_history(user_email)

@router.post("/payments", response_model=PaymentConfirmResponse, status_code=201)
async def confirm_payment(
    data: PaymentConfirmRequest,
    identity: Identity = Depends(get_current_identity),
    db: Session = Depends(get_db)
):
    """
    Confirmar pago de un paquete

    - Paquete: `payment_status = paid` y `transaction_id`
    - Se agrega el registro de pago
    """
    service = PaymentsService(db)
    return await service.confirm_payment(data)

@router.post("/create-payment-intent", response_model=PaymentIntentResponse)
async def create_payment_intent(
    data: PaymentIntentRequest,
    identity: Identity = Depends(get_current_identity),
    gateway: PaymentGatewayClient = Depends(get_payment_gateway),
    db: Session = Depends(get_db)
):
    """Crear intento de cobro en la pasarela y devolver el client secret"""
    service = PaymentsService(db, gateway)
    return await service.create_payment_intent(data.amount_in_cents)
