# app/modules/payments/service.py
from typing import List
from datetime import datetime
from sqlalchemy.orm import Session
import logging

from app.core.exceptions import NotFoundError, InternalError
from app.shared.database.enums import PaymentStatus
from app.shared.database.transaction import unit_of_work
from app.shared.services.payment_gateway_client import PaymentGatewayClient
from .repository import PaymentsRepository
from .schemas import (
    PaymentConfirmRequest, PaymentConfirmResponse, PaymentRecord, PaymentIntentResponse
)

logger = logging.getLogger(__name__)

class PaymentsService:
    def __init__(self, db: Session, gateway: PaymentGatewayClient = None):
        self.db = db
        self.gateway = gateway
        self.repository = PaymentsRepository(db)

    async def confirm_payment(self, data: PaymentConfirmRequest) -> PaymentConfirmResponse:
        """Marcar paquete como pagado y registrar el pago en una transacción"""
        parcel = self.repository.get_parcel(data.parcel_id)
        if not parcel:
            raise NotFoundError("Paquete no encontrado")

        payment_time = data.payment_time or datetime.now()
        with unit_of_work(self.db, "confirmar pago"):
            self.repository.mark_parcel_paid(parcel, data.transaction_id, payment_time)
            payment = self.repository.add_payment({
                "parcel_id": data.parcel_id,
                "user_email": data.email,
                "transaction_id": data.transaction_id,
                "amount": data.amount,
                "payment_method": data.payment_method,
                "payment_time": payment_time
            })

        logger.info(f"💳 Pago confirmado: paquete {data.parcel_id}, transacción {data.transaction_id}")
        return PaymentConfirmResponse(
            inserted=True,
            id=payment.id,
            parcel_id=data.parcel_id,
            payment_status=PaymentStatus.PAID.value
        )

    async def payment_history(self, email: str) -> List[PaymentRecord]:
        payments = self.repository.list_by_email(email)
        return [PaymentRecord.model_validate(p) for p in payments]

    async def create_payment_intent(self, amount_in_cents: int) -> PaymentIntentResponse:
        result = await self.gateway.create_payment_intent(amount_in_cents)
        client_secret = result.get("client_secret")
        if not client_secret:
            raise InternalError("La pasarela no devolvió client_secret")
        return PaymentIntentResponse(client_secret=client_secret)
