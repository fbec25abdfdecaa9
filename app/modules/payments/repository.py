# app/modules/payments/repository.py
from sqlalchemy.orm import Session
from typing import List, Dict, Any, Optional
from datetime import datetime

from app.shared.database.enums import PaymentStatus
from app.shared.database.models import Parcel, Payment

class PaymentsRepository:
    def __init__(self, db: Session):
        self.db = db

    def get_parcel(self, parcel_id: int) -> Optional[Parcel]:
        return self.db.query(Parcel).filter(Parcel.id == parcel_id).first()

    def mark_parcel_paid(self, parcel: Parcel, transaction_id: str, paid_at: datetime) -> None:
        parcel.payment_status = PaymentStatus.PAID.value
        parcel.transaction_id = transaction_id
        parcel.paid_at = paid_at

    def add_payment(self, payment_data: Dict[str, Any]) -> Payment:
        payment = Payment(**payment_data)
        self.db.add(payment)
        self.db.flush()
        return payment

    def list_by_email(self, email: str) -> List[Payment]:
        return self.db.query(Payment).filter(
            Payment.user_email == email
        ).order_by(Payment.payment_time.desc(), Payment.id.desc()).all()
