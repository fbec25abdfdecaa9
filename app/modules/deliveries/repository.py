# app/modules/deliveries/repository.py
from sqlalchemy.orm import Session
from typing import List, Optional
from datetime import datetime

from app.shared.database.enums import (
    DeliveryStatus, CashoutStatus, EarningStatus, ACTIVE_DELIVERY_STATUSES
)
from app.shared.database.models import Parcel, Rider, RiderEarning
import logging

logger = logging.getLogger(__name__)

class DeliveriesRepository:
    """
    Acceso a datos del flujo de asignación y liquidación.

    Ningún método confirma la transacción: el servicio agrupa las
    escrituras de paquete y rider y confirma una sola vez.
    """

    def __init__(self, db: Session):
        self.db = db

    def get_parcel(self, parcel_id: int) -> Optional[Parcel]:
        return self.db.query(Parcel).filter(Parcel.id == parcel_id).first()

    def get_rider(self, rider_id: int) -> Optional[Rider]:
        return self.db.query(Rider).filter(Rider.id == rider_id).first()

    def get_rider_by_email(self, email: str) -> Optional[Rider]:
        return self.db.query(Rider).filter(Rider.email == email).first()

    # ==================== ASIGNACIÓN / ESTADOS ====================

    def assign_rider(self, parcel: Parcel, rider_id: int, rider_name: Optional[str], rider_email: str, now: datetime) -> None:
        parcel.assigned_rider_id = rider_id
        parcel.assigned_rider_name = rider_name
        parcel.assigned_rider_email = rider_email
        parcel.assigned_at = now
        parcel.delivery_status = DeliveryStatus.RIDER_ASSIGNED.value

    def set_work_status(self, rider_id: int, work_status: str) -> None:
        self.db.query(Rider).filter(Rider.id == rider_id).update(
            {Rider.work_status: work_status}, synchronize_session=False
        )

    def set_delivery_status(self, parcel: Parcel, status: DeliveryStatus, now: datetime) -> None:
        parcel.delivery_status = status.value
        if status == DeliveryStatus.IN_TRANSIT:
            parcel.picked_at = now
        elif status == DeliveryStatus.DELIVERED:
            parcel.delivered_at = now

    def count_active_parcels(self, rider_email: str, exclude_parcel_id: Optional[int] = None) -> int:
        query = self.db.query(Parcel).filter(
            Parcel.assigned_rider_email == rider_email,
            Parcel.delivery_status.in_(ACTIVE_DELIVERY_STATUSES)
        )
        if exclude_parcel_id is not None:
            query = query.filter(Parcel.id != exclude_parcel_id)
        return query.count()

    # ==================== GANANCIAS ====================

    def get_earning(self, rider_id: int, parcel_id: int) -> Optional[RiderEarning]:
        return self.db.query(RiderEarning).filter(
            RiderEarning.rider_id == rider_id,
            RiderEarning.parcel_id == parcel_id
        ).first()

    def list_earnings(self, rider_id: int) -> List[RiderEarning]:
        return self.db.query(RiderEarning).filter(
            RiderEarning.rider_id == rider_id
        ).order_by(RiderEarning.id.asc()).all()

    def add_earning(self, rider_id: int, parcel_id: int, amount: int, now: datetime) -> RiderEarning:
        """Incremento atómico de total y pendiente + entrada en el historial"""
        self.db.query(Rider).filter(Rider.id == rider_id).update(
            {
                Rider.total_earnings: Rider.total_earnings + amount,
                Rider.pending_earnings: Rider.pending_earnings + amount,
            },
            synchronize_session=False
        )
        earning = RiderEarning(
            rider_id=rider_id,
            parcel_id=parcel_id,
            amount=amount,
            status=EarningStatus.PENDING.value,
            date=now
        )
        self.db.add(earning)
        self.db.flush()
        return earning

    def cash_out_earning(self, rider_id: int, earning: RiderEarning, amount: int, now: datetime) -> None:
        """Mueve el monto de pendiente a liquidado sin tocar el total"""
        self.db.query(Rider).filter(Rider.id == rider_id).update(
            {
                Rider.pending_earnings: Rider.pending_earnings - amount,
                Rider.cashed_out_earnings: Rider.cashed_out_earnings + amount,
            },
            synchronize_session=False
        )
        earning.status = EarningStatus.CASHED_OUT.value
        earning.cashed_out_at = now

    def mark_parcel_cashed_out(self, parcel: Parcel, now: datetime) -> None:
        parcel.cashout_status = CashoutStatus.CASHED_OUT.value
        parcel.cashed_out_at = now
