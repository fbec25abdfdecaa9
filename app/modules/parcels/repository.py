# app/modules/parcels/repository.py
from sqlalchemy.orm import Session
from sqlalchemy import func
from typing import List, Dict, Any, Optional
from datetime import datetime

from app.shared.database.enums import WorkStatus, ACTIVE_DELIVERY_STATUSES
from app.shared.database.models import Parcel, Rider
import logging

logger = logging.getLogger(__name__)

class ParcelsRepository:
    def __init__(self, db: Session):
        self.db = db

    def list_parcels(
        self,
        created_by: Optional[str] = None,
        payment_status: Optional[str] = None,
        delivery_status: Optional[str] = None
    ) -> List[Parcel]:
        """Filtros opcionales; sin filtros devuelve todo, más reciente primero"""
        query = self.db.query(Parcel)

        if created_by:
            query = query.filter(Parcel.created_by == created_by)
        if payment_status:
            query = query.filter(Parcel.payment_status == payment_status)
        if delivery_status:
            query = query.filter(Parcel.delivery_status == delivery_status)

        return query.order_by(Parcel.created_at.desc(), Parcel.id.desc()).all()

    def list_for_rider(self, rider_email: str, statuses: List[str]) -> List[Parcel]:
        return self.db.query(Parcel).filter(
            Parcel.assigned_rider_email == rider_email,
            Parcel.delivery_status.in_(statuses)
        ).order_by(Parcel.created_at.desc(), Parcel.id.desc()).all()

    def get_by_id(self, parcel_id: int) -> Optional[Parcel]:
        return self.db.query(Parcel).filter(Parcel.id == parcel_id).first()

    def create_parcel(self, parcel_data: Dict[str, Any]) -> Parcel:
        parcel = Parcel(**parcel_data)
        parcel.created_at = parcel.created_at or datetime.now()

        self.db.add(parcel)
        self.db.commit()
        self.db.refresh(parcel)
        return parcel

    def delete_parcel(self, parcel_id: int) -> None:
        """Elimina sin confirmar la transacción"""
        self.db.query(Parcel).filter(Parcel.id == parcel_id).delete(
            synchronize_session=False
        )

    def count_active_for_rider(self, rider_email: str) -> int:
        return self.db.query(Parcel).filter(
            Parcel.assigned_rider_email == rider_email,
            Parcel.delivery_status.in_(ACTIVE_DELIVERY_STATUSES)
        ).count()

    def set_rider_idle(self, rider_id: int) -> None:
        self.db.query(Rider).filter(Rider.id == rider_id).update(
            {Rider.work_status: WorkStatus.IDLE.value}, synchronize_session=False
        )

    def count_by_delivery_status(self, rider_email: Optional[str] = None) -> List[Dict[str, Any]]:
        """Agrupar paquetes por delivery_status"""
        query = self.db.query(
            Parcel.delivery_status.label('status'),
            func.count(Parcel.id).label('count')
        )
        if rider_email:
            query = query.filter(Parcel.assigned_rider_email == rider_email)

        results = query.group_by(Parcel.delivery_status).all()
        return [{"status": row.status, "count": row.count} for row in results]
