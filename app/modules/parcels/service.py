# app/modules/parcels/service.py
from typing import Dict, Any, List, Optional
from datetime import datetime
from decimal import Decimal
from sqlalchemy.orm import Session
import uuid
import logging

from app.core.exceptions import NotFoundError, InvalidArgumentError
from app.shared.database.enums import (
    PaymentStatus, DeliveryStatus, CashoutStatus,
    ACTIVE_DELIVERY_STATUSES, COMPLETED_DELIVERY_STATUSES
)
from app.shared.database.models import Parcel
from app.shared.database.transaction import unit_of_work
from .repository import ParcelsRepository
from .schemas import ParcelCreateRequest, ParcelCreatedResponse, ParcelDeletedResponse

logger = logging.getLogger(__name__)

PARCEL_COLUMNS = [
    "id", "tracking_id", "title", "parcel_type", "weight",
    "sender_name", "sender_region", "sender_district",
    "receiver_name", "receiver_region", "receiver_district",
    "cost", "created_by", "payment_status", "delivery_status", "cashout_status",
    "transaction_id", "assigned_rider_id", "assigned_rider_email", "assigned_rider_name",
    "created_at", "assigned_at", "picked_at", "delivered_at", "cashed_out_at", "paid_at",
]

def serialize_parcel(parcel: Parcel) -> Dict[str, Any]:
    """Paquete como documento: campos libres + columnas"""
    data = dict(parcel.details or {})
    for column in PARCEL_COLUMNS:
        value = getattr(parcel, column)
        if isinstance(value, Decimal):
            value = float(value)
        data[column] = value
    return data

def generate_tracking_id() -> str:
    return f"PCL-{datetime.now().strftime('%Y%m%d')}-{uuid.uuid4().hex[:6].upper()}"

def _validate_enum(enum_cls, value: Optional[str], field: str) -> Optional[str]:
    if value is None or value == "":
        return None
    try:
        return enum_cls(value).value
    except ValueError:
        raise InvalidArgumentError(
            f"{field} inválido: {value}. Valores permitidos: {[e.value for e in enum_cls]}"
        )

class ParcelsService:
    def __init__(self, db: Session):
        self.db = db
        self.repository = ParcelsRepository(db)

    async def list_parcels(
        self,
        created_by: Optional[str] = None,
        payment_status: Optional[str] = None,
        delivery_status: Optional[str] = None
    ) -> List[Dict[str, Any]]:
        parcels = self.repository.list_parcels(
            created_by=created_by or None,
            payment_status=_validate_enum(PaymentStatus, payment_status, "payment_status"),
            delivery_status=_validate_enum(DeliveryStatus, delivery_status, "delivery_status")
        )
        return [serialize_parcel(p) for p in parcels]

    async def get_parcel(self, parcel_id: int) -> Dict[str, Any]:
        parcel = self.repository.get_by_id(parcel_id)
        if not parcel:
            raise NotFoundError("Paquete no encontrado")
        return serialize_parcel(parcel)

    async def create_parcel(self, data: ParcelCreateRequest, creator_email: str) -> ParcelCreatedResponse:
        """Guardar paquete tal como llega, con estados iniciales"""
        fields = {
            name: getattr(data, name)
            for name in ParcelCreateRequest.model_fields
            if getattr(data, name) is not None
        }
        parcel_data = {
            **fields,
            "tracking_id": fields.get("tracking_id") or generate_tracking_id(),
            "created_by": fields.get("created_by") or creator_email,
            "payment_status": PaymentStatus.UNPAID.value,
            "delivery_status": DeliveryStatus.PENDING.value,
            "cashout_status": CashoutStatus.NONE.value,
            "created_at": datetime.now(),
            "details": dict(data.model_extra or {})
        }

        parcel = self.repository.create_parcel(parcel_data)
        logger.info(f"📦 Paquete creado: {parcel.id} ({parcel.tracking_id}) por {parcel.created_by}")
        return ParcelCreatedResponse(inserted=True, id=parcel.id, tracking_id=parcel.tracking_id)

    async def delete_parcel(self, parcel_id: int) -> ParcelDeletedResponse:
        """Eliminar paquete; si estaba en curso, el rider queda libre cuando no tiene otros"""
        parcel = self.repository.get_by_id(parcel_id)
        if not parcel:
            raise NotFoundError("Paquete no encontrado")

        rider_id = parcel.assigned_rider_id
        rider_email = parcel.assigned_rider_email
        in_progress = parcel.delivery_status in ACTIVE_DELIVERY_STATUSES

        with unit_of_work(self.db, "eliminar paquete"):
            self.repository.delete_parcel(parcel_id)
            if in_progress and rider_id and self.repository.count_active_for_rider(rider_email) == 0:
                self.repository.set_rider_idle(rider_id)
        logger.info(f"🗑️ Paquete eliminado: {parcel_id}")
        return ParcelDeletedResponse(success=True, message="Paquete eliminado", id=parcel_id)

    async def status_counts(self) -> List[Dict[str, Any]]:
        return self.repository.count_by_delivery_status()

    async def rider_status_counts(self, rider_email: str) -> List[Dict[str, Any]]:
        return self.repository.count_by_delivery_status(rider_email=rider_email)

    async def rider_active_parcels(self, rider_email: str) -> List[Dict[str, Any]]:
        parcels = self.repository.list_for_rider(rider_email, ACTIVE_DELIVERY_STATUSES)
        return [serialize_parcel(p) for p in parcels]

    async def rider_completed_parcels(self, rider_email: str) -> List[Dict[str, Any]]:
        parcels = self.repository.list_for_rider(rider_email, COMPLETED_DELIVERY_STATUSES)
        return [serialize_parcel(p) for p in parcels]
