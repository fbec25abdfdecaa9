# app/modules/riders/service.py
from typing import Dict, Any, List, Optional
from datetime import datetime
from sqlalchemy.orm import Session
import logging

from app.core.exceptions import NotFoundError, InvalidArgumentError, ConflictError
from app.shared.database.enums import Role, RiderStatus, WorkStatus
from app.shared.database.models import Rider
from app.shared.database.transaction import unit_of_work
from .repository import RidersRepository
from .schemas import (
    RiderApplicationRequest, RiderCreatedResponse, RiderStatusUpdateResponse
)

logger = logging.getLogger(__name__)

RIDER_COLUMNS = [
    "id", "name", "email", "phone", "region", "district", "city",
    "national_id", "bike_brand", "bike_registration", "status", "work_status",
    "total_earnings", "pending_earnings", "cashed_out_earnings",
    "created_at", "approved_at",
]

def serialize_rider(rider: Rider) -> Dict[str, Any]:
    data = dict(rider.details or {})
    for column in RIDER_COLUMNS:
        data[column] = getattr(rider, column)
    return data

class RidersService:
    def __init__(self, db: Session):
        self.db = db
        self.repository = RidersRepository(db)

    async def create_rider(self, data: RiderApplicationRequest) -> RiderCreatedResponse:
        """Registrar solicitud de rider en estado pendiente"""
        if self.repository.get_by_email(data.email):
            raise ConflictError("Ya existe una solicitud de rider para este email")

        fields = {
            name: getattr(data, name)
            for name in RiderApplicationRequest.model_fields
            if getattr(data, name) is not None
        }
        rider = self.repository.create_rider({
            **fields,
            "status": RiderStatus.PENDING.value,
            "work_status": WorkStatus.IDLE.value,
            "total_earnings": 0,
            "pending_earnings": 0,
            "cashed_out_earnings": 0,
            "created_at": datetime.now(),
            "details": dict(data.model_extra or {})
        })
        logger.info(f"🛵 Solicitud de rider recibida: {rider.email}")
        return RiderCreatedResponse(inserted=True, id=rider.id, status=rider.status)

    async def list_pending(self) -> List[Dict[str, Any]]:
        riders = self.repository.list_by_status(RiderStatus.PENDING.value)
        return [serialize_rider(r) for r in riders]

    async def list_active(self, district: Optional[str] = None, city: Optional[str] = None) -> List[Dict[str, Any]]:
        riders = self.repository.list_by_status(RiderStatus.APPROVED.value, district, city)
        return [serialize_rider(r) for r in riders]

    async def update_status(self, rider_id: int, status: str, email: Optional[str] = None) -> RiderStatusUpdateResponse:
        """
        Cambiar estado del rider

        Al aprobar se registra la fecha de aprobación y, si se envía email,
        el usuario pasa a rol `rider` en la misma transacción.
        """
        try:
            new_status = RiderStatus(status)
        except ValueError:
            raise InvalidArgumentError(
                f"Estado inválido: {status}. Valores permitidos: {[s.value for s in RiderStatus]}"
            )

        rider = self.repository.get_by_id(rider_id)
        if not rider:
            raise NotFoundError("Rider no encontrado")

        approved = new_status == RiderStatus.APPROVED
        role_updated = False
        with unit_of_work(self.db, "actualizar estado del rider"):
            self.repository.update_status(rider, new_status.value, approved)
            if approved and email:
                role_updated = self.repository.promote_user(email, Role.RIDER.value)

        logger.info(f"🛵 Rider {rider_id} -> {new_status.value} (rol actualizado: {role_updated})")
        return RiderStatusUpdateResponse(
            success=True, id=rider_id, status=new_status.value, role_updated=role_updated
        )
