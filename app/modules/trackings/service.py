# app/modules/trackings/service.py
from typing import List
from datetime import datetime
from sqlalchemy.orm import Session
import logging

from app.core.exceptions import InvalidArgumentError
from app.shared.schemas.common import InsertResponse
from .repository import TrackingsRepository
from .schemas import TrackingEventCreate, TrackingEventResponse

logger = logging.getLogger(__name__)

class TrackingsService:
    def __init__(self, db: Session):
        self.db = db
        self.repository = TrackingsRepository(db)

    async def append_event(self, data: TrackingEventCreate, updated_by: str) -> InsertResponse:
        tracking_id = (data.tracking_id or "").strip()
        status = (data.status or "").strip()
        if not tracking_id or not status:
            raise InvalidArgumentError("tracking_id y status son obligatorios")

        event = self.repository.append_event({
            "tracking_id": tracking_id,
            "parcel_id": data.parcel_id,
            "status": status,
            "message": data.message,
            "updated_by": data.updated_by or updated_by,
            "timestamp": datetime.now()
        })
        logger.info(f"🧭 Tracking {tracking_id}: {status}")
        return InsertResponse(inserted=True, id=event.id)

    async def list_events(self, tracking_id: str) -> List[TrackingEventResponse]:
        events = self.repository.list_events(tracking_id)
        return [TrackingEventResponse.model_validate(e) for e in events]
