# app/modules/trackings/repository.py
from sqlalchemy.orm import Session
from typing import List, Dict, Any

from app.shared.database.models import TrackingEvent

class TrackingsRepository:
    def __init__(self, db: Session):
        self.db = db

    def append_event(self, event_data: Dict[str, Any]) -> TrackingEvent:
        """Solo inserción: los eventos nunca se modifican ni se eliminan"""
        event = TrackingEvent(**event_data)
        self.db.add(event)
        self.db.commit()
        self.db.refresh(event)
        return event

    def list_events(self, tracking_id: str) -> List[TrackingEvent]:
        return self.db.query(TrackingEvent).filter(
            TrackingEvent.tracking_id == tracking_id
        ).order_by(TrackingEvent.timestamp.asc(), TrackingEvent.id.asc()).all()
