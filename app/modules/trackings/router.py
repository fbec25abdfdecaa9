# app/modules/trackings/router.py
from fastapi import APIRouter, Depends, Path
from sqlalchemy.orm import Session
from typing import List

from app.config.database import get_db
from app.core.auth.dependencies import get_current_identity
from app.core.auth.schemas import Identity
from app.shared.schemas.common import InsertResponse
from .service import TrackingsService
from .schemas import TrackingEventCreate, TrackingEventResponse

router = APIRouter()

@router.post("/trackings", response_model=InsertResponse, status_code=201)
async def append_tracking_event(
    data: TrackingEventCreate,
    identity: Identity = Depends(get_current_identity),
    db: Session = Depends(get_db)
):
    """Agregar evento de seguimiento (`tracking_id` y `status` obligatorios)"""
    service = TrackingsService(db)
    return await service.append_event(data, identity.email)

@router.get("/trackings/{tracking_id}", response_model=List[TrackingEventResponse])
async def list_tracking_events(
    tracking_id: str = Path(..., description="Código de seguimiento"),
    db: Session = Depends(get_db)
):
    """Historial de seguimiento en orden cronológico"""
    service = TrackingsService(db)
    return await service.list_events(tracking_id)
