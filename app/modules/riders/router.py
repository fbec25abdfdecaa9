# app/modules/riders/router.py
from fastapi import APIRouter, Depends, Path, Query
from sqlalchemy.orm import Session
from typing import Any, Dict, List, Optional

from app.config.database import get_db
from app.core.auth.dependencies import get_current_identity, get_admin_user, ensure_same_identity
from app.core.auth.schemas import Identity
from .service import RidersService
from .schemas import (
    RiderApplicationRequest, RiderCreatedResponse,
    RiderStatusUpdateRequest, RiderStatusUpdateResponse
)

router = APIRouter()

@router.post("/riders", response_model=RiderCreatedResponse, status_code=201)
async def apply_as_rider(
    data: RiderApplicationRequest,
    identity: Identity = Depends(get_current_identity),
    db: Session = Depends(get_db)
):
    """Enviar solicitud para trabajar como rider"""
    ensure_same_identity(identity, data.email)
    service = RidersService(db)
    return await service.create_rider(data)

@router.get("/riders/pending", response_model=List[Dict[str, Any]])
async def get_pending_riders(
    current_user = Depends(get_admin_user),
    db: Session = Depends(get_db)
):
    """Solicitudes pendientes de revisión"""
    service = RidersService(db)
    return await service.list_pending()

@router.get("/riders/active", response_model=List[Dict[str, Any]])
async def get_active_riders(
    district: Optional[str] = Query(None, description="Filtrar por distrito"),
    city: Optional[str] = Query(None, description="Filtrar por ciudad"),
    current_user = Depends(get_admin_user),
    db: Session = Depends(get_db)
):
    """Riders aprobados, opcionalmente por distrito / ciudad"""
    service = RidersService(db)
    return await service.list_active(district, city)

@router.patch("/riders/{rider_id}/status", response_model=RiderStatusUpdateResponse)
async def update_rider_status(
    data: RiderStatusUpdateRequest,
    rider_id: int = Path(..., description="ID del rider"),
    current_user = Depends(get_admin_user),
    db: Session = Depends(get_db)
):
    """
    Aprobar, desactivar o cancelar un rider

    **Efectos al aprobar:**
    - Se registra `approved_at`
    - El usuario del `email` enviado pasa a rol `rider`
    """
    service = RidersService(db)
    return await service.update_status(rider_id, data.status, data.email)
