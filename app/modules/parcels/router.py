# app/modules/parcels/router.py
from fastapi import APIRouter, Depends, Path, Query
from sqlalchemy.orm import Session
from typing import Any, Dict, List, Optional

from app.config.database import get_db
from app.core.auth.dependencies import (
    get_current_identity, get_admin_user, get_rider_user,
    ensure_same_identity, is_admin
)
from app.core.auth.schemas import Identity
from app.shared.schemas.common import StatusCount
from .service import ParcelsService
from .schemas import ParcelCreateRequest, ParcelCreatedResponse, ParcelDeletedResponse

router = APIRouter()

@router.get("/parcels", response_model=List[Dict[str, Any]])
async def list_parcels(
    email: Optional[str] = Query(None, description="Filtrar por creador"),
    payment_status: Optional[str] = Query(None, description="unpaid | paid"),
    delivery_status: Optional[str] = Query(None, description="Estado de entrega"),
    identity: Identity = Depends(get_current_identity),
    db: Session = Depends(get_db)
):
    """
    Listar paquetes, más recientes primero

    - Administradores ven todos (o filtran por `email`)
    - El resto solo ve sus propios paquetes
    """
    if not is_admin(db, identity):
        email = ensure_same_identity(identity, email)

    service = ParcelsService(db)
    return await service.list_parcels(email, payment_status, delivery_status)

@router.post("/parcels", response_model=ParcelCreatedResponse, status_code=201)
async def create_parcel(
    data: ParcelCreateRequest,
    identity: Identity = Depends(get_current_identity),
    db: Session = Depends(get_db)
):
    """Registrar un paquete nuevo"""
    service = ParcelsService(db)
    return await service.create_parcel(data, identity.email)

@router.get("/parcels/{parcel_id}", response_model=Dict[str, Any])
async def get_parcel(
    parcel_id: int = Path(..., description="ID del paquete"),
    identity: Identity = Depends(get_current_identity),
    db: Session = Depends(get_db)
):
    service = ParcelsService(db)
    return await service.get_parcel(parcel_id)

@router.delete("/parcels/{parcel_id}", response_model=ParcelDeletedResponse)
async def delete_parcel(
    parcel_id: int = Path(..., description="ID del paquete"),
    current_user = Depends(get_admin_user),
    db: Session = Depends(get_db)
):
    """Eliminar un paquete (solo administradores)"""
    service = ParcelsService(db)
    return await service.delete_parcel(parcel_id)

@router.get("/rider/parcels", response_model=List[Dict[str, Any]])
async def get_rider_parcels(
    current_user = Depends(get_rider_user),
    db: Session = Depends(get_db)
):
    """Paquetes asignados al rider pendientes de recoger o en tránsito"""
    service = ParcelsService(db)
    return await service.rider_active_parcels(current_user.email)

@router.get("/rider/parcels/completed", response_model=List[Dict[str, Any]])
async def get_rider_completed_parcels(
    current_user = Depends(get_rider_user),
    db: Session = Depends(get_db)
):
    """Paquetes entregados por el rider"""
    service = ParcelsService(db)
    return await service.rider_completed_parcels(current_user.email)

@router.get("/parcel/delivery/status-count", response_model=List[StatusCount])
async def get_status_counts(
    current_user = Depends(get_admin_user),
    db: Session = Depends(get_db)
):
    """Conteo de paquetes por estado de entrega"""
    service = ParcelsService(db)
    return await service.status_counts()

@router.get("/parcel/rider-status-count", response_model=List[StatusCount])
async def get_rider_status_counts(
    email: Optional[str] = Query(None, description="Email del rider"),
    current_user = Depends(get_rider_user),
    identity: Identity = Depends(get_current_identity),
    db: Session = Depends(get_db)
):
    """Conteo por estado de los paquetes asignados al rider"""
    rider_email = ensure_same_identity(identity, email)
    service = ParcelsService(db)
    return await service.rider_status_counts(rider_email)
