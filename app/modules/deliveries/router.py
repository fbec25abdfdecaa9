# app/modules/deliveries/router.py
from fastapi import APIRouter, Depends, Path, Query
from sqlalchemy.orm import Session
from typing import Optional

from app.config.database import get_db
from app.core.auth.dependencies import (
    get_current_identity, get_admin_user, get_rider_user, ensure_same_identity
)
from app.core.auth.schemas import Identity
from .service import DeliveriesService
from .schemas import (
    AssignRiderRequest, AssignRiderResponse,
    DeliveryStatusUpdateRequest, DeliveryStatusUpdateResponse,
    RecordEarningsRequest, RecordEarningsResponse,
    CashoutRequest, CashoutResponse, EarningsSummaryResponse
)

router = APIRouter()

@router.patch("/parcels/{parcel_id}/assign-rider", response_model=AssignRiderResponse)
async def assign_rider(
    data: AssignRiderRequest,
    parcel_id: int = Path(..., description="ID del paquete"),
    current_user = Depends(get_admin_user),
    db: Session = Depends(get_db)
):
    """
    Asignar un rider aprobado a un paquete

    - Paquete: `delivery_status = rider_assigned`, datos del rider y fecha
    - Rider: `work_status = in-delivery`
    - Ambos cambios en una sola transacción
    """
    service = DeliveriesService(db)
    return await service.assign_rider(parcel_id, data)

@router.patch("/parcels/{parcel_id}/status", response_model=DeliveryStatusUpdateResponse)
async def update_delivery_status(
    data: DeliveryStatusUpdateRequest,
    parcel_id: int = Path(..., description="ID del paquete"),
    current_user = Depends(get_rider_user),
    db: Session = Depends(get_db)
):
    """Marcar recolección (`in-transit`) o entrega (`delivered`)"""
    service = DeliveriesService(db)
    return await service.update_delivery_status(parcel_id, data.status, current_user.email)

@router.patch("/parcels/{parcel_id}/cashout", response_model=CashoutResponse)
async def cashout_parcel(
    parcel_id: int = Path(..., description="ID del paquete"),
    data: CashoutRequest = CashoutRequest(),
    current_user = Depends(get_rider_user),
    identity: Identity = Depends(get_current_identity),
    db: Session = Depends(get_db)
):
    """Liquidar la comisión de un paquete entregado"""
    rider_email = ensure_same_identity(identity, data.rider_email)
    service = DeliveriesService(db)
    return await service.cashout(parcel_id, rider_email)

@router.post("/rider/earnings/add", response_model=RecordEarningsResponse, status_code=201)
async def record_earnings(
    data: RecordEarningsRequest,
    current_user = Depends(get_rider_user),
    identity: Identity = Depends(get_current_identity),
    db: Session = Depends(get_db)
):
    """
    Registrar la comisión de un paquete

    **Comisión:**
    - 30% del costo si origen y destino están en la misma región
    - 40% del costo entre regiones
    """
    rider_email = ensure_same_identity(identity, data.rider_email)
    service = DeliveriesService(db)
    return await service.record_earnings(data.parcel_id, rider_email)

@router.get("/rider/earnings", response_model=EarningsSummaryResponse)
async def get_earnings_summary(
    email: Optional[str] = Query(None, description="Email del rider"),
    current_user = Depends(get_rider_user),
    identity: Identity = Depends(get_current_identity),
    db: Session = Depends(get_db)
):
    """Resumen de ganancias: total, pendiente, liquidado, hoy, semana, mes y año"""
    rider_email = ensure_same_identity(identity, email)
    service = DeliveriesService(db)
    return await service.earnings_summary(rider_email)
