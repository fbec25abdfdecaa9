# app/modules/deliveries/service.py
from datetime import datetime
from sqlalchemy.orm import Session
import logging

from app.config.settings import Settings, settings as default_settings
from app.core.exceptions import NotFoundError, InvalidArgumentError, ConflictError
from app.core.auth.dependencies import AuthorizationError
from app.shared.database.enums import (
    DeliveryStatus, CashoutStatus, EarningStatus, RiderStatus, WorkStatus,
    DELIVERY_STATUS_RANK, COMPLETED_DELIVERY_STATUSES
)
from app.shared.database.models import Parcel
from app.shared.database.transaction import unit_of_work
from .commission import calculate_commission
from .repository import DeliveriesRepository
from .schemas import (
    AssignRiderRequest, AssignRiderResponse, DeliveryStatusUpdateResponse,
    RecordEarningsResponse, CashoutResponse, EarningEntry, EarningsSummaryResponse
)

logger = logging.getLogger(__name__)

# Estados que el rider puede fijar desde la app
RIDER_SETTABLE_STATUSES = [
    DeliveryStatus.RIDER_ASSIGNED,
    DeliveryStatus.IN_TRANSIT,
    DeliveryStatus.DELIVERED,
]

class DeliveriesService:
    """
    Flujo de asignación, entrega, ganancias y liquidación.

    Las operaciones que tocan paquete y rider se ejecutan en una sola
    transacción: o se aplican ambos cambios o ninguno.
    """

    def __init__(self, db: Session, config: Settings = default_settings):
        self.db = db
        self.config = config
        self.repository = DeliveriesRepository(db)

    def _commission_for(self, parcel: Parcel) -> int:
        return calculate_commission(
            parcel.cost,
            parcel.sender_region,
            parcel.receiver_region,
            self.config.same_region_commission_rate,
            self.config.cross_region_commission_rate
        )

    def _get_parcel_or_404(self, parcel_id: int) -> Parcel:
        parcel = self.repository.get_parcel(parcel_id)
        if not parcel:
            raise NotFoundError("Paquete no encontrado")
        return parcel

    async def assign_rider(self, parcel_id: int, data: AssignRiderRequest) -> AssignRiderResponse:
        """Asignar rider: paquete a `rider_assigned` y rider a `in-delivery`"""
        parcel = self._get_parcel_or_404(parcel_id)

        rider = self.repository.get_rider(data.rider_id)
        if not rider:
            raise NotFoundError("Rider no encontrado")
        if rider.status != RiderStatus.APPROVED.value:
            raise ConflictError(f"El rider no está aprobado (estado: {rider.status})")

        current_rank = DELIVERY_STATUS_RANK[DeliveryStatus(parcel.delivery_status)]
        if current_rank > DELIVERY_STATUS_RANK[DeliveryStatus.RIDER_ASSIGNED]:
            raise ConflictError(
                f"No se puede asignar rider a un paquete en estado '{parcel.delivery_status}'"
            )

        previous_rider_id = parcel.assigned_rider_id
        previous_rider_email = parcel.assigned_rider_email
        rider_email = data.rider_email or rider.email
        now = datetime.now()

        with unit_of_work(self.db, "asignar rider"):
            self.repository.assign_rider(parcel, rider.id, data.rider_name or rider.name, rider_email, now)
            self.repository.set_work_status(rider.id, WorkStatus.IN_DELIVERY.value)
            # Reasignación: liberar al rider anterior si no tiene otros paquetes
            if previous_rider_id and previous_rider_id != rider.id:
                if self.repository.count_active_parcels(previous_rider_email, exclude_parcel_id=parcel_id) == 0:
                    self.repository.set_work_status(previous_rider_id, WorkStatus.IDLE.value)

        logger.info(
            f"🛵 Paquete {parcel_id} asignado a {rider_email}"
            + (f" (antes {previous_rider_email})" if previous_rider_email else "")
        )
        return AssignRiderResponse(
            success=True,
            parcel_id=parcel_id,
            rider_id=rider.id,
            rider_email=rider_email,
            delivery_status=DeliveryStatus.RIDER_ASSIGNED.value,
            assigned_at=now
        )

    async def update_delivery_status(self, parcel_id: int, status: str, rider_email: str) -> DeliveryStatusUpdateResponse:
        """
        Avanzar el estado de entrega del paquete

        **Reglas:**
        - Solo `rider_assigned`, `in-transit` o `delivered`
        - Nunca retrocede; repetir el estado actual no cambia nada
        - Un paquete entregado ya no cambia de estado
        - `in-transit` registra la recolección y `delivered` la entrega
        """
        try:
            new_status = DeliveryStatus(status)
        except ValueError:
            new_status = None
        if new_status not in RIDER_SETTABLE_STATUSES:
            raise InvalidArgumentError(
                f"Estado inválido: {status}. Valores permitidos: {[s.value for s in RIDER_SETTABLE_STATUSES]}"
            )

        parcel = self._get_parcel_or_404(parcel_id)
        if parcel.assigned_rider_email != rider_email:
            raise AuthorizationError("El paquete no está asignado a este rider")

        current_status = DeliveryStatus(parcel.delivery_status)
        if new_status == current_status:
            return DeliveryStatusUpdateResponse(
                success=True,
                parcel_id=parcel_id,
                delivery_status=current_status.value,
                changed=False,
                picked_at=parcel.picked_at,
                delivered_at=parcel.delivered_at
            )
        if parcel.delivery_status in COMPLETED_DELIVERY_STATUSES:
            raise ConflictError(
                f"El paquete ya está en '{current_status.value}', un estado final"
            )
        if DELIVERY_STATUS_RANK[new_status] < DELIVERY_STATUS_RANK[current_status]:
            raise ConflictError(
                f"No se puede pasar de '{current_status.value}' a '{new_status.value}'"
            )

        now = datetime.now()
        with unit_of_work(self.db, "actualizar estado de entrega"):
            self.repository.set_delivery_status(parcel, new_status, now)
            if new_status == DeliveryStatus.DELIVERED and parcel.assigned_rider_id:
                pending = self.repository.count_active_parcels(rider_email, exclude_parcel_id=parcel_id)
                if pending == 0:
                    self.repository.set_work_status(parcel.assigned_rider_id, WorkStatus.IDLE.value)

        logger.info(f"📍 Paquete {parcel_id}: {current_status.value} -> {new_status.value}")
        return DeliveryStatusUpdateResponse(
            success=True,
            parcel_id=parcel_id,
            delivery_status=new_status.value,
            changed=True,
            picked_at=parcel.picked_at,
            delivered_at=parcel.delivered_at
        )

    async def record_earnings(self, parcel_id: int, rider_email: str) -> RecordEarningsResponse:
        """Registrar la comisión del rider por un paquete (una sola vez)"""
        parcel = self._get_parcel_or_404(parcel_id)
        if parcel.assigned_rider_email != rider_email:
            raise AuthorizationError("El paquete no está asignado a este rider")
        if parcel.delivery_status not in COMPLETED_DELIVERY_STATUSES:
            raise ConflictError("Solo se registran ganancias de paquetes entregados")

        rider = self.repository.get_rider_by_email(rider_email)
        if not rider:
            raise NotFoundError("Rider no encontrado")

        if self.repository.get_earning(rider.id, parcel_id):
            raise ConflictError("Ya existen ganancias registradas para este paquete")

        amount = self._commission_for(parcel)
        with unit_of_work(self.db, "registrar ganancias"):
            self.repository.add_earning(rider.id, parcel_id, amount, datetime.now())

        self.db.refresh(rider)
        logger.info(f"💰 Ganancia registrada: {amount} para {rider_email} (paquete {parcel_id})")
        return RecordEarningsResponse(
            success=True,
            parcel_id=parcel_id,
            amount=amount,
            total_earnings=rider.total_earnings,
            pending_earnings=rider.pending_earnings
        )

    async def cashout(self, parcel_id: int, rider_email: str) -> CashoutResponse:
        """
        Liquidar la comisión de un paquete

        El paquete pasa a `cashed_out` y el monto se mueve de pendiente a
        liquidado en el rider. Sin entrada pendiente en el historial no se
        modifica nada.
        """
        parcel = self._get_parcel_or_404(parcel_id)
        if parcel.cashout_status == CashoutStatus.CASHED_OUT.value:
            raise ConflictError("El paquete ya fue liquidado")

        rider = self.repository.get_rider_by_email(rider_email)
        if not rider:
            raise NotFoundError("Rider no encontrado")

        earning = self.repository.get_earning(rider.id, parcel_id)
        if not earning:
            raise NotFoundError("No hay ganancias registradas para este paquete")
        if earning.status == EarningStatus.CASHED_OUT.value:
            raise ConflictError("La ganancia de este paquete ya fue liquidada")

        amount = self._commission_for(parcel)
        now = datetime.now()
        with unit_of_work(self.db, "liquidar ganancias"):
            self.repository.mark_parcel_cashed_out(parcel, now)
            self.repository.cash_out_earning(rider.id, earning, amount, now)

        self.db.refresh(rider)
        logger.info(f"💸 Liquidación: {amount} para {rider_email} (paquete {parcel_id})")
        return CashoutResponse(
            success=True,
            parcel_id=parcel_id,
            amount=amount,
            cashout_status=CashoutStatus.CASHED_OUT.value,
            cashed_out_at=now,
            pending_earnings=rider.pending_earnings,
            cashed_out_earnings=rider.cashed_out_earnings
        )

    async def earnings_summary(self, rider_email: str) -> EarningsSummaryResponse:
        """Totales del rider y ganancias de hoy, semana ISO, mes y año"""
        rider = self.repository.get_rider_by_email(rider_email)
        if not rider:
            raise NotFoundError("Rider no encontrado")

        history = self.repository.list_earnings(rider.id)
        now = datetime.now()
        today = now.date()
        this_week = today.isocalendar()[:2]

        buckets = {"today": 0, "week": 0, "month": 0, "year": 0}
        for entry in history:
            entry_date = entry.date.date()
            if entry_date == today:
                buckets["today"] += entry.amount
            if entry_date.isocalendar()[:2] == this_week:
                buckets["week"] += entry.amount
            if (entry_date.year, entry_date.month) == (today.year, today.month):
                buckets["month"] += entry.amount
            if entry_date.year == today.year:
                buckets["year"] += entry.amount

        return EarningsSummaryResponse(
            total=rider.total_earnings,
            cashed_out=rider.cashed_out_earnings,
            pending=rider.pending_earnings,
            history=[EarningEntry.model_validate(e) for e in history],
            **buckets
        )
