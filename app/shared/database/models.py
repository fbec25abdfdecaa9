# app/shared/database/models.py
from sqlalchemy import (
    Column, Integer, String, DateTime, Text, Numeric, ForeignKey,
    UniqueConstraint, JSON, func
)
from sqlalchemy.orm import relationship, declarative_base
from sqlalchemy.dialects.postgresql import JSONB

from app.shared.database.enums import (
    Role, PaymentStatus, DeliveryStatus, CashoutStatus,
    RiderStatus, WorkStatus, EarningStatus
)

Base = declarative_base()

# JSONB en PostgreSQL, JSON genérico en el resto de motores
FlexibleJSON = JSON().with_variant(JSONB(), "postgresql")


# =====================================================
# USUARIOS
# =====================================================

class User(Base):
    """Usuario autenticado por el proveedor de identidad"""
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String(255), unique=True, nullable=False, index=True)
    name = Column(String(255))
    photo_url = Column(String(500))
    role = Column(String(20), nullable=False, default=Role.USER.value)
    created_at = Column(DateTime, nullable=False, server_default=func.current_timestamp())
    last_login = Column(DateTime)


# =====================================================
# PAQUETES
# =====================================================

class Parcel(Base):
    """Envío registrado por un usuario"""
    __tablename__ = "parcels"

    id = Column(Integer, primary_key=True, index=True)
    tracking_id = Column(String(50), unique=True, index=True)
    title = Column(String(255))
    parcel_type = Column(String(50))
    weight = Column(Numeric(10, 2))

    # Origen / destino
    sender_name = Column(String(255))
    sender_region = Column(String(100))
    sender_district = Column(String(100))
    receiver_name = Column(String(255))
    receiver_region = Column(String(100))
    receiver_district = Column(String(100))

    cost = Column(Numeric(10, 2), nullable=False, default=0)
    created_by = Column(String(255), nullable=False, index=True)

    # Estados
    payment_status = Column(String(20), nullable=False, default=PaymentStatus.UNPAID.value)
    delivery_status = Column(String(30), nullable=False, default=DeliveryStatus.PENDING.value, index=True)
    cashout_status = Column(String(20), nullable=False, default=CashoutStatus.NONE.value)
    transaction_id = Column(String(255))

    # Rider asignado
    assigned_rider_id = Column(Integer, ForeignKey("riders.id"))
    assigned_rider_email = Column(String(255), index=True)
    assigned_rider_name = Column(String(255))

    # Tiempos
    created_at = Column(DateTime, nullable=False, server_default=func.current_timestamp())
    assigned_at = Column(DateTime)
    picked_at = Column(DateTime)
    delivered_at = Column(DateTime)
    cashed_out_at = Column(DateTime)
    paid_at = Column(DateTime)

    # Campos libres enviados por el cliente
    details = Column(FlexibleJSON, default=dict)

    assigned_rider = relationship("Rider", back_populates="parcels")


# =====================================================
# RIDERS
# =====================================================

class Rider(Base):
    """Solicitud / perfil de rider con su libro de ganancias"""
    __tablename__ = "riders"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255))
    email = Column(String(255), unique=True, nullable=False, index=True)
    phone = Column(String(50))
    region = Column(String(100))
    district = Column(String(100), index=True)
    city = Column(String(100), index=True)
    national_id = Column(String(50))
    bike_brand = Column(String(100))
    bike_registration = Column(String(50))

    status = Column(String(20), nullable=False, default=RiderStatus.PENDING.value, index=True)
    work_status = Column(String(20), nullable=False, default=WorkStatus.IDLE.value)

    # pending_earnings + cashed_out_earnings == total_earnings
    total_earnings = Column(Integer, nullable=False, default=0)
    pending_earnings = Column(Integer, nullable=False, default=0)
    cashed_out_earnings = Column(Integer, nullable=False, default=0)

    created_at = Column(DateTime, nullable=False, server_default=func.current_timestamp())
    approved_at = Column(DateTime)

    details = Column(FlexibleJSON, default=dict)

    parcels = relationship("Parcel", back_populates="assigned_rider")
    earnings_history = relationship(
        "RiderEarning", back_populates="rider", order_by="RiderEarning.id"
    )


class RiderEarning(Base):
    """Entrada del historial de ganancias (una por paquete)"""
    __tablename__ = "rider_earnings"

    id = Column(Integer, primary_key=True, index=True)
    rider_id = Column(Integer, ForeignKey("riders.id"), nullable=False, index=True)
    parcel_id = Column(Integer, nullable=False, index=True)
    amount = Column(Integer, nullable=False)
    status = Column(String(20), nullable=False, default=EarningStatus.PENDING.value)
    date = Column(DateTime, nullable=False)
    cashed_out_at = Column(DateTime)

    rider = relationship("Rider", back_populates="earnings_history")

    __table_args__ = (
        UniqueConstraint('rider_id', 'parcel_id', name='uq_rider_earning_parcel'),
    )


# =====================================================
# PAGOS
# =====================================================

class Payment(Base):
    """Confirmación de pago de un paquete (solo inserción)"""
    __tablename__ = "payments"

    id = Column(Integer, primary_key=True, index=True)
    parcel_id = Column(Integer, nullable=False, index=True)
    user_email = Column(String(255), nullable=False, index=True)
    transaction_id = Column(String(255), nullable=False)
    amount = Column(Numeric(12, 2), nullable=False)
    payment_method = Column(String(50))
    payment_time = Column(DateTime, nullable=False)


# =====================================================
# TRACKING
# =====================================================

class TrackingEvent(Base):
    """Evento de seguimiento (solo inserción)"""
    __tablename__ = "tracking_events"

    id = Column(Integer, primary_key=True, index=True)
    tracking_id = Column(String(50), nullable=False, index=True)
    parcel_id = Column(Integer)
    status = Column(String(50), nullable=False)
    message = Column(Text)
    updated_by = Column(String(255))
    timestamp = Column(DateTime, nullable=False)
