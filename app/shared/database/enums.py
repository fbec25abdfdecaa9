# app/shared/database/enums.py
from enum import Enum


class Role(str, Enum):
    USER = "user"
    RIDER = "rider"
    ADMIN = "admin"


class PaymentStatus(str, Enum):
    UNPAID = "unpaid"
    PAID = "paid"


class DeliveryStatus(str, Enum):
    PENDING = "pending"
    RIDER_ASSIGNED = "rider_assigned"
    IN_TRANSIT = "in-transit"
    DELIVERED = "delivered"
    SERVICE_CENTER_DELIVERED = "service_center_delivered"


class CashoutStatus(str, Enum):
    NONE = "none"
    CASHED_OUT = "cashed_out"


class RiderStatus(str, Enum):
    PENDING = "pending"
    APPROVED = "approved"
    INACTIVE = "inactive"
    CANCELLED = "cancelled"


class WorkStatus(str, Enum):
    IDLE = "idle"
    IN_DELIVERY = "in-delivery"


class EarningStatus(str, Enum):
    PENDING = "pending"
    CASHED_OUT = "cashed_out"


# Orden del ciclo de vida; ambos tipos de entrega son terminales
DELIVERY_STATUS_RANK = {
    DeliveryStatus.PENDING: 0,
    DeliveryStatus.RIDER_ASSIGNED: 1,
    DeliveryStatus.IN_TRANSIT: 2,
    DeliveryStatus.DELIVERED: 3,
    DeliveryStatus.SERVICE_CENTER_DELIVERED: 3,
}

ACTIVE_DELIVERY_STATUSES = [DeliveryStatus.RIDER_ASSIGNED.value, DeliveryStatus.IN_TRANSIT.value]
COMPLETED_DELIVERY_STATUSES = [DeliveryStatus.DELIVERED.value, DeliveryStatus.SERVICE_CENTER_DELIVERED.value]
