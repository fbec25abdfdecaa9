# app/modules/payments/__init__.py
"""
Módulo Payments - Confirmación de pagos

- Confirmación de pago y actualización del paquete
- Historial de pagos del usuario
- Intentos de cobro en la pasarela externa
"""

from .router import router
from .service import PaymentsService
from .repository import PaymentsRepository

__all__ = [
    "router",
    "PaymentsService",
    "PaymentsRepository"
]
