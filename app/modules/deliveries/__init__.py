# app/modules/deliveries/__init__.py
"""
Módulo Deliveries - Asignación, entrega y ganancias del rider

- Asignar rider a un paquete
- Avanzar el estado de entrega (recolección / entrega)
- Registrar la comisión del rider por paquete
- Liquidar comisiones y resumen de ganancias

Arquitectura:
- router.py: Endpoints del flujo
- service.py: Reglas de negocio y transacciones
- repository.py: Acceso a datos (sin commit)
- commission.py: Cálculo de comisión
- schemas.py: Modelos de request/response
"""

from .router import router
from .service import DeliveriesService
from .repository import DeliveriesRepository
from .commission import calculate_commission

__all__ = [
    "router",
    "DeliveriesService",
    "DeliveriesRepository",
    "calculate_commission"
]
