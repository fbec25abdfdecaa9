# app/modules/parcels/__init__.py
"""
Módulo Parcels - Registro y consulta de paquetes

- Alta, consulta y baja de paquetes
- Listados filtrados por creador, pago y estado de entrega
- Listados del rider (activos / completados)
- Conteos por estado de entrega
"""

from .router import router
from .service import ParcelsService
from .repository import ParcelsRepository

__all__ = [
    "router",
    "ParcelsService",
    "ParcelsRepository"
]
