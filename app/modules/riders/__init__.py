# app/modules/riders/__init__.py
"""
Módulo Riders - Solicitudes y estado de riders

- Solicitud de alta como rider
- Listados de pendientes y activos (administradores)
- Aprobación con promoción del rol del usuario
"""

from .router import router
from .service import RidersService
from .repository import RidersRepository

__all__ = [
    "router",
    "RidersService",
    "RidersRepository"
]
