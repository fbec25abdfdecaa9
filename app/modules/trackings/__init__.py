# app/modules/trackings/__init__.py
"""
Módulo Trackings - Bitácora de seguimiento por código

Eventos solo de inserción, consultados en orden cronológico.
"""

from .router import router
from .service import TrackingsService
from .repository import TrackingsRepository

__all__ = [
    "router",
    "TrackingsService",
    "TrackingsRepository"
]
