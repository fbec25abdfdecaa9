# app/api/v1/router.py
from fastapi import APIRouter
from app.modules.users.router import router as users_router
from app.modules.parcels.router import router as parcels_router
from app.modules.riders.router import router as riders_router
from app.modules.deliveries.router import router as deliveries_router
from app.modules.trackings.router import router as trackings_router
from app.modules.payments.router import router as payments_router

# Crear router principal de la API
api_router = APIRouter()

# ==================== CUENTAS ====================

api_router.include_router(users_router, tags=["Users"])

# ==================== PAQUETES Y RIDERS ====================

api_router.include_router(parcels_router, tags=["Parcels"])

api_router.include_router(riders_router, tags=["Riders"])

api_router.include_router(deliveries_router, tags=["Deliveries & Earnings"])

# ==================== SEGUIMIENTO Y PAGOS ====================

api_router.include_router(trackings_router, tags=["Tracking"])

api_router.include_router(payments_router, tags=["Payments"])
