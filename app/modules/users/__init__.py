# app/modules/users/__init__.py
"""
Módulo Users - Cuentas y roles

- Registro en el primer inicio de sesión (upsert por email)
- Consulta de rol
- Búsqueda y cambio de rol por administradores
"""

from .router import router
from .service import UsersService
from .repository import UsersRepository

__all__ = [
    "router",
    "UsersService",
    "UsersRepository"
]
