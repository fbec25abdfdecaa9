# app/modules/users/router.py
from fastapi import APIRouter, Depends, Path, Query
from sqlalchemy.orm import Session
from typing import List

from app.config.database import get_db
from app.core.auth.dependencies import get_current_identity, get_admin_user
from app.core.auth.schemas import Identity
from .service import UsersService
from .schemas import (
    UserUpsertRequest, UserUpsertResponse, UserRoleResponse,
    RoleUpdateRequest, UserSummary
)

router = APIRouter()

@router.post("/users", response_model=UserUpsertResponse)
async def upsert_user(
    data: UserUpsertRequest,
    db: Session = Depends(get_db)
):
    """
    Registrar usuario tras iniciar sesión

    - Si el email ya existe solo se actualiza `last_login`
    - Si no existe se crea con rol `user`
    """
    service = UsersService(db)
    return await service.upsert_user(data)

@router.get("/user/role", response_model=UserRoleResponse)
async def get_user_role(
    email: str = Query(..., description="Email del usuario"),
    identity: Identity = Depends(get_current_identity),
    db: Session = Depends(get_db)
):
    """Consultar el rol de un usuario"""
    service = UsersService(db)
    return await service.get_role(email)

@router.get("/user/search", response_model=List[UserSummary])
async def search_users(
    email: str = Query("", description="Fragmento del email"),
    current_user = Depends(get_admin_user),
    db: Session = Depends(get_db)
):
    """Buscar usuarios por email (máximo 10 resultados)"""
    service = UsersService(db)
    return await service.search_users(email)

@router.patch("/users/{email}/role", response_model=UserRoleResponse)
async def update_user_role(
    data: RoleUpdateRequest,
    email: str = Path(..., description="Email del usuario"),
    current_user = Depends(get_admin_user),
    db: Session = Depends(get_db)
):
    """Cambiar el rol de un usuario (solo administradores)"""
    service = UsersService(db)
    return await service.update_role(email, data.role)
