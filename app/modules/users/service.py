# app/modules/users/service.py
from typing import List
from sqlalchemy.orm import Session
import logging

from app.core.exceptions import NotFoundError, InvalidArgumentError
from app.shared.database.enums import Role
from .repository import UsersRepository
from .schemas import (
    UserUpsertRequest, UserUpsertResponse, UserRoleResponse, UserSummary
)

logger = logging.getLogger(__name__)

class UsersService:
    def __init__(self, db: Session):
        self.db = db
        self.repository = UsersRepository(db)

    async def upsert_user(self, data: UserUpsertRequest) -> UserUpsertResponse:
        """Registrar usuario en su primer inicio de sesión"""
        existing = self.repository.get_by_email(data.email)
        if existing:
            self.repository.touch_last_login(existing)
            return UserUpsertResponse(
                inserted=False, id=existing.id, message="Usuario ya existe, último acceso actualizado"
            )

        user = self.repository.create_user(data.email, data.name, data.photo_url)
        logger.info(f"👤 Usuario creado: {user.email}")
        return UserUpsertResponse(inserted=True, id=user.id, message="Usuario creado")

    async def get_role(self, email: str) -> UserRoleResponse:
        user = self.repository.get_by_email(email)
        if not user:
            raise NotFoundError("Usuario no encontrado")
        return UserRoleResponse(email=user.email, role=user.role)

    async def search_users(self, email_fragment: str) -> List[UserSummary]:
        if not email_fragment or not email_fragment.strip():
            raise InvalidArgumentError("Se requiere un email para buscar")
        users = self.repository.search_by_email(email_fragment.strip())
        return [UserSummary.model_validate(u) for u in users]

    async def update_role(self, email: str, role: str) -> UserRoleResponse:
        """Cambio de rol realizado por un administrador"""
        try:
            new_role = Role(role)
        except ValueError:
            raise InvalidArgumentError(
                f"Rol inválido: {role}. Valores permitidos: {[r.value for r in Role]}"
            )

        user = self.repository.get_by_email(email)
        if not user:
            raise NotFoundError("Usuario no encontrado")

        self.repository.set_role(user, new_role)
        logger.info(f"🔑 Rol de {email} actualizado a {new_role.value}")
        return UserRoleResponse(email=user.email, role=user.role)
