# app/modules/users/repository.py
from sqlalchemy.orm import Session
from typing import List, Optional
from datetime import datetime

from app.shared.database.enums import Role
from app.shared.database.models import User

class UsersRepository:
    def __init__(self, db: Session):
        self.db = db

    def get_by_email(self, email: str) -> Optional[User]:
        return self.db.query(User).filter(User.email == email).first()

    def create_user(self, email: str, name: Optional[str], photo_url: Optional[str]) -> User:
        """Crear usuario con rol por defecto"""
        now = datetime.now()
        user = User(
            email=email,
            name=name,
            photo_url=photo_url,
            role=Role.USER.value,
            created_at=now,
            last_login=now
        )
        self.db.add(user)
        self.db.commit()
        self.db.refresh(user)
        return user

    def touch_last_login(self, user: User) -> User:
        user.last_login = datetime.now()
        self.db.commit()
        self.db.refresh(user)
        return user

    def search_by_email(self, fragment: str, limit: int = 10) -> List[User]:
        """Búsqueda parcial sin distinguir mayúsculas"""
        return self.db.query(User).filter(
            User.email.ilike(f"%{fragment}%")
        ).order_by(User.email.asc()).limit(limit).all()

    def set_role(self, user: User, role: Role) -> User:
        user.role = role.value
        self.db.commit()
        self.db.refresh(user)
        return user
