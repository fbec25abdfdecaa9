from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.orm import Session
from typing import List, Optional

from app.config.database import get_db
from app.shared.database.enums import Role
from app.shared.database.models import User
from app.core.auth.service import TokenVerifier, get_token_verifier
from app.core.auth.schemas import Identity

security = HTTPBearer(auto_error=False)

class AuthenticationError(HTTPException):
    def __init__(self, detail: str = "Could not validate credentials"):
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=detail,
            headers={"WWW-Authenticate": "Bearer"},
        )

class AuthorizationError(HTTPException):
    def __init__(self, detail: str = "Not enough permissions"):
        super().__init__(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=detail
        )

async def get_current_identity(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    verifier: TokenVerifier = Depends(get_token_verifier)
) -> Identity:
    """Obtener identidad actual desde el token"""

    if credentials is None or not credentials.credentials:
        raise AuthenticationError("Acceso no autorizado: falta el token")

    payload = verifier.verify_token(credentials.credentials)
    if payload is None:
        raise AuthorizationError("Acceso prohibido: token inválido")

    email = payload.get("email")
    if not email:
        raise AuthorizationError("Acceso prohibido: token sin email")

    return Identity(
        email=email,
        uid=payload.get("uid") or payload.get("sub"),
        name=payload.get("name"),
        claims=payload
    )

def require_roles(allowed_roles: List[Role]):
    """Factory para crear dependency que requiere roles específicos"""
    allowed = {Role(r).value for r in allowed_roles}

    def role_checker(
        identity: Identity = Depends(get_current_identity),
        db: Session = Depends(get_db)
    ) -> User:
        user = db.query(User).filter(User.email == identity.email).first()
        if user is None or user.role not in allowed:
            raise AuthorizationError(
                f"Rol no autorizado. Roles permitidos: {sorted(allowed)}"
            )
        return user
    return role_checker

# Dependencies específicas por rol
def get_admin_user(current_user: User = Depends(require_roles([Role.ADMIN]))) -> User:
    """Dependency para administradores"""
    return current_user

def get_rider_user(current_user: User = Depends(require_roles([Role.RIDER]))) -> User:
    """Dependency para riders"""
    return current_user

def ensure_same_identity(identity: Identity, email: Optional[str]) -> str:
    """Consultas propias: el email solicitado debe ser el del token"""
    if email and email.lower() != identity.email.lower():
        raise AuthorizationError("Acceso prohibido: el email no coincide con el token")
    return identity.email

def is_admin(db: Session, identity: Identity) -> bool:
    user = db.query(User).filter(User.email == identity.email).first()
    return user is not None and user.role == Role.ADMIN.value
