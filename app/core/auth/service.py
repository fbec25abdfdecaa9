from typing import Optional
from jose import jwt, JWTError
import logging

from app.config.settings import Settings, settings

logger = logging.getLogger(__name__)

class TokenVerifier:
    """Verificación de tokens emitidos por el proveedor de identidad"""

    def __init__(
        self,
        secret_key: str,
        algorithm: str = "HS256",
        audience: Optional[str] = None,
        issuer: Optional[str] = None
    ):
        self.secret_key = secret_key
        self.algorithm = algorithm
        self.audience = audience
        self.issuer = issuer

    @classmethod
    def from_settings(cls, config: Settings) -> "TokenVerifier":
        return cls(
            secret_key=config.identity_secret_key,
            algorithm=config.identity_algorithm,
            audience=config.identity_audience,
            issuer=config.identity_issuer
        )

    def verify_token(self, token: str) -> Optional[dict]:
        """Verificar y decodificar token"""
        options = {"verify_aud": self.audience is not None}
        try:
            payload = jwt.decode(
                token,
                self.secret_key,
                algorithms=[self.algorithm],
                audience=self.audience,
                issuer=self.issuer,
                options=options
            )
            return payload
        except JWTError as e:
            logger.warning(f"Token rechazado: {e}")
            return None

    def create_token(self, claims: dict) -> str:
        """Emitir token firmado (scripts locales y pruebas)"""
        to_encode = claims.copy()
        if self.audience and "aud" not in to_encode:
            to_encode["aud"] = self.audience
        if self.issuer and "iss" not in to_encode:
            to_encode["iss"] = self.issuer
        return jwt.encode(to_encode, self.secret_key, algorithm=self.algorithm)


def get_token_verifier() -> TokenVerifier:
    """Dependency que construye el verificador desde la configuración"""
    return TokenVerifier.from_settings(settings)
