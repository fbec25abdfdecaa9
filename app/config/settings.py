# app/config/settings.py
from pydantic_settings import BaseSettings
from typing import List, Optional
import os

class Settings(BaseSettings):
    # App Info
    app_name: str = "Parcel Delivery API"
    version: str = "1.0.0"
    debug: bool = False

    # Database
    database_url: str = os.getenv("DATABASE_URL", "sqlite:///./parcels.db")

    # Identity provider - tokens emitidos por el proveedor externo
    identity_secret_key: str = os.getenv("IDENTITY_SECRET_KEY", "change-in-production")
    identity_algorithm: str = "HS256"
    identity_audience: Optional[str] = None
    identity_issuer: Optional[str] = None

    # Payment gateway
    payment_gateway_url: str = "https://api.stripe.com"
    payment_gateway_secret_key: Optional[str] = None
    payment_gateway_timeout: int = 30
    payment_currency: str = "usd"

    # Comisiones del rider
    same_region_commission_rate: float = 0.30
    cross_region_commission_rate: float = 0.40

    # CORS
    cors_origins: List[str] = ["*"]

    # Server
    host: str = "0.0.0.0"
    port: int = int(os.getenv("PORT", 5000))

    @property
    def database_url_with_ssl(self) -> str:
        """Agregar SSL para conexiones PostgreSQL remotas"""
        if self.database_url.startswith("postgresql") and "localhost" not in self.database_url:
            if "sslmode=" not in self.database_url:
                separator = "&" if "?" in self.database_url else "?"
                return f"{self.database_url}{separator}sslmode=require"
        return self.database_url

    class Config:
        env_file = ".env"
        case_sensitive = False
        extra = 'ignore'

settings = Settings()
