from pydantic import BaseModel, Field
from typing import Any, Dict, Optional

class Identity(BaseModel):
    """Identidad decodificada del token del proveedor"""
    email: str = Field(..., description="Email verificado del usuario")
    uid: Optional[str] = Field(None, description="Identificador en el proveedor")
    name: Optional[str] = None
    claims: Dict[str, Any] = Field(default_factory=dict)

    class Config:
        json_schema_extra = {
            "example": {
                "email": "rider@parcels.com",
                "uid": "8f2c1a",
                "name": "Rahim Uddin",
                "claims": {}
            }
        }
