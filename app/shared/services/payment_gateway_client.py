# app/shared/services/payment_gateway_client.py
import httpx
import logging
from typing import Dict, Any, Optional

from app.config.settings import Settings, settings
from app.core.exceptions import InternalError

logger = logging.getLogger(__name__)

class PaymentGatewayClient:
    """Cliente para la pasarela de pagos (API de payment intents)"""

    def __init__(
        self,
        base_url: str,
        secret_key: Optional[str],
        currency: str = "usd",
        timeout: int = 30,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        self.base_url = base_url.rstrip("/")
        self.secret_key = secret_key
        self.currency = currency
        self.timeout = timeout
        self.transport = transport

    @classmethod
    def from_settings(cls, config: Settings) -> "PaymentGatewayClient":
        return cls(
            base_url=config.payment_gateway_url,
            secret_key=config.payment_gateway_secret_key,
            currency=config.payment_currency,
            timeout=config.payment_gateway_timeout
        )

    def _get_headers(self) -> Dict[str, str]:
        """Headers para autenticación"""
        headers = {}
        if self.secret_key:
            headers["Authorization"] = f"Bearer {self.secret_key}"
        return headers

    async def create_payment_intent(self, amount_in_cents: int) -> Dict[str, Any]:
        """
        Crear intento de cobro en la pasarela

        Cualquier error de la pasarela se devuelve tal cual como error interno.
        """
        data = {
            "amount": amount_in_cents,
            "currency": self.currency,
            "payment_method_types[]": "card",
        }
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                response = await client.post(
                    f"{self.base_url}/v1/payment_intents",
                    data=data,
                    headers=self._get_headers()
                )
        except httpx.HTTPError as e:
            logger.error(f"❌ Error comunicándose con la pasarela de pagos: {e}")
            raise InternalError(str(e))

        if response.status_code >= 400:
            message = self._error_message(response)
            logger.error(f"❌ Pasarela de pagos respondió {response.status_code}: {message}")
            raise InternalError(message)

        result = response.json()
        logger.info(f"✅ Payment intent creado: {result.get('id')}")
        return result

    @staticmethod
    def _error_message(response: httpx.Response) -> str:
        try:
            payload = response.json()
        except ValueError:
            return response.text
        error = payload.get("error") if isinstance(payload, dict) else None
        if isinstance(error, dict) and error.get("message"):
            return error["message"]
        return response.text


def get_payment_gateway() -> PaymentGatewayClient:
    """Dependency con la pasarela configurada"""
    return PaymentGatewayClient.from_settings(settings)
