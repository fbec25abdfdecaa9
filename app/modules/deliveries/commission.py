# app/modules/deliveries/commission.py
from decimal import Decimal, ROUND_HALF_UP
from typing import Optional, Union

Number = Union[Decimal, int, float, str]

def normalize_region(region: Optional[str]) -> str:
    return (region or "").strip().lower()

def is_same_region(sender_region: Optional[str], receiver_region: Optional[str]) -> bool:
    """Comparación sin distinguir mayúsculas ni espacios laterales"""
    return normalize_region(sender_region) == normalize_region(receiver_region)

def calculate_commission(
    cost: Number,
    sender_region: Optional[str],
    receiver_region: Optional[str],
    same_region_rate: Number = Decimal("0.30"),
    cross_region_rate: Number = Decimal("0.40")
) -> int:
    """
    Comisión del rider por un paquete entregado.

    30% del costo dentro de la misma región, 40% entre regiones,
    redondeado al entero más cercano (.5 hacia arriba).
    """
    rate = same_region_rate if is_same_region(sender_region, receiver_region) else cross_region_rate
    amount = Decimal(str(cost or 0)) * Decimal(str(rate))
    return int(amount.quantize(Decimal("1"), rounding=ROUND_HALF_UP))
