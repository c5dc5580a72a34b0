"""Conversión y redondeo de montos y cantidades."""
import math
import re
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any


_CARACTERES_NO_NUMERICOS = re.compile(r"[^0-9,.\-]")
_CENTAVOS = Decimal("0.01")


def to_number(valor: Any, fallback: float = 0.0) -> float:
    """
    Convierte un valor arbitrario en número finito.

    En strings se descarta todo excepto dígitos, ".", "," y "-". Si queda una
    coma, la coma es el separador decimal y los puntos son de miles
    ("1.234,56" -> 1234.56). Un "1,234" se interpreta como 1.234.

    Args:
        valor: Valor crudo (None, str, int, float, Decimal)
        fallback: Valor retornado cuando no se puede interpretar

    Returns:
        Número finito o fallback
    """
    if valor is None:
        return fallback

    if isinstance(valor, str):
        limpio = _CARACTERES_NO_NUMERICOS.sub("", valor)
        if "," in limpio:
            limpio = limpio.replace(".", "").replace(",", ".")
        try:
            numero = float(limpio)
        except ValueError:
            return fallback
    else:
        try:
            numero = float(valor)
        except (TypeError, ValueError, OverflowError):
            return fallback

    return numero if math.isfinite(numero) else fallback


def to_quantity(valor: Any, fallback: float = 0) -> int | float:
    """Cantidad: entera cuando el valor es entero."""
    numero = to_number(valor, fallback)
    return int(numero) if float(numero).is_integer() else numero


def round_money(valor: float) -> float:
    """Redondeo monetario a 2 decimales (mitad lejos de cero)."""
    if not math.isfinite(valor):
        return valor
    try:
        return float(Decimal(repr(float(valor))).quantize(_CENTAVOS, rounding=ROUND_HALF_UP))
    except InvalidOperation:
        return float(valor)


def round_half_up(valor: float) -> int:
    """Redondeo entero con .5 hacia arriba."""
    return math.floor(valor + 0.5)
