# dropee/utils/validation.py
import math
from enum import Enum
from typing import Any, Type

from ..logic.models import DeliveryFeeRequest, Urgency, WeatherCondition


class InvalidFeeRequest(ValueError):
    """Entrada inválida: vira 400 com a mensagem para o cliente corrigir."""


def _number(data: dict, key: str) -> float:
    value = data.get(key)
    # bool é subclasse de int, não aceitar true/false como número
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise InvalidFeeRequest(f"Invalid {key}")
    try:
        value = float(value)
    except OverflowError:
        # inteiro JSON maior que qualquer float
        raise InvalidFeeRequest(f"Invalid {key}")
    if not math.isfinite(value):
        raise InvalidFeeRequest(f"Invalid {key}")
    return value


def _choice(data: dict, key: str, enum_cls: Type[Enum], default: Enum) -> Any:
    value = data.get(key)
    if value is None:
        return default
    try:
        return enum_cls(value)
    except (ValueError, TypeError):
        raise InvalidFeeRequest(f"Invalid {key}")


def parse_fee_request(data) -> DeliveryFeeRequest:
    if not isinstance(data, dict):
        raise InvalidFeeRequest("Invalid request body")

    distance_km = _number(data, "distance_km")
    if distance_km < 0:
        raise InvalidFeeRequest("Invalid distance_km")

    weight_kg = _number(data, "weight_kg")
    if weight_kg <= 0:
        raise InvalidFeeRequest("Invalid weight_kg")

    is_fragile = data.get("is_fragile", False)
    if is_fragile is None:
        is_fragile = False
    if not isinstance(is_fragile, bool):
        raise InvalidFeeRequest("Invalid is_fragile")

    service_id = data.get("service_id")
    if service_id is not None and not isinstance(service_id, str):
        raise InvalidFeeRequest("Invalid service_id")
    # string vazia conta como ausente
    if service_id is not None:
        service_id = service_id.strip() or None

    return DeliveryFeeRequest(
        distance_km=distance_km,
        weight_kg=weight_kg,
        is_fragile=is_fragile,
        weather_condition=_choice(data, "weather_condition", WeatherCondition, WeatherCondition.CLEAR),
        urgency=_choice(data, "urgency", Urgency, Urgency.NORMAL),
        service_id=service_id,
    )
